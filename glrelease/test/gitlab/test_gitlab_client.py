"""Tests for glrelease.gitlab.client against MockHttpClient."""

from __future__ import annotations

from glrelease.core.result import Err, Ok
from glrelease.gitlab.client import DEFAULT_PAGE_SIZE, GitlabClient, commits_query, connect
from glrelease.gitlab.http import HttpError, MockHttpClient, RealHttpClient
from glrelease.gitlab.models import Project

HOST = "https://gitlab.example.com"
API = f"{HOST}/api/v4"
PROJECT = Project(id=1, name_with_namespace="REPOSITORY_NAMESPACE / REPOSITORY_NAME")


def _client() -> tuple[GitlabClient, MockHttpClient]:
    http = MockHttpClient()
    return GitlabClient(HOST, http), http


class TestCommitsQuery:
    def test_branch_only(self) -> None:
        assert commits_query("master", None) == "ref_name=master"

    def test_since_is_url_encoded(self) -> None:
        assert (
            commits_query("master", "2018-10-23T21:18:30")
            == "ref_name=master&since=2018-10-23T21%3A18%3A30"
        )

    def test_branch_with_slash(self) -> None:
        assert commits_query("release/1.x", None) == "ref_name=release%2F1.x"


class TestGetProject:
    def test_path_is_url_encoded(self) -> None:
        client, http = _client()
        http.set_json(
            f"{API}/projects/REPOSITORY_NAMESPACE%2FREPOSITORY_NAME",
            {"id": 1, "name_with_namespace": "REPOSITORY_NAMESPACE / REPOSITORY_NAME"},
        )

        result = client.get_project("REPOSITORY_NAMESPACE", "REPOSITORY_NAME")

        assert result == Ok(PROJECT)

    def test_not_found(self) -> None:
        client, _ = _client()
        result = client.get_project("ns", "missing")
        assert isinstance(result, Err)
        assert result.error.status == 404

    def test_unexpected_payload(self) -> None:
        client, http = _client()
        http.set_json(f"{API}/projects/ns%2Frepo", ["not", "a", "project"])

        result = client.get_project("ns", "repo")

        assert isinstance(result, Err)
        assert result.error.message == "unexpected project payload"


class TestGetTags:
    def test_parses_tags_and_skips_garbage(self) -> None:
        client, http = _client()
        http.set_json(
            f"{API}/projects/1/repository/tags",
            [{"name": "1.0.0", "commit": {"id": "abc"}}, "garbage", {"nameless": True}],
        )

        result = client.get_tags(PROJECT)

        assert isinstance(result, Ok)
        assert [t.name for t in result.value] == ["1.0.0"]

    def test_follows_full_pages(self) -> None:
        client, http = _client()
        url = f"{API}/projects/1/repository/tags"
        http.set_json(url, [{"name": f"1.0.{i}"} for i in range(DEFAULT_PAGE_SIZE)])
        http.set_json(f"{url}?page=2", [{"name": "0.9.0"}])

        result = client.get_tags(PROJECT)

        assert isinstance(result, Ok)
        assert len(result.value) == DEFAULT_PAGE_SIZE + 1
        assert result.value[-1].name == "0.9.0"
        assert http.calls == [("GET", url), ("GET", f"{url}?page=2")]

    def test_stops_when_page_param_is_ignored(self) -> None:
        client, http = _client()
        url = f"{API}/projects/1/repository/tags"
        full_page = [{"name": f"1.0.{i}"} for i in range(DEFAULT_PAGE_SIZE)]
        http.set_json(url, full_page)
        http.set_json(f"{url}?page=2", full_page)

        result = client.get_tags(PROJECT)

        assert isinstance(result, Ok)
        assert len(result.value) == DEFAULT_PAGE_SIZE
        assert http.calls == [("GET", url), ("GET", f"{url}?page=2")]

    def test_non_array_is_err(self) -> None:
        client, http = _client()
        http.set_json(f"{API}/projects/1/repository/tags", {"message": "nope"})

        result = client.get_tags(PROJECT)

        assert isinstance(result, Err)
        assert result.error.message == "expected a JSON array"


class TestListCommits:
    def test_single_page_query_shape(self) -> None:
        client, http = _client()
        url = f"{API}/projects/1/repository/commits?ref_name=master&since=2018-10-23T21%3A18%3A30"
        http.set_json(url, [{"id": "A", "title": "newest"}, {"id": "B", "title": "boundary"}])

        result = client.list_commits(1, "master", "2018-10-23T21:18:30")

        assert isinstance(result, Ok)
        assert [c.id for c in result.value] == ["A", "B"]
        assert http.calls == [("GET", url)]

    def test_second_page_appends_page_param(self) -> None:
        client, http = _client()
        url = f"{API}/projects/1/repository/commits?ref_name=master"
        http.set_json(url, [{"id": str(i), "title": "t"} for i in range(DEFAULT_PAGE_SIZE)])
        http.set_json(f"{url}&page=2", [])

        result = client.list_commits(1, "master", None)

        assert isinstance(result, Ok)
        assert len(result.value) == DEFAULT_PAGE_SIZE
        assert http.calls[-1] == ("GET", f"{url}&page=2")


class TestCreateTag:
    def test_posts_form(self) -> None:
        client, http = _client()
        url = f"{API}/projects/1/repository/tags"
        http.set_post(url, {"name": "1.0.0-RELEASE", "commit": {"id": "COMMIT_REF"}})

        result = client.create_tag(PROJECT, "1.0.0-RELEASE", "COMMIT_REF", "", "* note\n")

        assert isinstance(result, Ok)
        assert result.value.name == "1.0.0-RELEASE"
        assert http.posted == [
            (url, {"tag_name": "1.0.0-RELEASE", "ref": "COMMIT_REF", "message": "* note\n"})
        ]

    def test_sends_release_description_when_given(self) -> None:
        client, http = _client()
        url = f"{API}/projects/1/repository/tags"
        http.set_post(url, {"name": "1.0.0"})

        client.create_tag(PROJECT, "1.0.0", "abc", "Release 1.0.0", "")

        assert http.posted[0][1]["release_description"] == "Release 1.0.0"

    def test_rejected(self) -> None:
        client, http = _client()
        url = f"{API}/projects/1/repository/tags"
        http.set_post(url, HttpError(url=url, status=400, message="Tag 1.0.0 already exists"))

        result = client.create_tag(PROJECT, "1.0.0", "abc", "", "")

        assert isinstance(result, Err)
        assert result.error.status == 400


def test_connect_is_lazy() -> None:
    client = connect(HOST, "token")
    assert client.host == HOST
    assert isinstance(client._http, RealHttpClient)  # pyright: ignore[reportPrivateUsage]


def test_connect_with_injected_http() -> None:
    http = MockHttpClient()
    client = connect(f"{HOST}/", None, http=http)
    http.set_json(f"{API}/projects/1/repository/tags", [])

    assert client.get_tags(PROJECT) == Ok([])
