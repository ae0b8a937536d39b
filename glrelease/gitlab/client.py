"""GitLab REST v4 client for the calls the release flow makes.

All methods return ``Result[..., HttpError]``; a payload that does not have
the expected shape is reported as an ``HttpError`` with status 0.
"""

from __future__ import annotations

import urllib.parse
from collections.abc import Callable
from typing import TypeVar

from glrelease.core.result import Err, Ok, Result
from glrelease.core.structured import as_obj_list, as_str_dict
from glrelease.gitlab.http import HttpClient, HttpError, RealHttpClient
from glrelease.gitlab.models import (
    Commit,
    Project,
    Tag,
    parse_commit,
    parse_project,
    parse_tag,
)

__all__ = ["API_PREFIX", "DEFAULT_PAGE_SIZE", "GitlabClient", "commits_query", "connect"]

API_PREFIX = "/api/v4"
# GitLab's page size when the request does not set per_page.
DEFAULT_PAGE_SIZE = 20

T = TypeVar("T")


def commits_query(branch: str, since: str | None) -> str:
    """Query string for the branch commit listing.

    >>> commits_query("master", "2018-10-23T21:18:30")
    'ref_name=master&since=2018-10-23T21%3A18%3A30'
    """
    params = [("ref_name", branch)]
    if since is not None:
        params.append(("since", since))
    return urllib.parse.urlencode(params)


class GitlabClient:
    """Thin typed wrapper over the GitLab REST API."""

    def __init__(self, host: str, http: HttpClient) -> None:
        self.host = host
        self._http = http
        self._base = host.rstrip("/") + API_PREFIX

    def _url(self, path: str) -> str:
        return f"{self._base}{path}"

    def _get_all(self, url: str) -> Result[list[object], HttpError]:
        # Follow pages while they come back full; page 1 is requested as-is.
        items: list[object] = []
        previous: list[object] | None = None
        page = 1
        while True:
            page_url = url if page == 1 else f"{url}{'&' if '?' in url else '?'}page={page}"
            result = self._http.get_json(page_url)
            if isinstance(result, Err):
                return result
            chunk = as_obj_list(result.value)
            if chunk is None:
                return Err(HttpError(url=page_url, status=0, message="expected a JSON array"))
            # A server that ignores ``page`` keeps answering with the same page.
            if chunk == previous:
                return Ok(items)
            previous = chunk
            items.extend(chunk)
            if len(chunk) < DEFAULT_PAGE_SIZE:
                return Ok(items)
            page += 1

    def get_project(self, namespace: str, name: str) -> Result[Project, HttpError]:
        path = urllib.parse.quote(f"{namespace}/{name}", safe="")
        url = self._url(f"/projects/{path}")
        result = self._http.get_json(url)
        if isinstance(result, Err):
            return result

        data = as_str_dict(result.value)
        project = parse_project(data) if data is not None else None
        if project is None:
            return Err(HttpError(url=url, status=0, message="unexpected project payload"))
        return Ok(project)

    def get_tags(self, project: Project) -> Result[list[Tag], HttpError]:
        url = self._url(f"/projects/{project.id}/repository/tags")
        return self._get_list(url, parse_tag)

    def list_commits(
        self,
        project_id: int,
        branch: str,
        since: str | None,
    ) -> Result[list[Commit], HttpError]:
        url = self._url(f"/projects/{project_id}/repository/commits?{commits_query(branch, since)}")
        return self._get_list(url, parse_commit)

    def create_tag(
        self,
        project: Project,
        tag_name: str,
        ref: str,
        release_description: str,
        message: str,
    ) -> Result[Tag, HttpError]:
        url = self._url(f"/projects/{project.id}/repository/tags")
        form = {"tag_name": tag_name, "ref": ref, "message": message}
        # GitLab rejects an empty release description, so only send a real one.
        if release_description:
            form["release_description"] = release_description
        result = self._http.post_json(url, form)
        if isinstance(result, Err):
            return result

        data = as_str_dict(result.value)
        tag = parse_tag(data) if data is not None else None
        if tag is None:
            return Err(HttpError(url=url, status=0, message="unexpected tag payload"))
        return Ok(tag)

    def _get_list(
        self,
        url: str,
        parse: Callable[[dict[str, object]], T | None],
    ) -> Result[list[T], HttpError]:
        result = self._get_all(url)
        if isinstance(result, Err):
            return result

        out: list[T] = []
        for item in result.value:
            d = as_str_dict(item)
            if d is None:
                continue
            parsed = parse(d)
            if parsed is not None:
                out.append(parsed)
        return Ok(out)


def connect(
    host: str,
    token: str | None,
    *,
    http: HttpClient | None = None,
    timeout: float = 30.0,
) -> GitlabClient:
    """Create a client for ``host``.

    Nothing is sent here: bad credentials show up as failures of the first
    real call.
    """
    return GitlabClient(host, http or RealHttpClient(token, timeout=timeout))
