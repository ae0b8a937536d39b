from __future__ import annotations

from glrelease.release.namespace import can_resolve_namespace, resolve_namespace


def test_configured_namespace_is_verbatim() -> None:
    assert resolve_namespace("Group/Sub", "HOST/NS/REPO", "HOST") == "Group/Sub"


def test_namespace_from_scm_url() -> None:
    assert resolve_namespace(None, "HOST/NS/REPO", "HOST") == "NS"


def test_blank_configured_namespace_falls_back_to_url() -> None:
    assert resolve_namespace("  ", "https://gitlab.com/acme/widget", "https://gitlab.com") == "acme"


def test_url_without_leading_slash_after_host() -> None:
    assert resolve_namespace(None, "NS/REPO", "https://gitlab.com") == "NS"


def test_url_with_nested_groups_takes_first_segment() -> None:
    url = "https://gitlab.com/acme/tools/widget"
    assert resolve_namespace(None, url, "https://gitlab.com") == "acme"


def test_unusable_inputs() -> None:
    assert resolve_namespace(None, None, "HOST") is None
    assert resolve_namespace("", "", "HOST") is None
    # Nothing after the namespace segment.
    assert resolve_namespace(None, "HOST/NS", "HOST") is None


def test_can_resolve() -> None:
    assert can_resolve_namespace("ns", None) is True
    assert can_resolve_namespace(None, "HOST/NS/REPO") is True
    assert can_resolve_namespace(" ", None) is False
    assert can_resolve_namespace(None, None) is False
