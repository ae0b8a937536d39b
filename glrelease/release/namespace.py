from __future__ import annotations


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def can_resolve_namespace(configured_namespace: str | None, scm_url: str | None) -> bool:
    """Whether there is anything to derive a namespace from."""
    return not _is_blank(configured_namespace) or not _is_blank(scm_url)


def resolve_namespace(
    configured_namespace: str | None,
    scm_url: str | None,
    host: str,
) -> str | None:
    """Return the GitLab namespace of the repository.

    A configured namespace is used verbatim. Otherwise it is the first path
    segment of ``scm_url`` once ``host`` is removed from it:
    ``"https://gitlab.com/group/repo"`` with host ``"https://gitlab.com"``
    gives ``"group"``.

    Returns None when neither input is usable or the URL has no path segment
    after the namespace.
    """
    if not _is_blank(configured_namespace):
        return configured_namespace
    if scm_url is None or _is_blank(scm_url):
        return None

    remainder = scm_url.replace(host, "") if host else scm_url
    if remainder.startswith("/"):
        remainder = remainder[1:]

    namespace, sep, _ = remainder.partition("/")
    if not sep or not namespace:
        return None
    return namespace
