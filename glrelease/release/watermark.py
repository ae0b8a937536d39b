from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from glrelease.gitlab.models import Tag
from glrelease.release.versions import is_release_tag_name


def find_last_release_tag(tags: Sequence[Tag]) -> Tag | None:
    """First release tag in listing order.

    GitLab lists tags most recently updated first, so this is the latest
    release. The list is deliberately not re-sorted here.
    """
    for tag in tags:
        if is_release_tag_name(tag.name):
            return tag
    return None


def format_since(moment: datetime) -> str:
    """ISO-8601 local date-time in UTC without offset, e.g. ``2018-10-23T21:18:30``."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(UTC).replace(tzinfo=None)
    return moment.isoformat(timespec="seconds")


def resolve_watermark(tags: Sequence[Tag]) -> str | None:
    """Commit date of the last release tag, ready for the ``since`` filter.

    None means no prior release: the whole branch history is used.
    """
    tag = find_last_release_tag(tags)
    if tag is None or tag.commit is None or tag.commit.committed_date is None:
        return None
    return format_since(tag.commit.committed_date)
