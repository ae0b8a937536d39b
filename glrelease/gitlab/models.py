from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime

from glrelease.core.structured import get_int, get_raw_str, get_str, get_table


@dataclass(frozen=True, slots=True)
class Project:
    id: int
    name_with_namespace: str


@dataclass(frozen=True, slots=True)
class Commit:
    id: str
    title: str
    committed_date: datetime | None = None

    @property
    def short_id(self) -> str:
        return self.id[:8]


@dataclass(frozen=True, slots=True)
class TagCommit:
    """The commit a tag points at, as embedded in tag listings."""

    id: str
    committed_date: datetime | None = None


@dataclass(frozen=True, slots=True)
class Tag:
    name: str
    commit: TagCommit | None = None


def parse_datetime(value: str | None) -> datetime | None:
    """Parse a GitLab ISO-8601 timestamp; None when absent or malformed."""
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def parse_project(data: Mapping[str, object]) -> Project | None:
    project_id = get_int(data, "id")
    if project_id is None:
        return None
    display = (
        get_str(data, "name_with_namespace")
        or get_str(data, "path_with_namespace")
        or str(project_id)
    )
    return Project(id=project_id, name_with_namespace=display)


def parse_commit(data: Mapping[str, object]) -> Commit | None:
    commit_id = get_str(data, "id")
    if commit_id is None:
        return None
    title = get_raw_str(data, "title")
    if title is None:
        # Some endpoints only carry the full message.
        message = get_raw_str(data, "message") or ""
        lines = message.splitlines()
        title = lines[0] if lines else ""
    return Commit(
        id=commit_id,
        title=title,
        committed_date=parse_datetime(get_str(data, "committed_date")),
    )


def parse_tag(data: Mapping[str, object]) -> Tag | None:
    name = get_raw_str(data, "name")
    if not name:
        return None

    commit: TagCommit | None = None
    commit_tbl = get_table(data, "commit")
    if commit_tbl is not None:
        commit_id = get_str(commit_tbl, "id")
        if commit_id is not None:
            commit = TagCommit(
                id=commit_id,
                committed_date=parse_datetime(get_str(commit_tbl, "committed_date")),
            )
    return Tag(name=name, commit=commit)
