"""Inputs, outputs and the hosting-API seam of the release flow."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal, Protocol

from glrelease.core.result import Result
from glrelease.gitlab.http import HttpError
from glrelease.gitlab.models import Commit, Project, Tag

ReleaseStatus = Literal[
    "tagged",
    "skipped_no_namespace",
    "skipped_pre_release",
    "skipped_tag_exists",
]


@dataclass(frozen=True, slots=True)
class ReleaseRequest:
    """What to release, independent of where the values came from."""

    project_version: str
    repository_name: str
    repository_namespace: str | None = None
    scm_url: str | None = None
    branch_name: str | None = None
    pre_release_desired: bool = False


@dataclass(frozen=True, slots=True)
class ReleaseOutcome:
    """How a run ended when it did not fail."""

    status: ReleaseStatus
    tag_name: str | None = None
    commit_id: str | None = None
    note: str | None = None
    namespace: str | None = None
    branch: str | None = None


class TagRepository(Protocol):
    """Read tags and commits of a project; create a tag.

    ``GitlabClient`` is the production implementation.
    """

    host: str

    def get_project(self, namespace: str, name: str) -> Result[Project, HttpError]: ...

    def get_tags(self, project: Project) -> Result[list[Tag], HttpError]: ...

    def list_commits(
        self,
        project_id: int,
        branch: str,
        since: str | None,
    ) -> Result[list[Commit], HttpError]: ...

    def create_tag(
        self,
        project: Project,
        tag_name: str,
        ref: str,
        release_description: str,
        message: str,
    ) -> Result[Tag, HttpError]: ...


# (host, access_token) -> repository; must not perform I/O.
Connector = Callable[[str, str | None], TagRepository]
