"""Error type for the release flow."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from glrelease.gitlab.http import HttpError

ReleaseErrorKind = Literal[
    "invalid_input",
    "project_unresolved",
    "commits_unresolved",
    "tag_failed",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """The single failure a release run can end with.

    ``message`` is fixed per stage ("Failed to resolve project", ...);
    ``cause`` keeps the transport error that triggered it, if any.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None
    cause: HttpError | None = None

    def pretty(self) -> str:
        text = self.message
        if self.cause is not None:
            text = f"{text}: {self.cause}"
        if self.hint:
            text = f"{text} (hint: {self.hint})"
        return text
