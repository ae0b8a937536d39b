"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import NoReturn

import typer

from glrelease.core.errors import ErrorCode
from glrelease.release.errors import ReleaseErrorKind


def exit_with_code(code: ErrorCode) -> NoReturn:
    raise typer.Exit(code=int(code))


def release_error_code(kind: ReleaseErrorKind) -> ErrorCode:
    if kind in {"project_unresolved", "commits_unresolved", "tag_failed"}:
        return ErrorCode.NETWORK_ERROR
    return ErrorCode.USER_ERROR
