from __future__ import annotations

from collections.abc import Iterable

from glrelease.gitlab.models import Commit

MERGE_COMMIT_PREFIX = "Merge branch"


def compose_note(commits: Iterable[Commit]) -> str:
    """Render the tag message: one ``* <title> (<id>)`` line per commit.

    Merge commits are left out and the input order is kept. No remaining
    commits gives an empty string.
    """
    lines: list[str] = []
    for commit in commits:
        if commit.title.startswith(MERGE_COMMIT_PREFIX):
            continue
        lines.append(f"* {commit.title} ({commit.id})\n")
    return "".join(lines)
