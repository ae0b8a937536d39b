from __future__ import annotations

from glrelease.core.result import Err, Ok, Result
from glrelease.gitlab.models import Commit
from glrelease.output.console import ConsoleProtocol
from glrelease.release.contracts import TagRepository
from glrelease.release.errors import ReleaseError

RESOLVE_COMMITS_FAILED = "Failed to resolve latest commit"


def trim_boundary_commit(commits: list[Commit], since: str | None) -> list[Commit]:
    """Drop the oldest commit when it is the one the last release was cut from.

    GitLab's ``since`` filter includes the boundary commit. A single commit is
    kept so the release is never empty.
    """
    if since is not None and len(commits) > 1:
        return commits[:-1]
    return commits


def resolve_commits(
    repo: TagRepository,
    project_id: int,
    branch: str,
    since: str | None,
    *,
    console: ConsoleProtocol,
) -> Result[list[Commit], ReleaseError]:
    """Commits on ``branch`` since the last release, newest first.

    The first element is the commit the new tag points at.
    """
    console.info(f"Resolving latest commits on {branch}...")
    listed = repo.list_commits(project_id, branch, since)
    if isinstance(listed, Err):
        return Err(
            ReleaseError(
                kind="commits_unresolved",
                message=RESOLVE_COMMITS_FAILED,
                cause=listed.error,
            )
        )

    commits = trim_boundary_commit(listed.value, since)
    if not commits:
        return Err(
            ReleaseError(
                kind="commits_unresolved",
                message=RESOLVE_COMMITS_FAILED,
                hint=f"no commits found on branch '{branch}'",
            )
        )

    console.info(f"Resolved latest commits on {branch}")
    return Ok(commits)
