"""End-to-end release flow.

States, in order: namespace resolved -> connected -> project resolved ->
tags checked -> skipped or tagged. Each network step either yields the value
the next step needs or ends the run with a ``ReleaseError``; nothing is
cached between runs.

Two concurrent runs for the same version can both pass the tag check before
either creates the tag. GitLab refuses the second ``create_tag`` (duplicate
name), which surfaces here as "Failed to add tag".
"""

from __future__ import annotations

from collections.abc import Sequence

from glrelease.core.result import Err, Ok, Result
from glrelease.gitlab.models import Project, Tag
from glrelease.output.console import ConsoleProtocol, Style
from glrelease.release.commits import resolve_commits
from glrelease.release.contracts import Connector, ReleaseOutcome, ReleaseRequest, TagRepository
from glrelease.release.errors import ReleaseError
from glrelease.release.namespace import can_resolve_namespace, resolve_namespace
from glrelease.release.notes import compose_note
from glrelease.release.versions import is_pre_release
from glrelease.release.watermark import resolve_watermark

DEFAULT_BRANCH = "master"

RESOLVE_PROJECT_FAILED = "Failed to resolve project"
ADD_TAG_FAILED = "Failed to add tag"
NO_NAMESPACE_WARNING = (
    "GitLab repository namespace not found -> "
    "define 'scm_url' or 'repository_namespace' in your configuration."
)


def tag_exists(tags: Sequence[Tag], version: str) -> bool:
    """Exact, case-sensitive match of a tag name against the version."""
    return any(tag.name == version for tag in tags)


def _fail(error: ReleaseError, console: ConsoleProtocol) -> Err[ReleaseError]:
    console.error(error.pretty())
    return Err(error)


def _resolve_branch(branch_name: str | None, console: ConsoleProtocol) -> str:
    if branch_name is None or not branch_name.strip():
        console.info(f"Using branch '{DEFAULT_BRANCH}' as default")
        return DEFAULT_BRANCH
    return branch_name


def _resolve_project(
    repo: TagRepository,
    namespace: str,
    name: str,
    console: ConsoleProtocol,
) -> Result[tuple[Project, list[Tag]], ReleaseError]:
    console.info("Resolving repository...")
    project = repo.get_project(namespace, name)
    if isinstance(project, Err):
        return _fail(
            ReleaseError(
                kind="project_unresolved",
                message=RESOLVE_PROJECT_FAILED,
                hint=f"{namespace}/{name}",
                cause=project.error,
            ),
            console,
        )
    console.info(f"Resolved repository: {project.value.name_with_namespace}")

    tags = repo.get_tags(project.value)
    if isinstance(tags, Err):
        return _fail(
            ReleaseError(
                kind="project_unresolved",
                message=RESOLVE_PROJECT_FAILED,
                hint="could not list tags",
                cause=tags.error,
            ),
            console,
        )
    return Ok((project.value, tags.value))


def run_release(
    request: ReleaseRequest,
    *,
    host: str,
    access_token: str | None,
    connect: Connector,
    console: ConsoleProtocol,
) -> Result[ReleaseOutcome, ReleaseError]:
    """Create the release tag for ``request.project_version`` if it is due.

    Skips (no namespace source, pre-release version, tag already present) are
    ``Ok`` outcomes. ``connect`` is only called once the run is known to need
    GitLab.
    """
    version = request.project_version
    if not version.strip():
        return _fail(
            ReleaseError(kind="invalid_input", message="project version must not be empty"),
            console,
        )

    if not can_resolve_namespace(request.repository_namespace, request.scm_url):
        console.warning(NO_NAMESPACE_WARNING)
        return Ok(ReleaseOutcome(status="skipped_no_namespace"))

    branch = _resolve_branch(request.branch_name, console)

    if is_pre_release(version) and not request.pre_release_desired:
        console.info(f"Don't add new tag for a pre-release: {version}")
        return Ok(ReleaseOutcome(status="skipped_pre_release", branch=branch))

    namespace = resolve_namespace(request.repository_namespace, request.scm_url, host)
    if namespace is None:
        console.warning(f"No namespace segment in scm_url '{request.scm_url}' for host '{host}'")
        console.warning(NO_NAMESPACE_WARNING)
        return Ok(ReleaseOutcome(status="skipped_no_namespace", branch=branch))
    if namespace != request.repository_namespace:
        console.info(f"Resolved namespace: {namespace}")

    console.info("Connecting to gitlab...")
    repo = connect(host, access_token)
    console.info(f"Connected to gitlab: {repo.host}")

    resolved = _resolve_project(repo, namespace, request.repository_name, console)
    if isinstance(resolved, Err):
        return resolved
    project, tags = resolved.value

    if tag_exists(tags, version):
        console.info(f"Tag already exists for version: {version}")
        return Ok(ReleaseOutcome(status="skipped_tag_exists", namespace=namespace, branch=branch))

    since = resolve_watermark(tags)
    if since is not None:
        console.print(f"Last release commit date: {since}", Style.DIM)

    commits = resolve_commits(repo, project.id, branch, since, console=console)
    if isinstance(commits, Err):
        return _fail(commits.error, console)

    head = commits.value[0]
    note = compose_note(commits.value)

    console.info("Adding tag...")
    created = repo.create_tag(project, version, head.id, "", note)
    if isinstance(created, Err):
        return _fail(
            ReleaseError(
                kind="tag_failed",
                message=ADD_TAG_FAILED,
                hint=f"{version} -> {head.short_id}",
                cause=created.error,
            ),
            console,
        )

    console.success(f"Added tag: {created.value.name}")
    return Ok(
        ReleaseOutcome(
            status="tagged",
            tag_name=created.value.name,
            commit_id=head.id,
            note=note,
            namespace=namespace,
            branch=branch,
        )
    )
