from __future__ import annotations

import os
from pathlib import Path

import typer

from glrelease.cli.commands._helpers import exit_with_code, release_error_code
from glrelease.cli.context import CLIContext, build_request, resolve_config
from glrelease.core.errors import ErrorCode
from glrelease.core.result import Err
from glrelease.gitlab.client import connect
from glrelease.output.console import ConsoleProtocol, RichConsole, Style
from glrelease.release.contracts import TagRepository
from glrelease.release.orchestrator import run_release


def _make_console() -> ConsoleProtocol:
    return RichConsole()


def _build_context(config_path: Path | None, overrides: dict[str, object]) -> CLIContext:
    console = _make_console()
    resolved = resolve_config(
        config_path=config_path,
        cwd=Path.cwd(),
        environ=os.environ,
        overrides=overrides,
    )
    if isinstance(resolved, Err):
        error = resolved.error
        console.error(error.message)
        if error.path is not None:
            console.print(f"config: {error.path}", Style.DIM)
        exit_with_code(ErrorCode.USER_ERROR if error.incomplete else ErrorCode.CONFIG_ERROR)

    config, path = resolved.value
    return CLIContext(config=config, config_path=path, console=console)


def release(
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="TOML config file (default: ./glrelease.toml or ./pyproject.toml).",
    ),
    host: str | None = typer.Option(None, "--host", help="GitLab base URL."),
    token: str | None = typer.Option(
        None, "--token", help="GitLab access token (default: $GITLAB_ACCESS_TOKEN)."
    ),
    namespace: str | None = typer.Option(
        None, "--namespace", help="Repository namespace (default: derived from --scm-url)."
    ),
    scm_url: str | None = typer.Option(None, "--scm-url", help="Repository URL."),
    name: str | None = typer.Option(None, "--name", help="Repository name."),
    project_version: str | None = typer.Option(
        None, "--project-version", help="Version to tag."
    ),
    branch: str | None = typer.Option(
        None, "--branch", help="Branch to tag (default: $GITLAB_BRANCH_NAME or master)."
    ),
    pre_release_desired: bool = typer.Option(
        False,
        "--pre-release-desired",
        help="Tag pre-release versions too.",
    ),
    timeout: float | None = typer.Option(None, "--timeout", help="HTTP timeout in seconds."),
) -> None:
    """Create a release tag with a changelog of commits since the last release."""
    ctx = _build_context(
        config_path,
        {
            "host": host,
            "access_token": token,
            "repository_namespace": namespace,
            "scm_url": scm_url,
            "repository_name": name,
            "project_version": project_version,
            "branch_name": branch,
            # Only an explicit flag overrides the config file.
            "pre_release_desired": True if pre_release_desired else None,
            "timeout": timeout,
        },
    )
    cfg = ctx.config
    if ctx.config_path is not None:
        ctx.console.print(f"config: {ctx.config_path}", Style.DIM)

    def connector(host_url: str, access_token: str | None) -> TagRepository:
        return connect(host_url, access_token, timeout=cfg.timeout)

    result = run_release(
        build_request(cfg),
        host=cfg.host,
        access_token=cfg.access_token,
        connect=connector,
        console=ctx.console,
    )
    if isinstance(result, Err):
        exit_with_code(release_error_code(result.error.kind))
