from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from glrelease.core.config import ConfigError, ReleaseConfig, apply_env, load_config
from glrelease.core.result import Err, Ok, Result
from glrelease.output.console import ConsoleProtocol
from glrelease.release.contracts import ReleaseRequest

# Looked up in the working directory when --config is not given.
DEFAULT_CONFIG_FILES = ("glrelease.toml", "pyproject.toml")


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: ReleaseConfig
    config_path: Path | None
    console: ConsoleProtocol


def find_config_file(cwd: Path) -> Path | None:
    for name in DEFAULT_CONFIG_FILES:
        candidate = cwd / name
        if candidate.is_file():
            return candidate
    return None


def resolve_config(
    *,
    config_path: Path | None,
    cwd: Path,
    environ: Mapping[str, str],
    overrides: Mapping[str, object],
) -> Result[tuple[ReleaseConfig, Path | None], ConfigError]:
    """File, then environment, then explicit overrides."""
    path = config_path if config_path is not None else find_config_file(cwd)

    config = ReleaseConfig()
    if path is not None:
        loaded = load_config(path)
        if isinstance(loaded, Err):
            return loaded
        config = loaded.value

    config = apply_env(config, environ)
    config = config.merged(**overrides)

    missing = config.missing_required()
    if missing:
        return Err(
            ConfigError(
                f"missing required option(s): {', '.join(missing)}",
                path=path,
                incomplete=True,
            )
        )
    return Ok((config, path))


def build_request(config: ReleaseConfig) -> ReleaseRequest:
    # missing_required() has been checked by resolve_config.
    return ReleaseRequest(
        project_version=config.project_version or "",
        repository_name=config.repository_name or "",
        repository_namespace=config.repository_namespace,
        scm_url=config.scm_url,
        branch_name=config.branch_name,
        pre_release_desired=config.pre_release_desired,
    )
