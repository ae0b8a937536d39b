"""Typed configuration loading.

Configuration comes from three layers, lowest precedence first:

- a TOML file: either a dedicated file with a ``[gitlab]`` table, or a
  ``pyproject.toml`` with a ``[tool.glrelease]`` table (its ``[project]``
  name, version and URLs fill in repository name, version and SCM URL)
- environment variables (``GITLAB_HOST``, ``GITLAB_ACCESS_TOKEN``,
  ``GITLAB_BRANCH_NAME``)
- explicit overrides, usually CLI flags
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_float, get_str, get_table

__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_TIMEOUT_SECONDS",
    "ENV_ACCESS_TOKEN",
    "ENV_BRANCH_NAME",
    "ENV_HOST",
    "ConfigError",
    "ReleaseConfig",
    "apply_env",
    "load_config",
]

DEFAULT_HOST = "https://gitlab.com"
DEFAULT_TIMEOUT_SECONDS = 30.0

ENV_HOST = "GITLAB_HOST"
ENV_ACCESS_TOKEN = "GITLAB_ACCESS_TOKEN"
ENV_BRANCH_NAME = "GITLAB_BRANCH_NAME"

_TOOL_TABLE = "glrelease"
_FILE_TABLE = "gitlab"
# [project.urls] keys tried in order for the SCM URL, compared case-insensitively.
_SCM_URL_KEYS = ("repository", "source", "source code", "homepage")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or is incomplete."""

    message: str
    path: Path | None = None
    # True when the file was fine but required options are still unset.
    incomplete: bool = False


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Every option the release command recognizes."""

    host: str = DEFAULT_HOST
    access_token: str | None = None
    repository_namespace: str | None = None
    scm_url: str | None = None
    repository_name: str | None = None
    project_version: str | None = None
    pre_release_desired: bool = False
    branch_name: str | None = None
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ReleaseConfig:
        """Create config from an options table (``[gitlab]`` or ``[tool.glrelease]``)."""
        timeout = get_float(data, "timeout")
        return cls(
            host=get_str(data, "host") or DEFAULT_HOST,
            access_token=get_str(data, "access_token"),
            repository_namespace=get_str(data, "repository_namespace"),
            scm_url=get_str(data, "scm_url"),
            repository_name=get_str(data, "repository_name"),
            project_version=get_str(data, "project_version"),
            pre_release_desired=get_bool(data, "pre_release_desired") or False,
            branch_name=get_str(data, "branch_name"),
            timeout=DEFAULT_TIMEOUT_SECONDS if timeout is None else timeout,
        )

    @classmethod
    def from_pyproject(cls, data: Mapping[str, object]) -> ReleaseConfig:
        """Create config from a parsed ``pyproject.toml``.

        Explicit ``[tool.glrelease]`` values win over ``[project]`` metadata.
        """
        tool: StrDict = get_table(data, "tool") or {}
        options = cls.from_dict(get_table(tool, _TOOL_TABLE) or {})

        project: StrDict = get_table(data, "project") or {}
        return replace(
            options,
            repository_name=options.repository_name or get_str(project, "name"),
            project_version=options.project_version or get_str(project, "version"),
            scm_url=options.scm_url or _scm_url_from_project(project),
        )

    def merged(self, **overrides: object) -> ReleaseConfig:
        """Return a copy with every non-None override applied."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"unknown config option(s): {', '.join(sorted(unknown))}")
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)

    def missing_required(self) -> tuple[str, ...]:
        """Names of required options that are still unset."""
        missing: list[str] = []
        if not self.project_version:
            missing.append("project_version")
        if not self.repository_name:
            missing.append("repository_name")
        return tuple(missing)


def _scm_url_from_project(project: Mapping[str, object]) -> str | None:
    urls = get_table(project, "urls")
    if urls is None:
        return None
    lowered = {k.lower(): k for k in urls}
    for key in _SCM_URL_KEYS:
        actual = lowered.get(key)
        if actual is None:
            continue
        value = get_str(urls, actual)
        if value:
            return value
    return None


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[ReleaseConfig, ConfigError]:
    """Load configuration from a TOML file.

    A file named ``pyproject.toml`` is read as project metadata plus the
    ``[tool.glrelease]`` table; any other file is read from its ``[gitlab]``
    table.

    Args:
        path: Path to the TOML file

    Returns:
        Ok(ReleaseConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    data = result.value
    if path.name == "pyproject.toml":
        return Ok(ReleaseConfig.from_pyproject(data))

    table = data.get(_FILE_TABLE)
    if table is None:
        return Ok(ReleaseConfig())
    options = as_str_dict(table)
    if options is None:
        return Err(ConfigError(f"[{_FILE_TABLE}] must be a table", path=path))
    return Ok(ReleaseConfig.from_dict(options))


def apply_env(config: ReleaseConfig, environ: Mapping[str, str]) -> ReleaseConfig:
    """Overlay environment variables on ``config``; blank values are ignored."""
    return config.merged(
        host=(environ.get(ENV_HOST) or "").strip() or None,
        access_token=(environ.get(ENV_ACCESS_TOKEN) or "").strip() or None,
        branch_name=(environ.get(ENV_BRANCH_NAME) or "").strip() or None,
    )
