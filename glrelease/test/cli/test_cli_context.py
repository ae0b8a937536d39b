from __future__ import annotations

from pathlib import Path

from glrelease.cli.context import build_request, find_config_file, resolve_config
from glrelease.core.result import Err, Ok


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_find_config_prefers_dedicated_file(tmp_path: Path) -> None:
    _write(tmp_path / "pyproject.toml", "[project]\nname = 'x'\n")
    assert find_config_file(tmp_path) == tmp_path / "pyproject.toml"

    _write(tmp_path / "glrelease.toml", "[gitlab]\n")
    assert find_config_file(tmp_path) == tmp_path / "glrelease.toml"


def test_find_config_none(tmp_path: Path) -> None:
    assert find_config_file(tmp_path) is None


def test_precedence_file_env_overrides(tmp_path: Path) -> None:
    config_file = _write(
        tmp_path / "glrelease.toml",
        "\n".join(
            [
                "[gitlab]",
                'repository_name = "from-file"',
                'project_version = "1.0.0"',
                'access_token = "file-token"',
                'branch_name = "file-branch"',
            ]
        ),
    )

    result = resolve_config(
        config_path=None,
        cwd=tmp_path,
        environ={"GITLAB_ACCESS_TOKEN": "env-token", "GITLAB_BRANCH_NAME": "env-branch"},
        overrides={"branch_name": "flag-branch", "repository_name": None},
    )

    assert isinstance(result, Ok)
    config, path = result.value
    assert path == config_file
    assert config.repository_name == "from-file"
    assert config.access_token == "env-token"
    assert config.branch_name == "flag-branch"


def test_missing_required_is_incomplete(tmp_path: Path) -> None:
    result = resolve_config(config_path=None, cwd=tmp_path, environ={}, overrides={})

    assert isinstance(result, Err)
    assert result.error.incomplete is True
    assert "project_version" in result.error.message


def test_bad_explicit_file_is_not_incomplete(tmp_path: Path) -> None:
    result = resolve_config(
        config_path=tmp_path / "absent.toml", cwd=tmp_path, environ={}, overrides={}
    )

    assert isinstance(result, Err)
    assert result.error.incomplete is False


def test_build_request(tmp_path: Path) -> None:
    result = resolve_config(
        config_path=None,
        cwd=tmp_path,
        environ={},
        overrides={
            "project_version": "1.0.0",
            "repository_name": "repo",
            "scm_url": "https://gitlab.com/acme/repo",
            "pre_release_desired": True,
        },
    )
    assert isinstance(result, Ok)

    request = build_request(result.value[0])

    assert request.project_version == "1.0.0"
    assert request.repository_name == "repo"
    assert request.repository_namespace is None
    assert request.scm_url == "https://gitlab.com/acme/repo"
    assert request.branch_name is None
    assert request.pre_release_desired is True
