from __future__ import annotations

import pytest

from glrelease.release.versions import PRE_RELEASE_INDICATORS, is_pre_release, is_release_tag_name


@pytest.mark.parametrize(
    "version",
    [
        "1.0.0-SNAPSHOT",
        "1.0.0-alpha",
        "1.0.0-Beta2",
        "1.0.0-RC1",
        "1.0.0-M1",
        "1.0.0.BUILD-SNAPSHOT",
        "1.0.0-BUILD_SNAPSHOT",
    ],
)
def test_pre_release_versions(version: str) -> None:
    assert is_pre_release(version) is True


@pytest.mark.parametrize("version", ["1.0.0-RELEASE", "2.3.4", "1.0.0-FINAL"])
def test_release_versions(version: str) -> None:
    assert is_pre_release(version) is False


def test_containment_matches_any_m() -> None:
    # Substring matching: an "m" anywhere marks a pre-release.
    assert is_pre_release("1.0.0-custom") is True
    assert is_pre_release("2.0.0-RC-based") is True


def test_indicator_order() -> None:
    assert PRE_RELEASE_INDICATORS == ("SNAPSHOT", "ALPHA", "BETA", "RC", "M", "BUILD_SNAPSHOT")


class TestReleaseTagName:
    def test_suffix_only(self) -> None:
        assert is_release_tag_name("2.0.0-RC-based") is True
        assert is_release_tag_name("1.0.0-RELEASE") is True
        assert is_release_tag_name("1.0.0") is True

    @pytest.mark.parametrize("name", ["1.0.0-SNAPSHOT", "1.0.0-rc", "1.0.0-beta", "0.1.0-M"])
    def test_pre_release_suffix(self, name: str) -> None:
        assert is_release_tag_name(name) is False

    def test_differs_from_containment(self) -> None:
        assert is_pre_release("1.0.0-RC1") is True
        assert is_release_tag_name("1.0.0-RC1") is True
