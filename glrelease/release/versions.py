from __future__ import annotations

# Order matters only for which token matches first; the answer is the same.
PRE_RELEASE_INDICATORS: tuple[str, ...] = (
    "SNAPSHOT",
    "ALPHA",
    "BETA",
    "RC",
    "M",
    "BUILD_SNAPSHOT",
)


def is_pre_release(version: str) -> bool:
    """True if ``version`` contains a pre-release token anywhere, ignoring case.

    This is plain substring matching: "1.0.0-RC1" matches "RC", and so does
    any version with an "m" in it, such as "1.0.0-custom". Callers that need a
    stricter rule must not rely on this function.
    """
    upper = version.upper()
    return any(indicator in upper for indicator in PRE_RELEASE_INDICATORS)


def is_release_tag_name(name: str) -> bool:
    """True if the tag name does not end with a pre-release token.

    Unlike ``is_pre_release`` this only looks at the suffix, so
    "2.0.0-RC-based" counts as a release tag here.
    """
    upper = name.upper()
    return not any(upper.endswith(indicator) for indicator in PRE_RELEASE_INDICATORS)
