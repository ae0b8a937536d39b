"""Process exit codes for the CLI.

Skipped releases (pre-release version, tag already present, no namespace
configured) are not failures and exit with ``OK``.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    - 0: Success, including every "nothing to do" outcome
    - 1: User error (missing version or repository name, bad flags)
    - 2: Configuration error (unreadable or invalid config file)
    - 4: Network error (GitLab unreachable, request rejected)
    """

    OK = 0
    USER_ERROR = 1
    CONFIG_ERROR = 2
    NETWORK_ERROR = 4
