"""Error codes for CLI exit status.

Every `gv` command exits with one of these codes so CI pipelines can tell a
misconfigured job apart from a rejected push.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success (including a publish that had nothing to do)
    - 1: User error (bad option, invalid git directory, broken config)
    - 2: Environment error (no version-bearing files, git not installed)
    - 3: Git error (commit or tag failed, increment commit not found)
    - 4: Network error (push rejected or remote unreachable)
    - 5: I/O error (version file unreadable or unwritable)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    GIT_ERROR = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5
