"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gv.core.errors import ErrorCode
from gv.output.console import Style
from gv.versioning.errors import VersioningError

if TYPE_CHECKING:
    from gv.output.console import ConsoleProtocol

__all__ = ["print_versioning_error", "versioning_error_exit_code"]


def print_versioning_error(error: VersioningError, console: ConsoleProtocol) -> None:
    """Print versioning error to console with appropriate formatting."""
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def versioning_error_exit_code(error: VersioningError) -> int:
    """Get exit code for a versioning error."""
    match error.kind:
        case "invalid_input" | "cancelled":
            return int(ErrorCode.USER_ERROR)
        case "version_not_found":
            return int(ErrorCode.ENV_ERROR)
        case "invalid_version_file" | "io_failed":
            return int(ErrorCode.IO_ERROR)
        case "git_failed" | "commit_not_found":
            return int(ErrorCode.GIT_ERROR)
        case "push_failed":
            return int(ErrorCode.NETWORK_ERROR)
