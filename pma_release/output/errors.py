"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pma_release.core.errors import ErrorCode
from pma_release.output.console import Style
from pma_release.release.errors import ReleaseError

if TYPE_CHECKING:
    from pma_release.output.console import ConsoleProtocol

__all__ = ["print_release_error", "release_exit_code"]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    """Print release error to console with appropriate formatting."""
    match error:
        case ReleaseError(kind="usage", hint=hint):
            console.print(hint or error.message)
        case ReleaseError(kind="user_abort"):
            console.print(error.message, Style.DIM)
        case ReleaseError(kind="tool_failed", stage=stage, hint=hint):
            prefix = f"[{stage}] " if stage else ""
            console.error(f"{prefix}{error.message}")
            if hint:
                console.print(f"hint: {hint}", Style.DIM)
        case _:
            console.error(error.message)
            if error.hint:
                console.print(f"hint: {error.hint}", Style.DIM)


def release_exit_code(error: ReleaseError) -> int:
    """Get exit code for a release error.

    Tool failures keep the tool's own exit code when it ran.
    """
    match error.kind:
        case "usage":
            return int(ErrorCode.USAGE)
        case "user_abort":
            return int(ErrorCode.USER_ABORT)
        case "version_mismatch":
            return int(ErrorCode.VERSION_MISMATCH)
        case "tool_failed":
            if error.returncode is not None and error.returncode > 0:
                return error.returncode
            return int(ErrorCode.TOOL_ERROR)
        case "invalid_arguments" | "invalid_config" | "workdir_exists" | "output_exists":
            return int(ErrorCode.USER_ERROR)
    return int(ErrorCode.USER_ERROR)
