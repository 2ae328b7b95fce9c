"""Error codes for CLI exit status.

The release command exposes a small, stable set of exit codes. Scripts
wrapping `create-release` rely on them, so the numeric values must not change:

- 0: Success
- 1: User error (bad arguments, working directory or outputs already present)
- 2: Version mismatch in one of the tracked files
- 3: External tool could not be started (tools that ran report their own code)
- 65: Usage error (not enough arguments)
- 100: Operator declined the confirmation prompt
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the release command."""

    OK = 0
    USER_ERROR = 1
    VERSION_MISMATCH = 2
    TOOL_ERROR = 3
    USAGE = 65
    USER_ABORT = 100

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        """Check if this code indicates success."""
        return self == ErrorCode.OK

    @property
    def is_error(self) -> bool:
        """Check if this code indicates an error."""
        return self != ErrorCode.OK
