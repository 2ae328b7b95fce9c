"""Error types for the release pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pma_release.git.repository import GitError
from pma_release.platform.process import ProcessError

ReleaseErrorKind = Literal[
    "usage",
    "invalid_arguments",
    "invalid_config",
    "workdir_exists",
    "output_exists",
    "version_mismatch",
    "user_abort",
    "tool_failed",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Canonical release error payload.

    Attributes:
        kind: Error category, mapped to an exit code by the output layer.
        message: One-line description shown to the operator.
        hint: Optional follow-up (usage text, tool stderr).
        stage: Pipeline stage that failed.
        returncode: Exit code of the failing external tool, if any.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None
    stage: str | None = None
    returncode: int | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message


def tool_failed(stage: str, error: ProcessError | GitError) -> ReleaseError:
    """Wrap a failed external command into a ReleaseError."""
    if isinstance(error, GitError):
        return ReleaseError(
            kind="tool_failed",
            message=f"git {error.command} failed (exit {error.returncode})",
            hint=error.message or None,
            stage=stage,
            returncode=error.returncode,
        )
    return ReleaseError(
        kind="tool_failed",
        message=str(error),
        hint=error.stderr.strip() or None,
        stage=stage,
        returncode=error.returncode,
    )
