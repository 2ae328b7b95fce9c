"""Subprocess execution with Result-based error handling.

Every external tool the release touches (git, make, tar, compressors, gpg,
the project's own scripts) is started through this module, so failures come
back as values instead of exceptions.

Usage:
    result = run(["git", "branch", "--list", "QA_5_2"], cwd=repo_root)
    match result:
        case Ok(stdout):
            print(stdout)
        case Err(error):
            print(f"Failed: {error.stderr}")
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from pma_release.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run", "run_silent", "run_to_file"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: The exit code of the process (-1 if it never started).
        stdout: Standard output (may be empty).
        stderr: Standard error (contains error details).
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        """Format error for display."""
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


def _not_started(cmd: list[str], error: OSError) -> Err[ProcessError]:
    return Err(
        ProcessError(
            command=tuple(cmd),
            returncode=-1,
            stdout="",
            stderr=str(error),
        )
    )


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and return stdout or error.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).
        timeout: Maximum seconds to wait (None for no limit).

    Returns:
        Ok(stdout) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout=e.stdout if isinstance(e.stdout, str) else "",
                stderr=f"Command timed out after {timeout}s",
            )
        )
    except OSError as e:
        return _not_started(cmd, e)

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)


def run_silent(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
) -> Result[None, ProcessError]:
    """Execute a command without capturing output.

    Use this for long-running tools (documentation build, translation
    scripts, archivers) whose output should stream to the terminal.

    Returns:
        Ok(None) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            check=False,
        )
    except OSError as e:
        return _not_started(cmd, e)

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout="",
                stderr="",
            )
        )

    return Ok(None)


def run_to_file(
    cmd: list[str],
    cwd: Path,
    out_path: Path,
) -> Result[None, ProcessError]:
    """Execute a command with stdout redirected into a file.

    Used for compressors writing to stdout (`gzip -9c`). The output file is
    left in place on failure.
    """
    try:
        with out_path.open("wb") as out:
            proc = subprocess.run(
                cmd,
                cwd=str(cwd),
                stdout=out,
                stderr=subprocess.PIPE,
                check=False,
            )
    except OSError as e:
        return _not_started(cmd, e)

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout="",
                stderr=proc.stderr.decode("utf-8", errors="replace"),
            )
        )

    return Ok(None)
