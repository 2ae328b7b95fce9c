"""Git repository abstraction.

This module provides the Repository class for the git operations a release
needs: tracking branches, linked worktrees, annotated tags and the stable
branch merge. All operations return Result types for proper error handling.

Usage:
    repo = Repository(Path("/path/to/phpmyadmin"))

    match repo.ensure_local_branch("QA_5_2", remote="origin"):
        case Ok(created):
            print("created" if created else "already present")
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pma_release.core.result import Err, Ok, Result
from pma_release.platform.process import ProcessError
from pma_release.platform.process import run as run_process

# Worktree checkouts of a large tree are slow; keep a generous ceiling.
_GIT_TIMEOUT_SECONDS = 5 * 60.0

__all__ = [
    "GitError",
    "Repository",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """Git repository abstraction.

    Attributes:
        path: Path to the repository root
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def has_local_branch(self, name: str) -> Result[bool, GitError]:
        """Check whether a local branch with exactly this name exists."""
        result = self._git(["branch", "--list", name], command="branch --list")
        if isinstance(result, Err):
            return result
        return Ok(bool(result.value.strip()))

    def ensure_local_branch(self, name: str, remote: str) -> Result[bool, GitError]:
        """Make sure a local branch tracking `<remote>/<name>` exists.

        Idempotent: an existing local branch is left untouched.

        Returns:
            Ok(True) if the branch was created, Ok(False) if it already existed.
        """
        exists = self.has_local_branch(name)
        if isinstance(exists, Err):
            return exists
        if exists.value:
            return Ok(False)

        created = self._git(
            ["branch", "--track", name, f"{remote}/{name}"],
            command="branch --track",
        )
        if isinstance(created, Err):
            return created
        return Ok(True)

    def tree_has_path(self, ref: str, path: str) -> Result[bool, GitError]:
        """Check whether `path` is tracked in the tree of `ref`."""
        result = self._git(["ls-tree", "--name-only", ref, "--", path], command="ls-tree")
        if isinstance(result, Err):
            return result
        return Ok(bool(result.value.strip()))

    def add_worktree(self, path: Path, branch: str) -> Result[None, GitError]:
        """Check out `branch` into a new linked worktree at `path`."""
        return self._git(["worktree", "add", str(path), branch], command="worktree add").map(
            lambda _: None
        )

    def prune_worktrees(self) -> Result[None, GitError]:
        """Drop administrative data of worktrees whose directory is gone."""
        return self._git(["worktree", "prune"], command="worktree prune").map(lambda _: None)

    def create_tag(self, name: str, message: str, ref: str) -> Result[None, GitError]:
        """Create an annotated tag at `ref`."""
        return self._git(["tag", "-a", "-m", message, name, ref], command="tag -a").map(
            lambda _: None
        )

    def checkout(self, branch: str) -> Result[None, GitError]:
        return self._git(["checkout", branch], command="checkout").map(lambda _: None)

    def merge_theirs(self, branch: str) -> Result[None, GitError]:
        """Merge `branch` into the current branch, preferring its side on conflict."""
        return self._git(
            ["merge", "-s", "recursive", "-X", "theirs", branch],
            command="merge",
        ).map(lambda _: None)

    def _git(self, args: list[str], *, command: str) -> Result[str, GitError]:
        """Run a git command and convert failures to GitError."""
        result = self._run(args)
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command=command,
                        message=e.stderr.strip() or e.stdout.strip() or f"git {command} failed",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                return Ok(stdout)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        return run_process(
            ["git", "-C", str(self.path), *args],
            cwd=self.path,
            timeout=_GIT_TIMEOUT_SECONDS,
        )
