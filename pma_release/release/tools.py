"""Capability interfaces for the external tools a release drives.

The pipeline only talks to these protocols. The subprocess-backed classes
below are what the CLI wires in; tests substitute in-memory fakes.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol

from pma_release.core.result import Err, Ok, Result
from pma_release.git.repository import GitError
from pma_release.output.console import ConsoleProtocol, Style
from pma_release.platform.process import ProcessError, run_silent, run_to_file

__all__ = [
    "Archiver",
    "DocBuilder",
    "GpgSigner",
    "MakeDocBuilder",
    "ScriptRunner",
    "Signer",
    "SubprocessArchiver",
    "SubprocessScriptRunner",
    "VersionControl",
]


class VersionControl(Protocol):
    """Repository operations; implemented by pma_release.git.Repository."""

    def ensure_local_branch(self, name: str, remote: str) -> Result[bool, GitError]: ...

    def tree_has_path(self, ref: str, path: str) -> Result[bool, GitError]: ...

    def add_worktree(self, path: Path, branch: str) -> Result[None, GitError]: ...

    def prune_worktrees(self) -> Result[None, GitError]: ...

    def create_tag(self, name: str, message: str, ref: str) -> Result[None, GitError]: ...

    def checkout(self, branch: str) -> Result[None, GitError]: ...

    def merge_theirs(self, branch: str) -> Result[None, GitError]: ...


class DocBuilder(Protocol):
    def build_html(self, tree: Path) -> Result[None, ProcessError]:
        """Render the HTML documentation inside `tree`."""
        ...


class ScriptRunner(Protocol):
    def run_script(self, tree: Path, script: str, *args: str) -> Result[None, ProcessError]:
        """Run one of the project's own scripts (relative to `tree`)."""
        ...


class Archiver(Protocol):
    """Archive tools. `name` is a directory inside `cwd`; outputs land in `cwd`."""

    def tar(self, cwd: Path, name: str) -> Result[Path, ProcessError]: ...

    def bzip2(self, tar: Path) -> Result[Path, ProcessError]: ...

    def xz(self, tar: Path) -> Result[Path, ProcessError]: ...

    def gzip(self, tar: Path) -> Result[Path, ProcessError]: ...

    def zip(self, cwd: Path, name: str) -> Result[Path, ProcessError]: ...

    def zip_7z(self, cwd: Path, name: str) -> Result[Path, ProcessError]: ...

    def seven_zip(self, cwd: Path, name: str) -> Result[Path, ProcessError]: ...


class Signer(Protocol):
    def sign(self, path: Path) -> Result[Path, ProcessError]:
        """Write a detached ASCII-armored signature next to `path`."""
        ...


def _c_locale_env() -> dict[str, str]:
    env = os.environ.copy()
    env["LC_ALL"] = "C"
    return env


class MakeDocBuilder:
    def __init__(self, *, console: ConsoleProtocol) -> None:
        self._console = console

    def build_html(self, tree: Path) -> Result[None, ProcessError]:
        cmd = ["make", "-C", "doc", "html"]
        self._console.print(" ".join(cmd), Style.DIM)
        return run_silent(cmd, cwd=tree, env=_c_locale_env())


class SubprocessScriptRunner:
    def __init__(self, *, console: ConsoleProtocol) -> None:
        self._console = console

    def run_script(self, tree: Path, script: str, *args: str) -> Result[None, ProcessError]:
        cmd = [f"./{script}", *args]
        self._console.print(" ".join(cmd), Style.DIM)
        return run_silent(cmd, cwd=tree)


class SubprocessArchiver:
    """tar, bzip2, xz, gzip, zip and 7za at maximum compression."""

    def __init__(self, *, console: ConsoleProtocol) -> None:
        self._console = console

    def tar(self, cwd: Path, name: str) -> Result[Path, ProcessError]:
        out = cwd / f"{name}.tar"
        return self._run(["tar", "cf", out.name, name], cwd, out)

    def bzip2(self, tar: Path) -> Result[Path, ProcessError]:
        return self._run(["bzip2", "-9k", tar.name], tar.parent, tar.with_name(tar.name + ".bz2"))

    def xz(self, tar: Path) -> Result[Path, ProcessError]:
        return self._run(["xz", "-9k", tar.name], tar.parent, tar.with_name(tar.name + ".xz"))

    def gzip(self, tar: Path) -> Result[Path, ProcessError]:
        out = tar.with_name(tar.name + ".gz")
        cmd = ["gzip", "-9c", tar.name]
        self._console.print(f"{' '.join(cmd)} > {out.name}", Style.DIM)
        result = run_to_file(cmd, cwd=tar.parent, out_path=out)
        if isinstance(result, Err):
            return result
        return Ok(out)

    def zip(self, cwd: Path, name: str) -> Result[Path, ProcessError]:
        out = cwd / f"{name}.zip"
        return self._run(["zip", "-q", "-9", "-r", out.name, name], cwd, out)

    def zip_7z(self, cwd: Path, name: str) -> Result[Path, ProcessError]:
        out = cwd / f"{name}.zip"
        return self._run(["7za", "a", "-bd", "-tzip", "-mx=9", out.name, name], cwd, out)

    def seven_zip(self, cwd: Path, name: str) -> Result[Path, ProcessError]:
        out = cwd / f"{name}.7z"
        return self._run(["7za", "a", "-bd", "-mx=9", out.name, name], cwd, out)

    def _run(self, cmd: list[str], cwd: Path, out: Path) -> Result[Path, ProcessError]:
        self._console.print(" ".join(cmd), Style.DIM)
        result = run_silent(cmd, cwd=cwd)
        if isinstance(result, Err):
            return result
        return Ok(out)


class GpgSigner:
    """Detached signatures with the environment's default gpg key."""

    def __init__(self, *, console: ConsoleProtocol) -> None:
        self._console = console

    def sign(self, path: Path) -> Result[Path, ProcessError]:
        cmd = ["gpg", "--detach-sign", "--armor", path.name]
        self._console.print(" ".join(cmd), Style.DIM)
        result = run_silent(cmd, cwd=path.parent)
        if isinstance(result, Err):
            return result
        return Ok(path.with_name(path.name + ".asc"))
