"""Filesystem helpers."""

from __future__ import annotations

import os
import shutil
import tempfile
from collections.abc import Iterable
from pathlib import Path

__all__ = [
    "atomic_write_text",
    "copy_tree",
    "remove_matching",
    "remove_path",
    "remove_paths",
]


def atomic_write_text(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """Write text to path atomically using temp file + replace."""
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.",
        suffix=".tmp",
        dir=str(path.parent),
    )
    tmp_path = Path(tmp_name)

    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink(missing_ok=True)


def remove_path(path: Path) -> bool:
    """Remove a file, symlink or directory tree (`rm -rf`).

    Returns True if something was removed.
    """
    if path.is_symlink() or path.is_file():
        path.unlink()
        return True
    if path.is_dir():
        shutil.rmtree(path)
        return True
    return False


def remove_paths(root: Path, relative: Iterable[str]) -> list[Path]:
    """Remove each path under root, ignoring the missing ones."""
    removed: list[Path] = []
    for rel in relative:
        target = root / rel
        if remove_path(target):
            removed.append(target)
    return removed


def remove_matching(root: Path, pattern: str) -> list[Path]:
    """Remove every file below root whose name matches a glob pattern."""
    removed: list[Path] = []
    for path in sorted(root.rglob(pattern)):
        if path.is_file() or path.is_symlink():
            path.unlink()
            removed.append(path)
    return removed


def copy_tree(src: Path, dst: Path) -> None:
    """Copy a directory tree, keeping symlinks as symlinks (`cp -r`)."""
    shutil.copytree(src, dst, symlinks=True)
