"""Detached signatures and checksum sidecars for release archives."""

from __future__ import annotations

import hashlib
from collections.abc import Iterable
from pathlib import Path

from pma_release.core.result import Err, Ok, Result
from pma_release.output.console import ConsoleProtocol
from pma_release.platform.files import atomic_write_text
from pma_release.release.contracts import SignedArtifact
from pma_release.release.errors import ReleaseError, tool_failed
from pma_release.release.tools import Signer


def file_digest(path: Path, algorithm: str) -> str:
    h = hashlib.new(algorithm)
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()


def write_checksum(path: Path, algorithm: str) -> Path:
    """Write `<path>.<algorithm>` in md5sum/sha1sum format."""
    out = path.with_name(f"{path.name}.{algorithm}")
    atomic_write_text(out, f"{file_digest(path, algorithm)}  {path.name}\n")
    return out


def sign_archives(
    archives: Iterable[Path],
    *,
    signer: Signer,
    console: ConsoleProtocol,
) -> Result[list[SignedArtifact], ReleaseError]:
    """Sign each archive and write its md5 and sha1 sidecars."""
    console.step("Signing files")
    signed: list[SignedArtifact] = []
    for archive in sorted(archives):
        signature = signer.sign(archive)
        if isinstance(signature, Err):
            return Err(tool_failed(f"sign {archive.name}", signature.error))
        signed.append(
            SignedArtifact(
                archive=archive,
                signature=signature.value,
                md5=write_checksum(archive, "md5"),
                sha1=write_checksum(archive, "sha1"),
            )
        )
    return Ok(signed)
