"""Archive production for one kit tree.

tbz, txz and tgz are all compressed from the same `<name>.tar`, which is
written at most once per kit and removed with the kit tree afterwards.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from pma_release.core.result import Err, Ok, Result
from pma_release.output.console import ConsoleProtocol
from pma_release.platform.files import remove_path
from pma_release.platform.process import ProcessError
from pma_release.release.contracts import ArchiveOutput, CompressionSpec, KitSpec
from pma_release.release.errors import ReleaseError, tool_failed
from pma_release.release.tools import Archiver


def _compress(
    spec: CompressionSpec,
    *,
    out_dir: Path,
    name: str,
    archiver: Archiver,
    console: ConsoleProtocol,
) -> Result[Path, ProcessError]:
    tar_path = out_dir / f"{name}.tar"
    if spec.uses_tar and not tar_path.is_file():
        console.step(f"Creating {tar_path.name}")
        created = archiver.tar(out_dir, name)
        if isinstance(created, Err):
            return created

    console.step(f"Creating {name}{spec.suffix}")
    match spec:
        case CompressionSpec.TBZ:
            return archiver.bzip2(tar_path)
        case CompressionSpec.TXZ:
            return archiver.xz(tar_path)
        case CompressionSpec.TGZ:
            return archiver.gzip(tar_path)
        case CompressionSpec.ZIP:
            return archiver.zip(out_dir, name)
        case CompressionSpec.ZIP_7Z:
            return archiver.zip_7z(out_dir, name)
        case CompressionSpec.SEVEN_Z:
            return archiver.seven_zip(out_dir, name)


def produce_archives(
    *,
    out_dir: Path,
    name: str,
    kit: KitSpec,
    compressions: Sequence[str],
    archiver: Archiver,
    console: ConsoleProtocol,
) -> Result[list[ArchiveOutput], ReleaseError]:
    """Compress `out_dir/name` into every requested format.

    Unknown compression tokens are skipped with a warning. A second request
    for an already written file name is skipped too.
    """
    # stale tar from an interrupted run
    remove_path(out_dir / f"{name}.tar")

    produced: list[ArchiveOutput] = []
    seen_suffixes: set[str] = set()
    for token in compressions:
        spec = CompressionSpec.parse(token)
        if spec is None:
            console.warning(f"ignoring compression '{token}', not known!")
            continue
        if spec.suffix in seen_suffixes:
            console.warning(f"ignoring compression '{token}', {name}{spec.suffix} already created")
            continue
        seen_suffixes.add(spec.suffix)

        result = _compress(spec, out_dir=out_dir, name=name, archiver=archiver, console=console)
        if isinstance(result, Err):
            return Err(tool_failed(f"archive {name}{spec.suffix}", result.error))
        produced.append(ArchiveOutput(kit=kit, compression=spec, path=result.value))

    return Ok(produced)
