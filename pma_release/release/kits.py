"""Per-kit copies of the release tree and their archives."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from pma_release.core.result import Err, Ok, Result
from pma_release.output.console import ConsoleProtocol
from pma_release.platform.files import copy_tree, remove_path
from pma_release.release.archives import produce_archives
from pma_release.release.contracts import ArchiveOutput, KitSpec, ReleaseContext, WorkingTree
from pma_release.release.errors import ReleaseError, tool_failed
from pma_release.release.tools import Archiver, ScriptRunner

LANG_CLEANUP = "scripts/lang-cleanup.sh"


def build_kit(
    ctx: ReleaseContext,
    tree: WorkingTree,
    kit: KitSpec,
    *,
    scripts: ScriptRunner,
    archiver: Archiver,
    console: ConsoleProtocol,
) -> Result[list[ArchiveOutput], ReleaseError]:
    """Copy the tree, drop unneeded translations, archive, clean up."""
    name = ctx.kit_name(kit)
    kit_dir = ctx.output_dir / name

    console.step(f"Preparing {name}")
    copy_tree(tree.root, kit_dir)

    cleaned = scripts.run_script(kit_dir, LANG_CLEANUP, kit.value)
    if isinstance(cleaned, Err):
        return Err(tool_failed(f"kit {kit}", cleaned.error))
    remove_path(kit_dir / "scripts")

    produced = produce_archives(
        out_dir=ctx.output_dir,
        name=name,
        kit=kit,
        compressions=ctx.compressions,
        archiver=archiver,
        console=console,
    )
    if isinstance(produced, Err):
        return produced

    remove_path(ctx.output_dir / f"{name}.tar")
    remove_path(kit_dir)
    return produced


def build_kits(
    ctx: ReleaseContext,
    tree: WorkingTree,
    *,
    scripts: ScriptRunner,
    archiver: Archiver,
    console: ConsoleProtocol,
    jobs: int = 1,
) -> Result[list[ArchiveOutput], ReleaseError]:
    """Build every kit, sequentially or on a thread pool.

    Kits share no files, so running them concurrently only changes the
    interleaving of console output. The returned list is sorted by path.
    With a pool, the first failing kit in configuration order is reported.
    """

    def one(kit: KitSpec) -> Result[list[ArchiveOutput], ReleaseError]:
        return build_kit(ctx, tree, kit, scripts=scripts, archiver=archiver, console=console)

    if jobs <= 1 or len(ctx.kits) <= 1:
        results: list[Result[list[ArchiveOutput], ReleaseError]] = []
        for kit in ctx.kits:
            result = one(kit)
            results.append(result)
            if isinstance(result, Err):
                break
    else:
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            results = list(pool.map(one, ctx.kits))

    produced: list[ArchiveOutput] = []
    for result in results:
        if isinstance(result, Err):
            return result
        produced.extend(result.value)

    produced.sort(key=lambda a: a.path)
    tree.archives.extend(produced)
    return Ok(produced)
