"""Isolated checkout of the release branch."""

from __future__ import annotations

from pma_release.core.result import Err, Ok, Result
from pma_release.output.console import ConsoleProtocol, Style
from pma_release.platform.files import remove_path
from pma_release.release.contracts import ReleaseContext, WorkingTree
from pma_release.release.errors import ReleaseError, tool_failed
from pma_release.release.tools import VersionControl


def check_outputs_free(ctx: ReleaseContext) -> Result[None, ReleaseError]:
    """Refuse to run when kit trees, archives or sidecars from an earlier run are present."""
    kit_dirs = [ctx.output_dir / ctx.kit_name(kit) for kit in ctx.kits]
    existing = [p for p in [*kit_dirs, *ctx.expected_outputs()] if p.exists()]
    if existing:
        names = ", ".join(p.name for p in existing[:3])
        if len(existing) > 3:
            names += f" (+{len(existing) - 3} more)"
        return Err(
            ReleaseError(
                kind="output_exists",
                message=f"Release files already exist in '{ctx.output_dir}': {names}",
                hint="move them out of way or delete them before releasing again",
                stage="worktree",
            )
        )
    return Ok(None)


def create_worktree(
    ctx: ReleaseContext,
    *,
    config_lib: str,
    vcs: VersionControl,
    console: ConsoleProtocol,
) -> Result[WorkingTree, ReleaseError]:
    """Check the release branch out under `<output_dir>/<product>-<version>`."""
    ctx.output_dir.mkdir(parents=True, exist_ok=True)

    workdir = ctx.workdir
    if workdir.exists():
        return Err(
            ReleaseError(
                kind="workdir_exists",
                message=f"Working directory '{workdir}' already exists, please move it out of way",
                stage="worktree",
            )
        )

    free = check_outputs_free(ctx)
    if isinstance(free, Err):
        return free

    console.print(f"git worktree add {workdir} {ctx.branch}", Style.DIM)
    added = vcs.add_worktree(workdir, ctx.branch)
    if isinstance(added, Err):
        return Err(tool_failed("worktree", added.error))

    return Ok(WorkingTree(root=workdir, config_lib=config_lib))


def remove_worktree(
    tree: WorkingTree,
    *,
    vcs: VersionControl,
) -> Result[None, ReleaseError]:
    """Delete the cleaned tree and let git forget the worktree."""
    remove_path(tree.root)
    pruned = vcs.prune_worktrees()
    if isinstance(pruned, Err):
        return Err(tool_failed("cleanup", pruned.error))
    return Ok(None)
