"""ReleaseBuilder: the release pipeline from tracking branch to checklist.

The stages run strictly in order and the first Err ends the run. Nothing is
rolled back on failure; the worktree, kit copies and partial archives stay on
disk for inspection.
"""

from __future__ import annotations

from pma_release.core.result import Err, Ok, Result
from pma_release.output.console import ConsoleProtocol
from pma_release.release.artifacts import (
    Clock,
    generate_artifacts,
    strip_developer_files,
    utc_now,
)
from pma_release.release.checklist import print_files, print_todo
from pma_release.release.contracts import ReleaseContext, ReleaseReport
from pma_release.release.errors import ReleaseError, tool_failed
from pma_release.release.gate import AskFn, confirm_versions_bumped, resolve_config_lib
from pma_release.release.kits import build_kits
from pma_release.release.promote import mark_as_stable, tag_release
from pma_release.release.signing import sign_archives
from pma_release.release.tools import Archiver, DocBuilder, ScriptRunner, Signer, VersionControl
from pma_release.release.versions import check_versions
from pma_release.release.worktree import create_worktree, remove_worktree


class ReleaseBuilder:
    def __init__(
        self,
        *,
        context: ReleaseContext,
        console: ConsoleProtocol,
        vcs: VersionControl,
        docs: DocBuilder,
        scripts: ScriptRunner,
        archiver: Archiver,
        signer: Signer,
        ask: AskFn,
        clock: Clock = utc_now,
        jobs: int = 1,
    ) -> None:
        self._ctx = context
        self._console = console
        self._vcs = vcs
        self._docs = docs
        self._scripts = scripts
        self._archiver = archiver
        self._signer = signer
        self._ask = ask
        self._clock = clock
        self._jobs = jobs

    def run(self) -> Result[ReleaseReport, ReleaseError]:
        ctx = self._ctx
        console = self._console

        ensured = self._vcs.ensure_local_branch(ctx.branch, ctx.remote)
        if isinstance(ensured, Err):
            return Err(tool_failed("branch", ensured.error))

        config_lib = resolve_config_lib(ctx, self._vcs)
        if isinstance(config_lib, Err):
            return config_lib

        confirmed = confirm_versions_bumped(
            ctx, config_lib=config_lib.value, console=console, ask=self._ask
        )
        if isinstance(confirmed, Err):
            return confirmed

        created = create_worktree(ctx, config_lib=config_lib.value, vcs=self._vcs, console=console)
        if isinstance(created, Err):
            return created
        tree = created.value

        versions = check_versions(tree.root, ctx.version, tree.config_lib)
        if isinstance(versions, Err):
            return versions

        generated = generate_artifacts(
            ctx,
            tree,
            docs=self._docs,
            scripts=self._scripts,
            console=console,
            clock=self._clock,
        )
        if isinstance(generated, Err):
            return generated

        strip_developer_files(tree, console=console)

        archives = build_kits(
            ctx,
            tree,
            scripts=self._scripts,
            archiver=self._archiver,
            console=console,
            jobs=self._jobs,
        )
        if isinstance(archives, Err):
            return archives

        removed = remove_worktree(tree, vcs=self._vcs)
        if isinstance(removed, Err):
            return removed

        signed = sign_archives(
            (a.path for a in tree.archives), signer=self._signer, console=console
        )
        if isinstance(signed, Err):
            return signed

        print_files((f for s in signed.value for f in s.files), console=console)

        tag: str | None = None
        if ctx.request.tag or ctx.request.stable:
            console.newline()
            console.print("Additional tasks:")

        if ctx.request.tag:
            tagged = tag_release(ctx, vcs=self._vcs, console=console)
            if isinstance(tagged, Err):
                return tagged
            tag = tagged.value

        if ctx.request.stable:
            marked = mark_as_stable(ctx, vcs=self._vcs, console=console)
            if isinstance(marked, Err):
                return marked

        print_todo(ctx, tree.config_lib, console=console)

        return Ok(
            ReleaseReport(
                archives=tuple(tree.archives),
                signed=tuple(signed.value),
                tag=tag,
                stable_updated=ctx.request.stable,
            )
        )
