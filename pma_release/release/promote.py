"""Release tag and stable branch update.

Both are local, one-shot repository mutations; nothing is pushed.
"""

from __future__ import annotations

from pma_release.core.result import Err, Ok, Result
from pma_release.output.console import ConsoleProtocol, Style
from pma_release.release.contracts import ReleaseContext
from pma_release.release.errors import ReleaseError, tool_failed
from pma_release.release.tools import VersionControl


def tag_name(version: str) -> str:
    """`2.9.0-rc1` -> `RELEASE_2_9_0RC1`."""
    return "RELEASE_" + version.replace(".", "_").upper().replace("-", "")


def tag_release(
    ctx: ReleaseContext,
    *,
    vcs: VersionControl,
    console: ConsoleProtocol,
) -> Result[str, ReleaseError]:
    name = tag_name(ctx.version)
    console.step(f"Tagging release as {name}")
    created = vcs.create_tag(name, f"Released {ctx.version}", ctx.branch)
    if isinstance(created, Err):
        return Err(tool_failed("tag", created.error))
    console.print("   Dont forget to push tags using: git push --tags", Style.BOLD)
    return Ok(name)


def mark_as_stable(
    ctx: ReleaseContext,
    *,
    vcs: VersionControl,
    console: ConsoleProtocol,
) -> Result[None, ReleaseError]:
    """Merge the release branch into the stable branch, theirs wins on conflict."""
    stable = ctx.stable_branch
    console.step(f"Marking release as {stable}")

    ensured = vcs.ensure_local_branch(stable, ctx.remote)
    if isinstance(ensured, Err):
        return Err(tool_failed("stable", ensured.error))

    for op in (
        lambda: vcs.checkout(stable),
        lambda: vcs.merge_theirs(ctx.branch),
        lambda: vcs.checkout(ctx.main_branch),
    ):
        result = op()
        if isinstance(result, Err):
            return Err(tool_failed("stable", result.error))

    return Ok(None)
