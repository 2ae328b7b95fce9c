"""Operator confirmation before anything is built."""

from __future__ import annotations

from collections.abc import Callable

from pma_release.core.result import Err, Ok, Result
from pma_release.output.console import ConsoleProtocol
from pma_release.release.contracts import ReleaseContext
from pma_release.release.errors import ReleaseError
from pma_release.release.tools import VersionControl

LEGACY_CONFIG_LIB = "libraries/Config.class.php"
CONFIG_LIB = "libraries/Config.php"

AskFn = Callable[[str], str]


def resolve_config_lib(ctx: ReleaseContext, vcs: VersionControl) -> Result[str, ReleaseError]:
    """Pick the file carrying PMA_VERSION on the release branch.

    Branches older than 4.7 still have the class-suffixed file name.
    """
    legacy = vcs.tree_has_path(ctx.branch, LEGACY_CONFIG_LIB)
    if isinstance(legacy, Err):
        return Err(
            ReleaseError(
                kind="tool_failed",
                message=f"cannot inspect branch {ctx.branch}",
                hint=legacy.error.message,
                stage="confirm",
                returncode=legacy.error.returncode,
            )
        )
    return Ok(LEGACY_CONFIG_LIB if legacy.value else CONFIG_LIB)


def bump_checklist(version: str, config_lib: str) -> list[str]:
    return [
        "Please ensure you have incremented rc count or version in the repository :",
        f"     - in {config_lib} PMA\\libraries\\Config::__constructor() the line",
        f"          \" $this->set( 'PMA_VERSION', '{version}' ); \"",
        "     - in doc/conf.py the line",
        f"          \" version = '{version}' \"",
        "     - in README",
        "     - set release date in ChangeLog",
    ]


def confirm_versions_bumped(
    ctx: ReleaseContext,
    *,
    config_lib: str,
    console: ConsoleProtocol,
    ask: AskFn,
) -> Result[None, ReleaseError]:
    """Show the bump checklist and require an explicit `y`.

    Nothing is verified here; the working tree check does that later.
    """
    console.newline()
    for line in bump_checklist(ctx.version, config_lib):
        console.print(line)
    console.newline()

    answer = ask("Continue (y/n)?")
    if answer != "y":
        return Err(
            ReleaseError(
                kind="user_abort",
                message="release aborted by operator",
                stage="confirm",
            )
        )
    return Ok(None)
