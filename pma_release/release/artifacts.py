"""Generated files and developer-only files in the release tree."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from pma_release.core.result import Err, Ok, Result
from pma_release.output.console import ConsoleProtocol
from pma_release.platform.files import atomic_write_text, remove_matching, remove_path, remove_paths
from pma_release.release.contracts import ReleaseContext, WorkingTree
from pma_release.release.errors import ReleaseError, tool_failed
from pma_release.release.tools import DocBuilder, ScriptRunner

GENERATE_MO = "scripts/generate-mo"
REMOVE_INCOMPLETE_MO = "scripts/remove-incomplete-mo"
LINE_COUNTS = "scripts/line-counts.sh"

# Paths never shipped to users: tests, CI and coding standard setup,
# the GitHub readme and git metadata.
DEVELOPER_PATHS = (
    "test",
    ".github",
    "PMAStandard",
    "build.xml",
    "phpunit.xml.dist",
    ".travis.yml",
    ".jshintrc",
    "README.rst",
    ".git",
)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


def format_release_date(moment: datetime) -> str:
    """Format like `LC_ALL=C date -u`: `Mon Oct 19 09:05:03 UTC 2026`."""
    return moment.astimezone(UTC).strftime("%a %b %d %H:%M:%S UTC %Y")


def generate_artifacts(
    ctx: ReleaseContext,
    tree: WorkingTree,
    *,
    docs: DocBuilder,
    scripts: ScriptRunner,
    console: ConsoleProtocol,
    clock: Clock = utc_now,
) -> Result[None, ReleaseError]:
    """Write the release date, build docs and compile translations."""
    root = tree.root
    atomic_write_text(root / f"RELEASE-DATE-{ctx.version}", format_release_date(clock()) + "\n")

    console.step("Generating documentation")
    built = docs.build_html(root)
    if isinstance(built, Err):
        return Err(tool_failed("documentation", built.error))
    remove_matching(root / "doc", "*.pyc")

    if (root / "po").is_dir():
        console.step("Generating mo files")
        generated = scripts.run_script(root, GENERATE_MO)
        if isinstance(generated, Err):
            return Err(tool_failed("translations", generated.error))

        if (root / REMOVE_INCOMPLETE_MO).is_file():
            console.step("Removing incomplete translations")
            pruned = scripts.run_script(root, REMOVE_INCOMPLETE_MO)
            if isinstance(pruned, Err):
                return Err(tool_failed("translations", pruned.error))

        console.step("Removing gettext source files")
        remove_path(root / "po")

    if (root / LINE_COUNTS).is_file():
        console.step("Generating line counts")
        counted = scripts.run_script(root, LINE_COUNTS)
        if isinstance(counted, Err):
            return Err(tool_failed("line counts", counted.error))

    return Ok(None)


def strip_developer_files(tree: WorkingTree, *, console: ConsoleProtocol) -> None:
    console.step("Removing unneeded files")
    remove_paths(tree.root, DEVELOPER_PATHS)
    remove_matching(tree.root, ".gitignore")
