"""Post-release report: produced files and the remaining manual tasks."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from pma_release.output.console import ConsoleProtocol, Style
from pma_release.release.contracts import ReleaseContext


def _size(path: Path) -> str:
    try:
        return f"{path.stat().st_size:>12,d}"
    except FileNotFoundError:
        return f"{'missing':>12}"


def print_files(files: Iterable[Path], *, console: ConsoleProtocol) -> None:
    console.newline()
    console.print("Files:", Style.BOLD)
    console.print("------", Style.BOLD)
    for path in sorted(files):
        console.print(f"{_size(path)}  {path.name}")


def todo_items(ctx: ReleaseContext, config_lib: str) -> list[str]:
    version = ctx.version
    product = ctx.product
    out = ctx.output_dir.name
    return [
        "If not already done, tag the repository with the new revision number\n"
        "   for a plain release or a release candidate:\n"
        "    version 2.7.0 gets RELEASE_2_7_0\n"
        "    version 2.7.1-rc1 gets RELEASE_2_7_1RC1",
        f"prepare a {out}/{product}-{version}-notes.html explaining in short the goal of\n"
        "   this release and paste into it the ChangeLog for this release, followed\n"
        "   by the notes of all previous incremental versions",
        "upload the files to our file server, use scripts/upload-release, eg.:\n"
        f"        ./scripts/upload-release {version} {out}",
        "add a news item to our website; a good idea is to include a link to the\n"
        f"   release notes such as https://www.phpmyadmin.net/files/{version}/",
        "send a short mail (with list of major changes) to\n"
        "        developers@phpmyadmin.net\n"
        "        news@phpmyadmin.net\n"
        "   Don't forget to update the Description section in the announcement,\n"
        "   based on documentation.",
        "increment rc count or version in the repository :\n"
        f"        - in {config_lib} PMA\\libraries\\Config::__constructor() the line\n"
        "              \" $this->set( 'PMA_VERSION', '2.7.1-dev' ); \"\n"
        "        - in doc/conf.py (if it exists) the line\n"
        "              \" version = '2.7.1-dev' \"",
        "on https://github.com/phpmyadmin/phpmyadmin/milestones close the milestone\n"
        "   corresponding to the released version (if this is a stable release) and\n"
        "   open a new one for the next minor release",
        "if a maintenance version (z in x.y.z) was released, delete the branch\n"
        "   corresponding to the previous one; for example\n"
        f"   git push {ctx.remote} --delete MAINT_4_4_12",
        "for a stable version, update demo/php/versions.ini in the scripts repository\n"
        "   so that the demo server shows current versions",
        "in case of a new major release ('y' in x.y.0), update the pmaweb/settings.py\n"
        "   in website repository to include the new major releases",
        "the end :-)",
    ]


def print_todo(ctx: ReleaseContext, config_lib: str, *, console: ConsoleProtocol) -> None:
    console.newline()
    console.print("Todo now:", Style.BOLD)
    console.print("---------", Style.BOLD)
    for index, item in enumerate(todo_items(ctx, config_lib), start=1):
        console.newline()
        console.print(f"{index:>2}. {item}")
