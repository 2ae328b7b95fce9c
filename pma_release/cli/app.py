from __future__ import annotations

from pathlib import Path

import typer

from pma_release import __version__
from pma_release.cli.context import CLIContext, build_context
from pma_release.core.errors import ErrorCode
from pma_release.core.result import Err
from pma_release.git.repository import Repository
from pma_release.output.errors import print_release_error, release_exit_code
from pma_release.release.args import parse_release_args
from pma_release.release.contracts import ReleaseReport, resolve_context
from pma_release.release.errors import ReleaseError
from pma_release.release.pipeline import ReleaseBuilder
from pma_release.release.tools import (
    GpgSigner,
    MakeDocBuilder,
    SubprocessArchiver,
    SubprocessScriptRunner,
)

app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
)


def _ask(prompt: str) -> str:
    return typer.prompt(prompt, default="", show_default=False)


def _fail(error: ReleaseError, ctx: CLIContext) -> None:
    print_release_error(error, ctx.console)
    raise typer.Exit(code=release_exit_code(error))


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=int(ErrorCode.OK))


@app.command(
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def create_release(
    args: list[str] | None = typer.Argument(
        None,
        metavar="<version> <from_branch> [--tag] [--stable]",
        show_default=False,
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Release config file (default: ./release.toml if present)",
    ),
    kits: list[str] | None = typer.Option(
        None, "--kit", help="Kit to build (repeatable, default: all configured kits)"
    ),
    compressions: list[str] | None = typer.Option(
        None,
        "--compression",
        help="Archive format (repeatable): zip-7z, zip, tbz, txz, tgz, 7z",
    ),
    jobs: int = typer.Option(1, "--jobs", min=1, help="Kits to build in parallel"),
    show_version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Package a release: docs, translations, archives, signatures.

    [bold]--tag[/bold] creates the release tag, [bold]--stable[/bold] merges
    the release branch into STABLE.
    """
    del show_version
    ctx = build_context(config)

    request = parse_release_args(args or [])
    if isinstance(request, Err):
        _fail(request.error, ctx)
        return

    context = resolve_context(
        request.value,
        repo_root=ctx.repo_root,
        config=ctx.config,
        kits=kits,
        compressions=compressions,
    )
    if isinstance(context, Err):
        _fail(context.error, ctx)
        return

    builder = ReleaseBuilder(
        context=context.value,
        console=ctx.console,
        vcs=Repository(ctx.repo_root),
        docs=MakeDocBuilder(console=ctx.console),
        scripts=SubprocessScriptRunner(console=ctx.console),
        archiver=SubprocessArchiver(console=ctx.console),
        signer=GpgSigner(console=ctx.console),
        ask=_ask,
        jobs=jobs,
    )
    result = builder.run()
    if isinstance(result, Err):
        _fail(result.error, ctx)
        return

    _print_summary(result.value, ctx)


def _print_summary(report: ReleaseReport, ctx: CLIContext) -> None:
    ctx.console.newline()
    ctx.console.success(f"{len(report.archives)} archive(s) signed")
    if report.tag:
        ctx.console.success(f"tagged {report.tag}")
    if report.stable_updated:
        ctx.console.success("stable branch updated")


def main() -> None:
    app()
