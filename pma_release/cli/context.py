from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from pma_release.core.config import CONFIG_FILENAME, Config, load_config, load_config_or_default
from pma_release.core.errors import ErrorCode
from pma_release.core.result import Err
from pma_release.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    repo_root: Path
    config: Config
    console: ConsoleProtocol


def build_context(config_path: Path | None = None) -> CLIContext:
    """Resolve the repository root (cwd) and load the release config."""
    repo_root = Path.cwd().resolve()

    if config_path is not None:
        config_result = load_config(config_path.expanduser())
    else:
        config_result = load_config_or_default(repo_root / CONFIG_FILENAME)

    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    return CLIContext(
        repo_root=repo_root,
        config=config_result.value,
        console=RichConsole(),
    )
