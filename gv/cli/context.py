from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from gv.core.config import CONFIG_FILE_NAME, Config, load_config, load_config_or_default
from gv.core.errors import ErrorCode
from gv.core.result import Err
from gv.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    git_dir: Path
    config: Config
    console: ConsoleProtocol


def build_context(git_dir: Path, config_path: Path | None = None) -> CLIContext:
    """Resolve the git directory and load gv.toml.

    An explicit --config must exist; the default gv.toml is optional.
    """
    try:
        root = git_dir.expanduser().resolve()
    except OSError as e:
        typer.echo(f"error: invalid --git-dir: {e}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    if config_path is not None:
        config_result = load_config(config_path.expanduser())
    else:
        config_result = load_config_or_default(root / CONFIG_FILE_NAME)

    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    return CLIContext(
        git_dir=root,
        config=config_result.value,
        console=RichConsole(stderr=True),
    )
