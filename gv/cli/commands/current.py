from __future__ import annotations

from pathlib import Path

import typer

from gv.cli.commands._helpers import (
    CONFIG_OPTION,
    GIT_DIR_OPTION,
    SEARCH_OPTION,
    TARGET_DIR_OPTION,
    RequestOptions,
    exit_on_error,
    resolve_target,
)
from gv.cli.context import build_context
from gv.versioning.model import SearchMode
from gv.versioning.store import VersionFileStore


def current(
    git_dir: Path = GIT_DIR_OPTION,
    target_dir: Path | None = TARGET_DIR_OPTION,
    search: SearchMode | None = SEARCH_OPTION,
    config_path: Path | None = CONFIG_OPTION,
) -> None:
    """Print the current version of the target directory."""
    ctx = build_context(git_dir, config_path)
    target, search_mode = resolve_target(ctx, RequestOptions(target_dir=target_dir, search=search))

    version = exit_on_error(
        VersionFileStore().get_latest_version(target or ctx.git_dir, search_mode), ctx
    )
    typer.echo(str(version))
