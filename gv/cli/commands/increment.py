from __future__ import annotations

from pathlib import Path

import typer

from gv.cli.commands._helpers import (
    CONFIG_OPTION,
    GIT_DIR_OPTION,
    SEARCH_OPTION,
    TAG_PREFIX_OPTION,
    TAG_SUFFIX_OPTION,
    TARGET_DIR_OPTION,
    RequestOptions,
    build_request,
    exit_on_error,
    make_service,
)
from gv.cli.context import build_context
from gv.versioning.model import SearchMode


def increment(
    git_dir: Path = GIT_DIR_OPTION,
    target_dir: Path | None = TARGET_DIR_OPTION,
    search: SearchMode | None = SEARCH_OPTION,
    tag_prefix: str | None = TAG_PREFIX_OPTION,
    tag_suffix: str | None = TAG_SUFFIX_OPTION,
    config_path: Path | None = CONFIG_OPTION,
) -> None:
    """Print the increment the commits since the last tag call for."""
    ctx = build_context(git_dir, config_path)
    options = RequestOptions(
        target_dir=target_dir,
        search=search,
        tag_prefix=tag_prefix,
        tag_suffix=tag_suffix,
    )
    request = build_request(ctx, options, detect_branch=False)

    result = make_service(ctx, request).determine_increment(request)
    typer.echo(str(exit_on_error(result, ctx)))
