"""Publish commands: bump, commit, tag and push."""

from __future__ import annotations

from pathlib import Path

import typer

from gv.cli.commands._helpers import (
    AUTHOR_EMAIL_OPTION,
    BRANCH_OPTION,
    CONFIG_OPTION,
    DRY_RUN_OPTION,
    GIT_DIR_OPTION,
    REMOTE_OPTION,
    SEARCH_OPTION,
    TAG_PREFIX_OPTION,
    TAG_SUFFIX_OPTION,
    TARGET_DIR_OPTION,
    RequestOptions,
    build_request,
    exit_on_error,
    make_service,
)
from gv.cli.context import CLIContext, build_context
from gv.core.errors import ErrorCode
from gv.git.repository import Repository
from gv.versioning.increment import VersionIncrement
from gv.versioning.model import PublishOutcome, SearchMode


def publish(
    git_dir: Path = GIT_DIR_OPTION,
    remote: str | None = REMOTE_OPTION,
    branch: str | None = BRANCH_OPTION,
    target_dir: Path | None = TARGET_DIR_OPTION,
    search: SearchMode | None = SEARCH_OPTION,
    author_email: str | None = AUTHOR_EMAIL_OPTION,
    tag_prefix: str | None = TAG_PREFIX_OPTION,
    tag_suffix: str | None = TAG_SUFFIX_OPTION,
    config_path: Path | None = CONFIG_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
) -> None:
    """Determine the increment from commits and publish it."""
    ctx = build_context(git_dir, config_path)
    request = build_request(
        ctx,
        RequestOptions(
            target_dir=target_dir,
            search=search,
            remote=remote,
            branch=branch,
            author_email=author_email,
            tag_prefix=tag_prefix,
            tag_suffix=tag_suffix,
        ),
    )
    if not dry_run:
        _warn_if_dirty(ctx)

    result = make_service(ctx, request).publish_with_determined_increment(
        request, dry_run=dry_run
    )
    _report(exit_on_error(result, ctx))


def publish_by(
    increment: str = typer.Argument(..., help="patch|minor|major|beta-patch|beta-minor|beta-major"),
    git_dir: Path = GIT_DIR_OPTION,
    remote: str | None = REMOTE_OPTION,
    branch: str | None = BRANCH_OPTION,
    target_dir: Path | None = TARGET_DIR_OPTION,
    search: SearchMode | None = SEARCH_OPTION,
    author_email: str | None = AUTHOR_EMAIL_OPTION,
    tag_prefix: str | None = TAG_PREFIX_OPTION,
    tag_suffix: str | None = TAG_SUFFIX_OPTION,
    config_path: Path | None = CONFIG_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
) -> None:
    """Publish an explicit increment."""
    try:
        parsed = VersionIncrement.parse(increment)
    except ValueError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    ctx = build_context(git_dir, config_path)
    request = build_request(
        ctx,
        RequestOptions(
            target_dir=target_dir,
            search=search,
            remote=remote,
            branch=branch,
            author_email=author_email,
            tag_prefix=tag_prefix,
            tag_suffix=tag_suffix,
        ),
    )
    if not dry_run:
        _warn_if_dirty(ctx)

    result = make_service(ctx, request).publish(parsed, request, dry_run=dry_run)
    _report(exit_on_error(result, ctx))


def _warn_if_dirty(ctx: CLIContext) -> None:
    repo = Repository(ctx.git_dir)
    if repo.exists() and not repo.is_clean():
        ctx.console.warning("working tree has uncommitted changes; they go into the increment commit")


def _report(outcome: PublishOutcome) -> None:
    # The tag goes to stdout so CI steps can capture it.
    if outcome.tag:
        typer.echo(outcome.tag)
