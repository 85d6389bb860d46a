"""Shared helpers for CLI commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

import typer

from gv.core.result import Err, Result
from gv.git.repository import Repository
from gv.output.errors import print_versioning_error, versioning_error_exit_code
from gv.versioning.classifier import ConventionalCommitClassifier
from gv.versioning.errors import VersioningError
from gv.versioning.git_adapter import GitService
from gv.versioning.model import PublishRequest, SearchMode
from gv.versioning.service import VersioningService
from gv.versioning.store import VersionFileStore

if TYPE_CHECKING:
    from gv.cli.context import CLIContext


# Options shared by every command. Unset values fall back to gv.toml.
GIT_DIR_OPTION = typer.Option(Path("."), "--git-dir", help="Repository root (contains .git)")
CONFIG_OPTION = typer.Option(None, "--config", help="Config file (default: <git-dir>/gv.toml)")
TARGET_DIR_OPTION = typer.Option(
    None, "--target-dir", help="Directory holding the version files (default: git dir)"
)
SEARCH_OPTION = typer.Option(None, "--search", help="How to look for version files")
REMOTE_OPTION = typer.Option(None, "--remote", help="Remote to push to (default: origin)")
BRANCH_OPTION = typer.Option(None, "--branch", help="Branch to push (default: checked out)")
AUTHOR_EMAIL_OPTION = typer.Option(None, "--author-email", help="Identity of the increment commit")
TAG_PREFIX_OPTION = typer.Option(None, "--tag-prefix", help="Text before the version in tags")
TAG_SUFFIX_OPTION = typer.Option(None, "--tag-suffix", help="Text after the version in tags")
DRY_RUN_OPTION = typer.Option(False, "--dry-run", help="Print actions without modifying")

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class RequestOptions:
    """Raw CLI values; None means "not given"."""

    target_dir: Path | None = None
    search: SearchMode | None = None
    remote: str | None = None
    branch: str | None = None
    author_email: str | None = None
    tag_prefix: str | None = None
    tag_suffix: str | None = None


def exit_on_error(result: Result[T, VersioningError], ctx: CLIContext) -> T:
    """Return the value of an Ok, or print the error and exit.

    The exit code follows the error kind (see gv.output.errors).
    """
    if isinstance(result, Err):
        print_versioning_error(result.error, ctx.console)
        raise typer.Exit(code=versioning_error_exit_code(result.error))
    return result.value


def resolve_target(ctx: CLIContext, options: RequestOptions) -> tuple[Path | None, SearchMode]:
    """Target directory (None: the git directory) and search mode."""
    publish = ctx.config.publish

    target_dir = options.target_dir
    if target_dir is None and publish.target_directory:
        target_dir = ctx.git_dir / publish.target_directory
    if target_dir is not None:
        target_dir = target_dir.expanduser().resolve()

    return target_dir, options.search or SearchMode(publish.search)


def build_request(
    ctx: CLIContext, options: RequestOptions, *, detect_branch: bool = True
) -> PublishRequest:
    """Merge CLI options over gv.toml into a PublishRequest.

    With detect_branch the branch falls back to the checked-out one. An
    empty branch or email is left for request validation to report.
    """
    publish = ctx.config.publish
    target_dir, search_mode = resolve_target(ctx, options)

    branch = options.branch or publish.branch
    if branch is None and detect_branch:
        branch = Repository(ctx.git_dir).current_branch()

    return PublishRequest(
        git_directory=ctx.git_dir,
        branch_name=branch or "",
        commit_author_email=options.author_email or publish.author_email or "",
        remote_target=options.remote or publish.remote,
        target_directory=target_dir,
        search_mode=search_mode,
        tag_prefix=publish.tag_prefix if options.tag_prefix is None else options.tag_prefix,
        tag_suffix=publish.tag_suffix if options.tag_suffix is None else options.tag_suffix,
    )


def make_service(ctx: CLIContext, request: PublishRequest) -> VersioningService:
    return VersioningService(
        git=GitService(identity_email=request.commit_author_email or None),
        store=VersionFileStore(),
        classifier=ConventionalCommitClassifier(ctx.config.hints),
        console=ctx.console,
    )
