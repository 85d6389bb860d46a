"""Publishing a version increment.

Applies an increment to the version files and records it in git:

    gate -> read version -> apply -> re-read -> commit -> locate commit
         -> tag -> push branch -> push tag

Steps run strictly in order and the first failure is returned unchanged.
Nothing is retried. A failure after the commit leaves a local commit (and
maybe a tag) that was not pushed; inspect the repository before re-running,
a blind re-run bumps again.
"""

from __future__ import annotations

from threading import Event

from gv.core.result import Err, Ok, Result
from gv.output.console import ConsoleProtocol, Style
from gv.versioning.errors import VersioningError
from gv.versioning.increment import VersionIncrement
from gv.versioning.model import PublishOutcome, PublishRequest, increment_commit_message
from gv.versioning.ports import GitPort, VersionStore
from gv.versioning.semver import SemanticVersion

__all__ = ["IncrementPublisher"]


def _check_cancel(cancel: Event | None, *, before: str) -> Err[VersioningError] | None:
    if cancel is None or not cancel.is_set():
        return None
    return Err(
        VersioningError(
            kind="cancelled",
            message=f"publish cancelled before {before}",
            hint="Nothing was committed; version files may already be bumped on disk.",
        )
    )


class IncrementPublisher:
    def __init__(self, *, store: VersionStore, git: GitPort, console: ConsoleProtocol) -> None:
        self._store = store
        self._git = git
        self._console = console

    def publish(
        self,
        increment: VersionIncrement,
        request: PublishRequest,
        *,
        dry_run: bool = False,
        cancel: Event | None = None,
    ) -> Result[PublishOutcome, VersioningError]:
        """Bump, commit, tag and push.

        NONE and UNKNOWN return a skipped outcome without reading a file or
        running git. `cancel` is only honoured up to the commit; once the
        commit exists the sequence runs to the end or fails.
        """
        if not increment.is_actionable:
            self._console.print(f"increment is '{increment}': nothing to publish", Style.DIM)
            return Ok(PublishOutcome.skipped(increment))

        target = request.effective_target_directory
        mode = request.search_mode

        stop = _check_cancel(cancel, before="reading the current version")
        if stop is not None:
            return stop

        original = self._store.get_latest_version(target, mode)
        if isinstance(original, Err):
            return original
        previous = original.value

        if dry_run:
            return Ok(self._preview(increment, request, previous))

        stop = _check_cancel(cancel, before="updating version files")
        if stop is not None:
            return stop

        applied = self._store.apply_increment(target, mode, increment)
        if isinstance(applied, Err):
            return applied
        for path in applied.value:
            self._console.print(f"updated {path}", Style.DIM)

        # The store decides what the new version is; never compute it here.
        updated = self._store.get_latest_version(target, mode)
        if isinstance(updated, Err):
            return updated
        current = updated.value

        stop = _check_cancel(cancel, before="committing")
        if stop is not None:
            return stop

        git_dir = request.git_directory
        message = increment_commit_message(previous, current)
        self._console.print(f"git commit -m '{message}'", Style.DIM)
        committed = self._git.commit_changes(git_dir, message, request.commit_author_email)
        if isinstance(committed, Err):
            return committed

        commits = self._git.get_commits(git_dir)
        if isinstance(commits, Err):
            return commits
        commit = next((c for c in commits.value if c.subject == message), None)
        if commit is None:
            return Err(
                VersioningError(
                    kind="commit_not_found",
                    message=f"increment commit not found: {message}",
                    hint="A commit hook may have rewritten the message; the commit was not tagged.",
                )
            )

        tag = request.tag_name(current)
        self._console.print(f"git tag {tag} {commit.short_id}", Style.DIM)
        tagged = self._git.create_tag(git_dir, tag, commit.id)
        if isinstance(tagged, Err):
            return tagged

        for refspec in (f"refs/heads/{request.branch_name}", f"refs/tags/{tag}"):
            self._console.print(f"git push {request.remote_target} {refspec}", Style.DIM)
            pushed = self._git.push_remote(git_dir, request.remote_target, refspec)
            if isinstance(pushed, Err):
                return pushed

        self._console.success(f"published {tag} ({previous} -> {current})")
        return Ok(
            PublishOutcome(
                status="published",
                increment=increment,
                previous_version=previous,
                new_version=current,
                tag=tag,
                commit_id=commit.id,
            )
        )

    def _preview(
        self,
        increment: VersionIncrement,
        request: PublishRequest,
        previous: SemanticVersion,
    ) -> PublishOutcome:
        predicted = previous.bump(increment)
        tag = request.tag_name(predicted)
        message = increment_commit_message(previous, predicted)

        self._console.print(f"bump version files under {request.effective_target_directory}", Style.DIM)
        self._console.print(f"git commit -m '{message}'", Style.DIM)
        self._console.print(f"git tag {tag}", Style.DIM)
        self._console.print(
            f"git push {request.remote_target} refs/heads/{request.branch_name}", Style.DIM
        )
        self._console.print(f"git push {request.remote_target} refs/tags/{tag}", Style.DIM)
        self._console.info(f"dry run: would publish {tag} ({previous} -> {predicted})")

        return PublishOutcome(
            status="dry-run",
            increment=increment,
            previous_version=previous,
            new_version=predicted,
            tag=tag,
        )
