"""Versioning service: determine and publish increments.

Usage:
    service = VersioningService(
        git=GitService(identity_email=email),
        store=VersionFileStore(),
        classifier=ConventionalCommitClassifier(config.hints),
        console=console,
    )

    match service.publish_with_determined_increment(request):
        case Ok(outcome):
            print(outcome.status, outcome.tag)
        case Err(e):
            print(e.pretty())
"""

from __future__ import annotations

from threading import Event

from gv.core.result import Err, Ok, Result
from gv.output.console import ConsoleProtocol
from gv.versioning.errors import VersioningError
from gv.versioning.increment import VersionIncrement, priority_increment
from gv.versioning.model import GitCommitVersionInfo, PublishOutcome, PublishRequest
from gv.versioning.ports import CommitClassifier, GitPort, VersionStore
from gv.versioning.publisher import IncrementPublisher
from gv.versioning.resolver import resolve_increment

__all__ = ["VersioningService", "validate_publish_request"]


def _invalid(message: str, hint: str | None = None) -> Err[VersioningError]:
    return Err(VersioningError(kind="invalid_input", message=message, hint=hint))


def validate_publish_request(request: PublishRequest) -> Result[None, VersioningError]:
    """Check a request before anything touches the repository."""
    git_dir = request.git_directory
    if not git_dir.is_dir():
        return _invalid(f"git directory does not exist: {git_dir}")
    if not (git_dir / ".git").is_dir():
        return _invalid(
            f"not a git repository: {git_dir}",
            hint="Point --git-dir at the directory that contains .git.",
        )
    if not request.branch_name.strip():
        return _invalid("branch name is required", hint="Pass --branch or set publish.branch.")
    if not request.commit_author_email.strip():
        return _invalid(
            "commit author email is required",
            hint="Pass --author-email or set publish.author_email.",
        )
    if request.target_directory is not None and not request.target_directory.is_dir():
        return _invalid(f"target directory does not exist: {request.target_directory}")
    return Ok(None)


class VersioningService:
    def __init__(
        self,
        *,
        git: GitPort,
        store: VersionStore,
        classifier: CommitClassifier,
        console: ConsoleProtocol,
    ) -> None:
        self._git = git
        self._store = store
        self._classifier = classifier
        self._console = console
        self._publisher = IncrementPublisher(store=store, git=git, console=console)

    def last_published_tag(self, request: PublishRequest) -> Result[str | None, VersioningError]:
        """The reachable tag carrying the highest version, None before the first publish.

        Tags that match the glob but do not hold a version (`nightly`,
        `deployed-staging`) are not publishes and are skipped.
        """
        tags = self._git.list_tags(request.git_directory, request.tag_pattern)
        if isinstance(tags, Err):
            return tags

        published = [
            (version, tag)
            for tag in tags.value
            if (version := request.version_from_tag(tag)) is not None
        ]
        if not published:
            return Ok(None)
        return Ok(max(published, key=lambda item: item[0])[1])

    def collect_version_infos(
        self, request: PublishRequest
    ) -> Result[list[GitCommitVersionInfo], VersioningError]:
        """Classify every commit since the last published tag."""
        git_dir = request.git_directory

        last_tag = self.last_published_tag(request)
        if isinstance(last_tag, Err):
            return last_tag

        commits = self._git.get_commits(git_dir, since=last_tag.value)
        if isinstance(commits, Err):
            return commits

        since = last_tag.value or "the first commit"
        self._console.info(f"{len(commits.value)} commit(s) since {since}")
        return Ok([self._classifier.classify(c) for c in commits.value])

    def determine_increment(
        self, request: PublishRequest
    ) -> Result[VersionIncrement, VersioningError]:
        infos = self.collect_version_infos(request)
        if isinstance(infos, Err):
            return infos
        if not infos.value:
            return Ok(VersionIncrement.NONE)

        current = self._store.get_latest_version(
            request.effective_target_directory, request.search_mode
        )
        if isinstance(current, Err):
            return current

        priority = priority_increment(info.increment for info in infos.value)
        increment = resolve_increment(infos.value, current.value)

        self._console.info(f"increment determined from commits: {priority}")
        if increment is not priority:
            self._console.info(f"{current.value} is before 1.0; publishing as {increment}")
        return Ok(increment)

    def publish(
        self,
        increment: VersionIncrement,
        request: PublishRequest,
        *,
        dry_run: bool = False,
        cancel: Event | None = None,
    ) -> Result[PublishOutcome, VersioningError]:
        valid = validate_publish_request(request)
        if isinstance(valid, Err):
            return valid
        return self._publisher.publish(increment, request, dry_run=dry_run, cancel=cancel)

    def publish_with_determined_increment(
        self,
        request: PublishRequest,
        *,
        dry_run: bool = False,
        cancel: Event | None = None,
    ) -> Result[PublishOutcome, VersioningError]:
        valid = validate_publish_request(request)
        if isinstance(valid, Err):
            return valid

        increment = self.determine_increment(request)
        if isinstance(increment, Err):
            return increment
        return self._publisher.publish(increment.value, request, dry_run=dry_run, cancel=cancel)
