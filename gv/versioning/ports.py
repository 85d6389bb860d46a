"""Collaborator protocols consumed by the resolver and the publisher.

The publish workflow only talks to the outside world through these three
seams. `gv.versioning.store`, `gv.versioning.classifier` and
`gv.versioning.git_adapter` are the production implementations; tests pass
recording fakes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from gv.core.result import Result
from gv.versioning.errors import VersioningError
from gv.versioning.increment import VersionIncrement
from gv.versioning.model import GitCommit, GitCommitVersionInfo, SearchMode
from gv.versioning.semver import SemanticVersion

__all__ = ["CommitClassifier", "GitPort", "VersionStore"]


class CommitClassifier(Protocol):
    def classify(self, commit: GitCommit) -> GitCommitVersionInfo:
        """Extract the version hint from one commit. Never fails."""
        ...


class VersionStore(Protocol):
    def get_latest_version(
        self, directory: Path, search_mode: SearchMode
    ) -> Result[SemanticVersion, VersioningError]:
        """Read the current version of the files under directory."""
        ...

    def apply_increment(
        self, directory: Path, search_mode: SearchMode, increment: VersionIncrement
    ) -> Result[list[Path], VersioningError]:
        """Bump the version files under directory; return the changed files."""
        ...


class GitPort(Protocol):
    def get_commits(
        self, directory: Path, since: str | None = None
    ) -> Result[list[GitCommit], VersioningError]:
        """List commits reachable from HEAD (newest first), optionally after a ref."""
        ...

    def list_tags(self, directory: Path, pattern: str) -> Result[list[str], VersioningError]:
        """Tags reachable from HEAD that match a glob."""
        ...

    def commit_changes(
        self, directory: Path, message: str, author_email: str
    ) -> Result[None, VersioningError]:
        """Stage everything and commit it."""
        ...

    def create_tag(
        self, directory: Path, tag_name: str, commit_id: str
    ) -> Result[None, VersioningError]: ...

    def push_remote(
        self, directory: Path, remote_name: str, refspec: str
    ) -> Result[None, VersioningError]: ...
