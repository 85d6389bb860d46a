from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Literal

from gv.versioning.increment import VersionIncrement
from gv.versioning.semver import SemanticVersion


INCREMENT_COMMIT_MARKERS = "[skip ci] [skip hint]"

PublishStatus = Literal["published", "skipped", "dry-run"]


class SearchMode(Enum):
    """How the version store walks the target directory."""

    RECURSIVE = "recursive"
    TOP_LEVEL = "top-level"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class GitCommitFileInfo:
    path: str
    status: str  # name-status letter, e.g. "M", "A", "R100"


@dataclass(frozen=True, slots=True)
class GitCommit:
    id: str
    subject: str
    body: str = ""
    changed_files: tuple[GitCommitFileInfo, ...] = field(default_factory=tuple)

    @property
    def short_id(self) -> str:
        return self.id[:8]


@dataclass(frozen=True, slots=True)
class GitCommitVersionInfo:
    """The version hint carried by one commit."""

    increment: VersionIncrement
    exits_prerelease: bool = False
    commit_id: str | None = None


@dataclass(frozen=True, slots=True)
class PublishRequest:
    """Everything one publish attempt needs to know about the repository."""

    git_directory: Path
    branch_name: str
    commit_author_email: str
    remote_target: str = "origin"
    # None means "version the git directory itself".
    target_directory: Path | None = None
    search_mode: SearchMode = SearchMode.RECURSIVE
    tag_prefix: str = ""
    tag_suffix: str = ""

    @property
    def effective_target_directory(self) -> Path:
        return self.target_directory or self.git_directory

    @property
    def tag_pattern(self) -> str:
        """Glob matching the tags this request publishes."""
        return f"{self.tag_prefix}*{self.tag_suffix}"

    def tag_name(self, version: SemanticVersion) -> str:
        return f"{self.tag_prefix}{version}{self.tag_suffix}"

    def version_from_tag(self, tag: str) -> SemanticVersion | None:
        """The version a tag publishes, or None if `tag_name` cannot produce it.

        `tag_pattern` is only a glob: `v*` also matches `very-old`, and `*`
        matches every deployment marker.
        """
        prefix, suffix = self.tag_prefix, self.tag_suffix
        if len(tag) < len(prefix) + len(suffix):
            return None
        if not (tag.startswith(prefix) and tag.endswith(suffix)):
            return None
        middle = tag[len(prefix) : len(tag) - len(suffix)]
        # try_parse accepts a leading "v"; tag_name never writes one.
        if not middle[:1].isdigit():
            return None
        return SemanticVersion.try_parse(middle)


def increment_commit_message(previous: SemanticVersion, current: SemanticVersion) -> str:
    return f"Increment version {previous} -> {current} {INCREMENT_COMMIT_MARKERS}"


@dataclass(frozen=True, slots=True)
class PublishOutcome:
    status: PublishStatus
    increment: VersionIncrement
    previous_version: SemanticVersion | None = None
    new_version: SemanticVersion | None = None
    tag: str | None = None
    commit_id: str | None = None

    @classmethod
    def skipped(cls, increment: VersionIncrement) -> PublishOutcome:
        return cls(status="skipped", increment=increment)
