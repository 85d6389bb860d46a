"""Semantic version increments driven by commit history.

Usage:
    from gv.versioning import VersionIncrement, resolve_increment

    increment = resolve_increment(infos, SemanticVersion.parse("0.3.0"))
"""

from gv.versioning.classifier import ConventionalCommitClassifier
from gv.versioning.errors import VersioningError, VersioningErrorKind
from gv.versioning.git_adapter import GitService
from gv.versioning.increment import VersionIncrement, priority_increment
from gv.versioning.model import (
    GitCommit,
    GitCommitFileInfo,
    GitCommitVersionInfo,
    PublishOutcome,
    PublishRequest,
    SearchMode,
    increment_commit_message,
)
from gv.versioning.publisher import IncrementPublisher
from gv.versioning.resolver import resolve_increment, stays_prerelease
from gv.versioning.semver import SemanticVersion
from gv.versioning.service import VersioningService, validate_publish_request
from gv.versioning.store import VersionFileStore

__all__ = [
    "ConventionalCommitClassifier",
    "GitCommit",
    "GitCommitFileInfo",
    "GitCommitVersionInfo",
    "GitService",
    "IncrementPublisher",
    "PublishOutcome",
    "PublishRequest",
    "SearchMode",
    "SemanticVersion",
    "VersionFileStore",
    "VersionIncrement",
    "VersioningError",
    "VersioningErrorKind",
    "VersioningService",
    "increment_commit_message",
    "priority_increment",
    "resolve_increment",
    "stays_prerelease",
    "validate_publish_request",
]
