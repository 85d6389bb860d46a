"""Tests for gv.versioning.model."""

from __future__ import annotations

from pathlib import Path

import pytest

from gv.versioning.increment import VersionIncrement
from gv.versioning.model import (
    GitCommit,
    PublishOutcome,
    PublishRequest,
    SearchMode,
    increment_commit_message,
)
from gv.versioning.semver import SemanticVersion


def test_request_defaults() -> None:
    request = PublishRequest(
        git_directory=Path("/repo"), branch_name="main", commit_author_email="ci@example.com"
    )
    assert request.remote_target == "origin"
    assert request.search_mode is SearchMode.RECURSIVE
    assert request.effective_target_directory == Path("/repo")
    assert request.tag_name(SemanticVersion(1, 2, 3)) == "1.2.3"
    assert request.tag_pattern == "*"


def test_request_tag_affixes() -> None:
    request = PublishRequest(
        git_directory=Path("/repo"),
        branch_name="main",
        commit_author_email="ci@example.com",
        target_directory=Path("/repo/lib"),
        tag_prefix="lib-v",
        tag_suffix="-final",
    )
    assert request.effective_target_directory == Path("/repo/lib")
    assert request.tag_name(SemanticVersion(0, 4, 0)) == "lib-v0.4.0-final"
    assert request.tag_pattern == "lib-v*-final"


def test_request_is_frozen() -> None:
    request = PublishRequest(git_directory=Path("/repo"), branch_name="main", commit_author_email="x")
    with pytest.raises(AttributeError):
        request.branch_name = "dev"  # type: ignore[misc]


def test_increment_commit_message() -> None:
    message = increment_commit_message(SemanticVersion(0, 3, 0), SemanticVersion(0, 4, 0))
    assert message == "Increment version 0.3.0 -> 0.4.0 [skip ci] [skip hint]"


def test_skipped_outcome() -> None:
    outcome = PublishOutcome.skipped(VersionIncrement.UNKNOWN)
    assert outcome.status == "skipped"
    assert outcome.new_version is None
    assert outcome.commit_id is None


def test_short_id() -> None:
    assert GitCommit(id="0123456789abcdef", subject="x").short_id == "01234567"


@pytest.mark.parametrize(
    ("prefix", "suffix", "tag", "expected"),
    [
        ("", "", "1.2.0", SemanticVersion(1, 2, 0)),
        ("", "", "deployed-staging", None),
        ("", "", "nightly", None),
        ("", "", "v1.2.0", None),
        ("v", "", "v1.2.0", SemanticVersion(1, 2, 0)),
        ("v", "", "very-old", None),
        ("v", "", "v", None),
        ("v", "", "vv1.2.0", None),
        ("v", "", "v0.3.0-beta.1", SemanticVersion(0, 3, 0, "beta.1")),
        ("lib-v", "-final", "lib-v0.4.0-final", SemanticVersion(0, 4, 0)),
        ("lib-v", "-final", "lib-v0.4.0", None),
    ],
)
def test_version_from_tag(
    prefix: str, suffix: str, tag: str, expected: SemanticVersion | None
) -> None:
    request = PublishRequest(
        git_directory=Path("/repo"),
        branch_name="main",
        commit_author_email="ci@example.com",
        tag_prefix=prefix,
        tag_suffix=suffix,
    )
    assert request.version_from_tag(tag) == expected
