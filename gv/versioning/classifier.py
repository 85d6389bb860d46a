"""Commit classification.

Turns a commit into a version hint using the conventional commit format:

    feat(parser): accept tabs          -> minor
    fix: handle empty input            -> patch
    refactor(api)!: drop v1 routes     -> major
    docs: typo                         -> none
    Update stuff                       -> unknown

`[skip hint]` anywhere in the subject silences a commit (gv's own
increment commits carry it). An exit marker such as `[exit beta]` in the
subject or body lets the batch leave pre-release.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from gv.core.config import HintsConfig
from gv.versioning.increment import VersionIncrement
from gv.versioning.model import GitCommit, GitCommitVersionInfo

__all__ = ["ConventionalCommitClassifier", "ConventionalHeader", "parse_header"]

SKIP_HINT_MARKER = "[skip hint]"

_HEADER_RE = re.compile(
    r"^(?P<type>[A-Za-z][A-Za-z0-9_-]*)"
    r"(?:\((?P<scope>[^()\r\n]*)\))?"
    r"(?P<breaking>!)?"
    r":\s+(?P<description>\S.*)$"
)
_BREAKING_FOOTER_RE = re.compile(r"(?m)^BREAKING[ -]CHANGE:")


@dataclass(frozen=True, slots=True)
class ConventionalHeader:
    type: str
    scope: str | None
    breaking: bool
    description: str


def parse_header(subject: str) -> ConventionalHeader | None:
    m = _HEADER_RE.match(subject.strip())
    if m is None:
        return None
    return ConventionalHeader(
        type=m.group("type").lower(),
        scope=(m.group("scope") or "").strip() or None,
        breaking=m.group("breaking") is not None,
        description=m.group("description").strip(),
    )


class ConventionalCommitClassifier:
    def __init__(self, hints: HintsConfig | None = None) -> None:
        self._hints = hints or HintsConfig()

    def classify(self, commit: GitCommit) -> GitCommitVersionInfo:
        return GitCommitVersionInfo(
            increment=self._increment(commit),
            exits_prerelease=self._exits_prerelease(commit),
            commit_id=commit.id,
        )

    def _increment(self, commit: GitCommit) -> VersionIncrement:
        if SKIP_HINT_MARKER in commit.subject.lower():
            return VersionIncrement.NONE

        header = parse_header(commit.subject)
        if header is None:
            return VersionIncrement.UNKNOWN

        if header.breaking or _BREAKING_FOOTER_RE.search(commit.body):
            return VersionIncrement.MAJOR

        hints = self._hints
        if header.type in hints.major:
            return VersionIncrement.MAJOR
        if header.type in hints.minor:
            return VersionIncrement.MINOR
        if header.type in hints.patch:
            return VersionIncrement.PATCH
        if header.type in hints.none:
            return VersionIncrement.NONE
        return VersionIncrement.UNKNOWN

    def _exits_prerelease(self, commit: GitCommit) -> bool:
        text = f"{commit.subject}\n{commit.body}".lower()
        return any(marker.lower() in text for marker in self._hints.exit_prerelease)
