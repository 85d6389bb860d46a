from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering

from gv.versioning.increment import VersionIncrement

__all__ = ["SemanticVersion"]


_VERSION_RE = re.compile(
    r"^v?(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?$"
)


@total_ordering
@dataclass(frozen=True, slots=True)
class SemanticVersion:
    """A semantic version with SemVer 2.0 precedence.

    Build metadata is accepted by `parse` and dropped; it never affects
    precedence.
    """

    major: int
    minor: int = 0
    patch: int = 0
    prerelease: str | None = None

    def __str__(self) -> str:
        core = f"{self.major}.{self.minor}.{self.patch}"
        return f"{core}-{self.prerelease}" if self.prerelease else core

    @property
    def is_initial_development(self) -> bool:
        """True while major is 0 (the public API is not stable yet)."""
        return self.major == 0

    @classmethod
    def try_parse(cls, text: str) -> SemanticVersion | None:
        m = _VERSION_RE.match(text.strip())
        if m is None:
            return None
        return cls(int(m.group(1)), int(m.group(2)), int(m.group(3)), m.group(4))

    @classmethod
    def parse(cls, text: str) -> SemanticVersion:
        version = cls.try_parse(text)
        if version is None:
            raise ValueError(f"not a semantic version: {text!r}")
        return version

    def bump(self, increment: VersionIncrement) -> SemanticVersion:
        """Return the version after applying an increment.

        Pre-release increments move one magnitude less than their base so an
        automatic bump stays below 1.0.0. A pre-release label is finalised in
        place when the increment would not move past it.
        """
        match increment:
            case VersionIncrement.MAJOR:
                return self._bump_major()
            case VersionIncrement.MINOR | VersionIncrement.BETA_MAJOR:
                return self._bump_minor()
            case VersionIncrement.PATCH | VersionIncrement.BETA_MINOR | VersionIncrement.BETA_PATCH:
                return self._bump_patch()
            case _:
                return self

    def _bump_major(self) -> SemanticVersion:
        if self.prerelease and self.minor == 0 and self.patch == 0:
            return SemanticVersion(self.major, 0, 0)
        return SemanticVersion(self.major + 1, 0, 0)

    def _bump_minor(self) -> SemanticVersion:
        if self.prerelease and self.patch == 0:
            return SemanticVersion(self.major, self.minor, 0)
        return SemanticVersion(self.major, self.minor + 1, 0)

    def _bump_patch(self) -> SemanticVersion:
        if self.prerelease:
            return SemanticVersion(self.major, self.minor, self.patch)
        return SemanticVersion(self.major, self.minor, self.patch + 1)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return _precedence(self) < _precedence(other)


def _precedence(v: SemanticVersion) -> tuple[int, int, int, int, tuple[tuple[int, int, str], ...]]:
    # A release (no label) sorts after every pre-release of the same triple.
    if not v.prerelease:
        return (v.major, v.minor, v.patch, 1, ())
    idents = tuple(
        (0, int(part), "") if part.isdigit() else (1, 0, part) for part in v.prerelease.split(".")
    )
    return (v.major, v.minor, v.patch, 0, idents)
