"""Version increments.

A VersionIncrement says how far a version should move. Magnitudes are
ordered NONE < UNKNOWN < PATCH < MINOR < MAJOR. Each magnitude has a
pre-release twin (BETA_*) with the same rank: the twin says "this change
is that big, but the product is still before 1.0".
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import Enum

__all__ = ["VersionIncrement", "priority_increment"]


class VersionIncrement(Enum):
    NONE = "none"
    UNKNOWN = "unknown"
    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"
    BETA_PATCH = "beta-patch"
    BETA_MINOR = "beta-minor"
    BETA_MAJOR = "beta-major"

    def __str__(self) -> str:
        return self.value

    @property
    def rank(self) -> int:
        """Magnitude rank; a pre-release twin ranks like its base."""
        return _RANK[self.base]

    @property
    def is_prerelease(self) -> bool:
        return self in _BASE_OF

    @property
    def base(self) -> VersionIncrement:
        """The magnitude a pre-release increment mirrors (self otherwise)."""
        return _BASE_OF.get(self, self)

    @property
    def is_actionable(self) -> bool:
        """False for NONE and UNKNOWN: nothing should be published."""
        return self not in (VersionIncrement.NONE, VersionIncrement.UNKNOWN)

    def to_prerelease(self) -> VersionIncrement:
        """Map a magnitude to its pre-release twin.

        NONE, UNKNOWN and pre-release increments map to themselves.
        """
        return _PRERELEASE_OF.get(self, self)

    @classmethod
    def parse(cls, text: str) -> VersionIncrement:
        """Parse "minor", "beta-minor", "beta_minor" or "BetaMinor".

        Raises:
            ValueError: If text names no increment.
        """
        key = re.sub(r"(?<=[a-z])(?=[A-Z])", "-", text.strip()).lower().replace("_", "-")
        try:
            return cls(key)
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ValueError(f"unknown increment '{text}' (expected one of: {choices})") from None


_RANK: dict[VersionIncrement, int] = {
    VersionIncrement.NONE: 0,
    VersionIncrement.UNKNOWN: 1,
    VersionIncrement.PATCH: 2,
    VersionIncrement.MINOR: 3,
    VersionIncrement.MAJOR: 4,
}

_PRERELEASE_OF: dict[VersionIncrement, VersionIncrement] = {
    VersionIncrement.PATCH: VersionIncrement.BETA_PATCH,
    VersionIncrement.MINOR: VersionIncrement.BETA_MINOR,
    VersionIncrement.MAJOR: VersionIncrement.BETA_MAJOR,
}

_BASE_OF: dict[VersionIncrement, VersionIncrement] = {v: k for k, v in _PRERELEASE_OF.items()}


def priority_increment(increments: Iterable[VersionIncrement]) -> VersionIncrement:
    """Pick the highest-ranked increment.

    On equal rank the regular form beats its pre-release twin, so the result
    does not depend on input order. Empty input gives NONE.
    """
    return max(
        increments,
        key=lambda inc: (inc.rank, not inc.is_prerelease),
        default=VersionIncrement.NONE,
    )
