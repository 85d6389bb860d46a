from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


VersioningErrorKind = Literal[
    "invalid_input",
    "version_not_found",
    "invalid_version_file",
    "io_failed",
    "git_failed",
    "push_failed",
    "commit_not_found",
    "cancelled",
]


@dataclass(frozen=True, slots=True)
class VersioningError:
    kind: VersioningErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message
