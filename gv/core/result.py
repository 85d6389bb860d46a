"""Result type for explicit error handling.

Every step of the publish workflow can fail (a version file cannot be read,
git refuses a commit, the remote rejects a push). Instead of raising, those
operations return a Result so callers decide explicitly whether to stop.

Usage:
    def read_version(path: Path) -> Result[SemanticVersion, VersioningError]:
        ...

    match read_version(path):
        case Ok(version):
            print(f"current: {version}")
        case Err(error):
            print(f"failed: {error.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result.

    Attributes:
        value: The success value.
    """

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result.

    Attributes:
        error: The error value.
    """

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Ok[T] | Err[E]
