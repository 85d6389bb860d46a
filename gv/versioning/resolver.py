from __future__ import annotations

from collections.abc import Sequence

from gv.versioning.increment import VersionIncrement, priority_increment
from gv.versioning.model import GitCommitVersionInfo
from gv.versioning.semver import SemanticVersion

__all__ = ["resolve_increment", "stays_prerelease"]


def stays_prerelease(
    infos: Sequence[GitCommitVersionInfo], current_version: SemanticVersion
) -> bool:
    """True when the pre-release gate applies.

    The product is below 1.0 and no commit in the batch asked to leave
    pre-release. A single exiting commit is enough to lift the gate.
    """
    if not current_version.is_initial_development:
        return False
    return not any(info.exits_prerelease for info in infos)


def resolve_increment(
    infos: Sequence[GitCommitVersionInfo], current_version: SemanticVersion
) -> VersionIncrement:
    """Reduce per-commit hints to the one increment to publish.

    UNKNOWN hints take part in ranking like any other; a batch of only
    UNKNOWN resolves to UNKNOWN, which the publisher treats as nothing to do.
    """
    if not infos:
        return VersionIncrement.NONE

    priority = priority_increment(info.increment for info in infos)
    if stays_prerelease(infos, current_version):
        return priority.to_prerelease()
    return priority
