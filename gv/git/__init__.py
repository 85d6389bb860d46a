"""Git operations module.

Usage:
    from gv.git import Repository

    repo = Repository(Path("/path/to/repo"))
    match repo.merged_tags("v*"):
        case Ok(tags):
            print(f"release tags: {tags}")
        case Err(e):
            print(f"Error: {e.message}")
"""

from gv.git.repository import (
    ChangedFile,
    CommitRecord,
    GitError,
    Repository,
)

__all__ = [
    "ChangedFile",
    "CommitRecord",
    "GitError",
    "Repository",
]
