from __future__ import annotations

from pathlib import Path

from gv.core.result import Err, Ok, Result
from gv.git.repository import GitError, Repository
from gv.versioning.errors import VersioningError
from gv.versioning.model import GitCommit, GitCommitFileInfo


def _git_failed(e: GitError, message: str) -> VersioningError:
    return VersioningError(kind="git_failed", message=message, hint=e.message or None)


class GitService:
    """GitPort backed by the git CLI.

    Commits and tags are made with the publish author email as identity, so
    CI runners without a global git identity still work.
    """

    def __init__(self, *, identity_email: str | None = None) -> None:
        self._identity_email = identity_email

    def get_commits(
        self, directory: Path, since: str | None = None
    ) -> Result[list[GitCommit], VersioningError]:
        result = Repository(directory).log(since=since)
        if isinstance(result, Err):
            return Err(_git_failed(result.error, "failed to list commits"))

        return Ok(
            [
                GitCommit(
                    id=record.sha,
                    subject=record.subject,
                    body=record.body,
                    changed_files=tuple(
                        GitCommitFileInfo(path=f.path, status=f.status) for f in record.files
                    ),
                )
                for record in result.value
            ]
        )

    def list_tags(self, directory: Path, pattern: str) -> Result[list[str], VersioningError]:
        result = Repository(directory).merged_tags(pattern)
        if isinstance(result, Err):
            return Err(_git_failed(result.error, f"failed to list tags ({pattern})"))
        return result

    def commit_changes(
        self, directory: Path, message: str, author_email: str
    ) -> Result[None, VersioningError]:
        repo = Repository(directory)

        add = repo.add_all()
        if isinstance(add, Err):
            return Err(_git_failed(add.error, "git add failed"))

        commit = repo.commit(message, author_email=author_email)
        if isinstance(commit, Err):
            e = commit.error
            return Err(
                VersioningError(
                    kind="git_failed",
                    message="git commit failed",
                    hint=e.message or "Check that the version files changed, then retry.",
                )
            )
        return Ok(None)

    def create_tag(
        self, directory: Path, tag_name: str, commit_id: str
    ) -> Result[None, VersioningError]:
        result = Repository(directory).tag(tag_name, commit_id, tagger_email=self._identity_email)
        if isinstance(result, Err):
            return Err(_git_failed(result.error, f"failed to create tag: {tag_name}"))
        return Ok(None)

    def push_remote(
        self, directory: Path, remote_name: str, refspec: str
    ) -> Result[None, VersioningError]:
        result = Repository(directory).push(remote_name, refspec)
        if isinstance(result, Err):
            return Err(
                VersioningError(
                    kind="push_failed",
                    message=f"git push {remote_name} {refspec} failed",
                    hint=result.error.message or None,
                )
            )
        return Ok(None)
