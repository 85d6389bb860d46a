"""Git repository abstraction.

This module provides the Repository class for the git operations the
publish workflow needs. All operations return Result types.

Usage:
    repo = Repository(Path("/path/to/repo"))

    match repo.log(since="v1.2.0"):
        case Ok(records):
            for record in records:
                print(record.sha[:8], record.subject)
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from gv.core.result import Err, Ok, Result
from gv.platform.process import ProcessError
from gv.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

# Separators for `git log --format`; neither can appear in a commit message.
_RECORD_SEP = "\x1e"
_FIELD_SEP = "\x1f"
_LOG_FORMAT = "%x1e%H%x1f%s%x1f%b%x1f"

_NO_HEAD_MARKERS = ("malformed object name HEAD", "ambiguous argument 'HEAD'")

__all__ = [
    "ChangedFile",
    "CommitRecord",
    "GitError",
    "Repository",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class ChangedFile:
    """A file touched by a commit (`git log --name-status`).

    Attributes:
        status: Status letter with optional score (e.g. "M", "A", "R100")
        path: Path after the change
    """

    status: str
    path: str


@dataclass(frozen=True, slots=True)
class CommitRecord:
    """A commit as reported by `git log`."""

    sha: str
    subject: str
    body: str = ""
    files: tuple[ChangedFile, ...] = field(default_factory=tuple)


class Repository:
    """Git repository abstraction.

    Attributes:
        path: Path to the repository root
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        """Check if this is a valid git repository (.git directory or file)."""
        return (self.path / ".git").exists()

    def current_branch(self) -> str | None:
        """Get current branch name.

        Returns None if detached HEAD or error.
        """
        result = self._run(["rev-parse", "--abbrev-ref", "HEAD"])
        match result:
            case Ok(stdout):
                branch = stdout.strip()
                return None if branch == "HEAD" else branch
            case Err(_):
                return None

    def is_clean(self) -> bool:
        """Check if working tree is clean (no changes).

        Returns False if status cannot be determined.
        """
        result = self._run(["status", "--porcelain"])
        match result:
            case Ok(stdout):
                return stdout.strip() == ""
            case Err(_):
                return False

    def merged_tags(self, pattern: str = "*") -> Result[list[str], GitError]:
        """List tags matching a glob that are reachable from HEAD.

        Returns:
            Ok(tag names) in git's listing order, empty when none match
            Err(GitError) on any other failure
        """
        result = self._run(["tag", "--list", pattern, "--merged", "HEAD"])
        match result:
            case Ok(stdout):
                return Ok([line.strip() for line in stdout.splitlines() if line.strip()])
            case Err(e):
                # A repository without commits has no HEAD to merge into.
                if any(marker in e.stderr for marker in _NO_HEAD_MARKERS):
                    return Ok([])
                return Err(self._error("tag --merged", e, "git tag --list failed"))

    def log(self, since: str | None = None) -> Result[list[CommitRecord], GitError]:
        """List commits reachable from HEAD, newest first.

        Args:
            since: Exclude commits reachable from this ref (e.g. the last tag)

        Returns:
            Ok(list of CommitRecord) on success
            Err(GitError) on failure
        """
        args = ["log", f"--format={_LOG_FORMAT}", "--name-status"]
        args.append(f"{since}..HEAD" if since else "HEAD")
        result = self._run(args)
        match result:
            case Err(e):
                return Err(self._error("log", e, "git log failed"))
            case Ok(stdout):
                return Ok(self._parse_log(stdout))

    def add_all(self) -> Result[None, GitError]:
        """Stage every change in the working tree."""
        result = self._run(["add", "-A"])
        if isinstance(result, Err):
            return Err(self._error("add -A", result.error, "git add failed"))
        return Ok(None)

    def commit(
        self,
        message: str,
        *,
        author_name: str | None = None,
        author_email: str | None = None,
    ) -> Result[str, GitError]:
        """Commit the staged changes.

        Returns:
            Ok(sha) of the new commit on success
            Err(GitError) on failure (nothing to commit, missing identity, hooks)
        """
        result = self._run(
            ["commit", "-m", message],
            config=_identity(author_name, author_email),
        )
        if isinstance(result, Err):
            e = result.error
            return Err(
                GitError(
                    command="commit",
                    message=e.stderr.strip() or e.stdout.strip() or "git commit failed",
                    returncode=e.returncode,
                )
            )

        head = self._run(["rev-parse", "HEAD"])
        if isinstance(head, Err):
            return Err(self._error("rev-parse HEAD", head.error, "git rev-parse failed"))
        return Ok(head.value.strip())

    def tag(
        self,
        name: str,
        commit_id: str,
        *,
        message: str | None = None,
        tagger_name: str | None = None,
        tagger_email: str | None = None,
    ) -> Result[None, GitError]:
        """Create an annotated tag pointing at a commit."""
        result = self._run(
            ["tag", "-a", name, commit_id, "-m", message or name],
            config=_identity(tagger_name, tagger_email),
        )
        if isinstance(result, Err):
            return Err(self._error("tag", result.error, "git tag failed"))
        return Ok(None)

    def push(self, remote: str, refspec: str) -> Result[str, GitError]:
        """Push a single ref to a remote.

        Returns:
            Ok(output) on success
            Err(GitError) on failure (rejected, auth, unreachable remote)
        """
        result = self._run(["push", remote, refspec])
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command=f"push {remote} {refspec}",
                        message=e.stderr.strip() or e.stdout.strip() or "push failed",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                return Ok(stdout.strip())

    def _run(
        self,
        args: list[str],
        *,
        config: dict[str, str] | None = None,
    ) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        command = args[0] if args else ""
        timeout = (
            _GIT_NETWORK_TIMEOUT_SECONDS
            if command in {"fetch", "pull", "push", "clone"}
            else _GIT_TIMEOUT_SECONDS
        )
        options: list[str] = []
        for key, value in (config or {}).items():
            options.extend(["-c", f"{key}={value}"])
        return run_process(
            ["git", "-C", str(self.path), *options, *args],
            cwd=self.path,
            timeout=timeout,
        )

    def _error(self, command: str, e: ProcessError, fallback: str) -> GitError:
        return GitError(
            command=command,
            message=e.stderr.strip() or fallback,
            returncode=e.returncode,
        )

    def _parse_log(self, output: str) -> list[CommitRecord]:
        """Parse `git log --format=<_LOG_FORMAT> --name-status` output."""
        records: list[CommitRecord] = []

        for chunk in output.split(_RECORD_SEP):
            if not chunk.strip():
                continue
            parts = chunk.split(_FIELD_SEP, 3)
            if len(parts) < 3:
                continue

            sha = parts[0].strip()
            subject = parts[1].strip()
            body = parts[2].strip()
            files_block = parts[3] if len(parts) > 3 else ""

            records.append(
                CommitRecord(
                    sha=sha,
                    subject=subject,
                    body=body,
                    files=tuple(self._parse_name_status(files_block)),
                )
            )

        return records

    def _parse_name_status(self, block: str) -> list[ChangedFile]:
        """Parse name-status lines: "M\\tpath" or "R100\\told\\tnew"."""
        files: list[ChangedFile] = []
        for line in block.splitlines():
            cols = line.split("\t")
            if len(cols) < 2 or not cols[0]:
                continue
            files.append(ChangedFile(status=cols[0], path=cols[-1]))
        return files


def _identity(name: str | None, email: str | None) -> dict[str, str]:
    """Build `-c user.*` overrides; the name falls back to the email's local part."""
    if not email:
        return {}
    return {
        "user.name": name or email.split("@", 1)[0],
        "user.email": email,
    }
