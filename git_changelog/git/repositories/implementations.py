"""Concrete implementation of Git repository operations."""

import subprocess
from datetime import datetime
from pathlib import Path

from git_changelog.git.domain.entities import Commit
from git_changelog.git.domain.value_objects import CommitRange, FileStat
from git_changelog.git.repositories.interfaces import GitRepository

# Unit and record separators never appear in commit subjects or author names
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_LOG_FORMAT = "%x1f".join(["%H", "%aI", "%s", "%an", "%ae"]) + "%x1e"


class GitRepositoryImpl(GitRepository):
    """Concrete implementation of Git repository operations using git commands."""

    def is_repository(self, repo_path: Path) -> bool:
        """
        Check whether the path is inside a git repository, bare or not.

        Args:
            repo_path: Path to the git repository

        Returns:
            True if git recognises the path as a repository
        """
        try:
            output = self._run_git(repo_path, ["rev-parse", "--git-dir"])
        except RuntimeError:
            return False
        return bool(output.strip())

    def list_commits(self, repo_path: Path, commit_range: CommitRange) -> tuple[Commit, ...]:
        """
        List commits in a revision range.

        Args:
            repo_path: Path to the git repository
            commit_range: Range of commits to retrieve

        Returns:
            Tuple of commits in git's native (reverse chronological) order

        Raises:
            RuntimeError: If git cannot resolve the range
        """
        output = self._run_git(
            repo_path, ["log", f"--format={_LOG_FORMAT}", commit_range.spec]
        )

        commits: list[Commit] = []
        for record in output.split(_RECORD_SEP):
            record = record.strip("\n")
            if not record:
                continue
            parts = record.split(_FIELD_SEP)
            if len(parts) != 5:
                raise RuntimeError(f"Invalid commit format: {record!r}")
            commit_hash, date_str, message, author_name, author_email = parts
            commits.append(
                Commit(
                    hash=commit_hash,
                    timestamp=datetime.fromisoformat(date_str),
                    message=message,
                    author_name=author_name,
                    author_email=author_email,
                )
            )

        return tuple(commits)

    def list_file_stats(self, repo_path: Path, commit_range: CommitRange) -> tuple[FileStat, ...]:
        """
        List per-file insertion/deletion counts for a revision range.

        Renames are reported as a deletion plus an addition so that every entry
        carries a plain path that ``get_file_diff`` can use. Records are
        NUL-terminated so paths come back unquoted.

        Args:
            repo_path: Path to the git repository
            commit_range: Range to summarize

        Returns:
            One FileStat per changed file, in git's order

        Raises:
            RuntimeError: If git cannot resolve the range
        """
        output = self._run_git(
            repo_path, ["diff", "--numstat", "-z", "--no-renames", commit_range.spec]
        )

        stats: list[FileStat] = []
        for record in output.split("\0"):
            if not record:
                continue
            parts = record.split("\t", 2)
            if len(parts) != 3:
                continue
            insertions, deletions, file_path = parts
            stats.append(
                FileStat(
                    path=file_path,
                    insertions=self._parse_count(insertions),
                    deletions=self._parse_count(deletions),
                )
            )

        return tuple(stats)

    def get_file_diff(self, repo_path: Path, commit_range: CommitRange, file_path: str) -> str:
        """
        Get the unified diff of a single file for a revision range.

        Args:
            repo_path: Path to the git repository
            commit_range: Range to diff
            file_path: Path to the file relative to repository root

        Returns:
            Diff content for the specific file

        Raises:
            RuntimeError: If the diff cannot be retrieved
        """
        try:
            return self._run_git(
                repo_path, ["diff", commit_range.spec, "--", f":(literal){file_path}"]
            )
        except RuntimeError as e:
            raise RuntimeError(f"Failed to get file diff for {file_path}: {e}") from e

    def list_tags(self, repo_path: Path) -> tuple[str, ...]:
        """
        List tags, newest version first.

        Args:
            repo_path: Path to the git repository

        Returns:
            Tag names sorted by descending version
        """
        output = self._run_git(repo_path, ["tag", "--list", "--sort=-version:refname"])
        return tuple(line.strip() for line in output.splitlines() if line.strip())

    def get_current_branch(self, repo_path: Path) -> str:
        """
        Get the name of the checked-out branch.

        Args:
            repo_path: Path to the git repository

        Returns:
            Branch name, or ``HEAD`` when detached
        """
        return self._run_git(repo_path, ["rev-parse", "--abbrev-ref", "HEAD"]).strip()

    def get_remote_url(self, repo_path: Path, remote_name: str) -> str:
        """
        Get the fetch URL of a remote.

        Args:
            repo_path: Path to the git repository
            remote_name: Name of the remote, e.g. ``origin``

        Returns:
            The remote URL
        """
        return self._run_git(repo_path, ["remote", "get-url", remote_name]).strip()

    @staticmethod
    def _run_git(repo_path: Path, args: list[str]) -> str:
        """Run a git command in the repository and return its stdout."""
        try:
            result = subprocess.run(
                ["git", *args],
                cwd=repo_path,
                capture_output=True,
                text=True,
                encoding="utf-8",
                check=True,
            )
        except subprocess.CalledProcessError as e:
            error_msg = e.stderr.strip() if e.stderr else str(e)
            raise RuntimeError(f"git {args[0]} failed: {error_msg}") from e
        except OSError as e:
            raise RuntimeError(f"Failed to run git in {repo_path}: {e}") from e
        return result.stdout

    @staticmethod
    def _parse_count(value: str) -> int:
        """Parse a numstat count; binary files report ``-``."""
        return int(value) if value.isdigit() else 0
