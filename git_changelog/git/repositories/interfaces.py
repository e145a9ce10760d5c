"""Repository interfaces for Git operations."""

from abc import ABC, abstractmethod
from pathlib import Path

from git_changelog.git.domain.entities import Commit
from git_changelog.git.domain.value_objects import CommitRange, FileStat


class GitRepository(ABC):
    """Interface for Git repository operations."""

    @abstractmethod
    def is_repository(self, repo_path: Path) -> bool:
        """
        Check whether the path is inside a git work tree.

        Args:
            repo_path: Path to the git repository

        Returns:
            True if git recognises the path as a repository
        """
        ...

    @abstractmethod
    def list_commits(self, repo_path: Path, commit_range: CommitRange) -> tuple[Commit, ...]:
        """
        List commits in a revision range.

        Args:
            repo_path: Path to the git repository
            commit_range: Range of commits to retrieve

        Returns:
            Tuple of commits in git's native (reverse chronological) order
        """
        ...

    @abstractmethod
    def list_file_stats(self, repo_path: Path, commit_range: CommitRange) -> tuple[FileStat, ...]:
        """
        List per-file insertion/deletion counts for a revision range.

        Args:
            repo_path: Path to the git repository
            commit_range: Range to summarize

        Returns:
            One FileStat per changed file, in git's order
        """
        ...

    @abstractmethod
    def get_file_diff(self, repo_path: Path, commit_range: CommitRange, file_path: str) -> str:
        """
        Get the unified diff of a single file for a revision range.

        Args:
            repo_path: Path to the git repository
            commit_range: Range to diff
            file_path: Path to the file relative to repository root

        Returns:
            Diff content for the specific file
        """
        ...

    @abstractmethod
    def list_tags(self, repo_path: Path) -> tuple[str, ...]:
        """
        List tags, newest version first.

        Args:
            repo_path: Path to the git repository

        Returns:
            Tag names sorted by descending version
        """
        ...

    @abstractmethod
    def get_current_branch(self, repo_path: Path) -> str:
        """
        Get the name of the checked-out branch.

        Args:
            repo_path: Path to the git repository

        Returns:
            Branch name, or ``HEAD`` when detached
        """
        ...

    @abstractmethod
    def get_remote_url(self, repo_path: Path, remote_name: str) -> str:
        """
        Get the fetch URL of a remote.

        Args:
            repo_path: Path to the git repository
            remote_name: Name of the remote, e.g. ``origin``

        Returns:
            The remote URL
        """
        ...
