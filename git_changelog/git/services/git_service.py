"""Git service for extracting change sets from repository history."""

import logging
import re
from pathlib import Path

from git_changelog.git.domain.entities import ChangeSet
from git_changelog.git.domain.exceptions import HistoryError
from git_changelog.git.domain.value_objects import (
    CommitRange,
    FileChange,
    FileDiffResult,
    RepositoryInfo,
)
from git_changelog.git.repositories.interfaces import GitRepository

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = "main"

_GITHUB_REMOTE_PATTERN = re.compile(
    r"github\.com[:/](?P<owner>[^/]+)/(?P<repo>[^/]+?)(?:\.git)?/?$"
)


class GitService:
    """Service for reading change history from a git repository."""

    def __init__(self, git_repository: GitRepository, repo_path: Path | None = None) -> None:
        """
        Initialize GitService.

        Args:
            git_repository: Repository implementation for Git operations
            repo_path: Path to the git repository. Defaults to the current directory
        """
        self._git_repository = git_repository
        self._repo_path = repo_path or Path.cwd()

    def extract(self, from_ref: str, to_ref: str) -> ChangeSet:
        """
        Extract the commits and file changes between two revisions.

        Per-file diff failures are not fatal: the file is kept with its counts,
        an empty diff, and a warning recorded on the change set.

        Args:
            from_ref: Older revision (exclusive)
            to_ref: Newer revision (inclusive)

        Returns:
            ChangeSet describing the range

        Raises:
            HistoryError: If the repository is unusable or a revision cannot be resolved
        """
        if not self._git_repository.is_repository(self._repo_path):
            raise HistoryError(f"Path is not a git repository: {self._repo_path}")

        commit_range = CommitRange(from_ref=from_ref, to_ref=to_ref)

        try:
            commits = self._git_repository.list_commits(self._repo_path, commit_range)
            file_stats = self._git_repository.list_file_stats(self._repo_path, commit_range)
        except RuntimeError as e:
            raise HistoryError(f"Failed to analyze git changes: {e}") from e

        files: list[FileChange] = []
        warnings: list[str] = []
        # Sequential on purpose: warnings must come out in file order
        for file_stat in file_stats:
            result = self._get_file_diff(commit_range, file_stat.path)
            if not result.ok:
                warning = f"Failed to get diff for {result.path}: {result.error}"
                logger.warning(warning)
                warnings.append(warning)
            files.append(
                FileChange(
                    path=file_stat.path,
                    insertions=file_stat.insertions,
                    deletions=file_stat.deletions,
                    diff_text=result.diff_text,
                )
            )

        change_set = ChangeSet(
            commits=commits,
            files=tuple(files),
            from_ref=from_ref,
            to_ref=to_ref,
            warnings=tuple(warnings),
        )
        logger.debug(
            "Extracted %d commits and %d files from %s",
            len(change_set.commits),
            len(change_set.files),
            commit_range.spec,
        )
        return change_set

    def get_latest_tag(self) -> str | None:
        """
        Get the most recent tag by version ordering.

        Returns:
            The tag name, or None if there are no tags or they cannot be read
        """
        try:
            tags = self._git_repository.list_tags(self._repo_path)
        except RuntimeError as e:
            logger.warning("Failed to get latest tag: %s", e)
            return None
        return tags[0] if tags else None

    def get_current_branch(self) -> str:
        """
        Get the currently checked-out branch.

        Returns:
            Branch name, or ``DEFAULT_BRANCH`` when detached or unreadable
        """
        try:
            branch = self._git_repository.get_current_branch(self._repo_path)
        except RuntimeError as e:
            logger.warning("Failed to get current branch: %s", e)
            return DEFAULT_BRANCH
        if not branch or branch == "HEAD":
            return DEFAULT_BRANCH
        return branch

    def get_repository_info(self, remote_name: str = "origin") -> RepositoryInfo | None:
        """
        Get the GitHub owner and repository name from a remote.

        Args:
            remote_name: Remote to inspect

        Returns:
            RepositoryInfo, or None when the remote is missing or not on GitHub
        """
        try:
            url = self._git_repository.get_remote_url(self._repo_path, remote_name)
        except RuntimeError as e:
            logger.warning("Failed to get repository info: %s", e)
            return None

        match = _GITHUB_REMOTE_PATTERN.search(url)
        if not match:
            return None
        return RepositoryInfo(owner=match.group("owner"), repo=match.group("repo"))

    def _get_file_diff(self, commit_range: CommitRange, file_path: str) -> FileDiffResult:
        """Retrieve one file's diff, capturing failures in the result."""
        try:
            diff_text = self._git_repository.get_file_diff(
                self._repo_path, commit_range, file_path
            )
        except RuntimeError as e:
            return FileDiffResult(path=file_path, error=str(e))
        return FileDiffResult(path=file_path, diff_text=diff_text)
