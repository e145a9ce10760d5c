"""Git domain entities."""

from dataclasses import dataclass, field
from datetime import datetime

from git_changelog.git.domain.value_objects import FileChange


@dataclass(frozen=True)
class Commit:
    """Commit entity, identified by its hash."""

    hash: str
    timestamp: datetime
    message: str
    author_name: str
    author_email: str

    @property
    def short_hash(self) -> str:
        """First eight characters of the commit hash."""
        return self.hash[:8]


@dataclass(frozen=True)
class ChangeSet:
    """Snapshot of the commits and file changes between two revisions.

    Totals are derived from ``files`` so they always match the per-file counts.
    A change set without commits means there is nothing to summarize.
    """

    commits: tuple[Commit, ...]
    files: tuple[FileChange, ...]
    from_ref: str
    to_ref: str
    warnings: tuple[str, ...] = field(default=())

    @property
    def total_insertions(self) -> int:
        """Sum of inserted lines over all files."""
        return sum(file_change.insertions for file_change in self.files)

    @property
    def total_deletions(self) -> int:
        """Sum of deleted lines over all files."""
        return sum(file_change.deletions for file_change in self.files)

    @property
    def is_empty(self) -> bool:
        """Whether the range contains no commits."""
        return not self.commits
