"""Value objects for Git domain."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CommitRange:
    """Range of commits between two revisions (from exclusive, to inclusive)."""

    from_ref: str
    to_ref: str

    @property
    def spec(self) -> str:
        """Revision range in git's two-dot notation."""
        return f"{self.from_ref}..{self.to_ref}"


@dataclass(frozen=True)
class FileChange:
    """Information about a file changed in a revision range."""

    path: str
    insertions: int
    deletions: int
    diff_text: str = ""  # Empty when the per-file diff could not be retrieved

    def __post_init__(self) -> None:
        """Validate the line counts."""
        if self.insertions < 0 or self.deletions < 0:
            raise ValueError(
                f"Line counts must be non-negative for {self.path}: "
                f"+{self.insertions} -{self.deletions}"
            )

    @property
    def total_changes(self) -> int:
        """Combined number of inserted and deleted lines."""
        return self.insertions + self.deletions


@dataclass(frozen=True)
class FileStat:
    """Insertion/deletion counts for one file, as reported by git."""

    path: str
    insertions: int
    deletions: int


@dataclass(frozen=True)
class FileDiffResult:
    """Outcome of retrieving the diff of a single file.

    Attributes:
        path: Path of the file relative to repository root
        diff_text: Unified diff text (empty on failure)
        error: Failure description, None on success
    """

    path: str
    diff_text: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the diff was retrieved successfully."""
        return self.error is None


@dataclass(frozen=True)
class RepositoryInfo:
    """GitHub coordinates of a repository."""

    owner: str
    repo: str

    @property
    def full_name(self) -> str:
        """Repository name in ``owner/repo`` form."""
        return f"{self.owner}/{self.repo}"
