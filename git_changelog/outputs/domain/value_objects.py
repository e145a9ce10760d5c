"""Value objects for the outputs domain."""

from dataclasses import dataclass

NO_CHANGES_MESSAGE = "No changes found"


@dataclass(frozen=True)
class ChangelogOutputs:
    """Outputs of one changelog generation run.

    Attributes:
        changelog: The generated changelog text
        changelog_file: Path the changelog was written to, or empty
        changes_count: Number of commits in the range, as a decimal string
    """

    changelog: str
    changelog_file: str
    changes_count: str

    @classmethod
    def no_changes(cls) -> "ChangelogOutputs":
        """Outputs reported when the range contains no commits."""
        return cls(changelog=NO_CHANGES_MESSAGE, changelog_file="", changes_count="0")

    def as_dict(self) -> dict[str, str]:
        """Outputs keyed by their GitHub Actions output names."""
        return {
            "changelog": self.changelog,
            "changelog_file": self.changelog_file,
            "changes_count": self.changes_count,
        }
