import shutil
import subprocess
from datetime import datetime, timezone
from pathlib import Path

import pytest

from git_changelog.git.domain.entities import ChangeSet, Commit
from git_changelog.git.domain.value_objects import FileChange

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def make_commit(
    hash: str = "abcdef1234567890",
    message: str = "fix: null pointer",
    author_name: str = "A",
    author_email: str = "a@example.com",
) -> Commit:
    return Commit(
        hash=hash,
        timestamp=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        message=message,
        author_name=author_name,
        author_email=author_email,
    )


def make_change_set(
    commits: tuple[Commit, ...] | None = None,
    files: tuple[FileChange, ...] | None = None,
    from_ref: str = "v1.0.0",
    to_ref: str = "HEAD",
) -> ChangeSet:
    return ChangeSet(
        commits=(make_commit(),) if commits is None else commits,
        files=(FileChange(path="a.ts", insertions=3, deletions=1),) if files is None else files,
        from_ref=from_ref,
        to_ref=to_ref,
    )


class GitRepoBuilder:
    """Builds a throwaway git repository for extractor tests."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.git("init")
        self.git("checkout", "-b", "main")
        self.git("config", "user.name", "Test User")
        self.git("config", "user.email", "test@example.com")
        self.git("config", "commit.gpgsign", "false")
        self.git("config", "tag.gpgsign", "false")

    def git(self, *args: str) -> str:
        result = subprocess.run(
            ["git", *args],
            cwd=self.path,
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout

    def write(self, relative_path: str, content: str) -> None:
        file_path = self.path / relative_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")

    def commit(self, message: str) -> str:
        self.git("add", "-A")
        self.git("commit", "-m", message)
        return self.git("rev-parse", "HEAD").strip()

    def tag(self, name: str) -> None:
        self.git("tag", name)
