from pathlib import Path

import pytest

from tests.helpers import GitRepoBuilder


@pytest.fixture
def git_repo(tmp_path: Path) -> GitRepoBuilder:
    repo_dir = tmp_path / "repo"
    repo_dir.mkdir()
    return GitRepoBuilder(repo_dir)
