"""
Test fixtures for integration tests.

This module provides reusable fixtures for testing against a real git
binary, including an availability check and a small repository builder.
"""

import os
import shutil
import subprocess
from pathlib import Path
from typing import Dict, List, Optional

import pytest


@pytest.fixture(scope="session")
def git_check() -> str:
    """Check that a git executable is available."""
    git = shutil.which("git")
    if git is None:
        pytest.skip("git not available")
    return git


class GitRepoBuilder:
    """Creates commits with fixed authors and dates in a scratch repository."""

    def __init__(self, root: Path):
        self.root = root
        self._clock = 1704067200  # 2024-01-01T00:00:00Z
        self.git("init", "-q")
        self.git("config", "user.name", "Test User")
        self.git("config", "user.email", "test@example.com")
        self.git("config", "commit.gpgsign", "false")

    def git(self, *args: str, env: Optional[Dict[str, str]] = None) -> str:
        full_env = {**os.environ, "GIT_CONFIG_NOSYSTEM": "1", "HOME": str(self.root), **(env or {})}
        result = subprocess.run(
            ["git", *args], cwd=self.root, capture_output=True, text=True, check=True, env=full_env
        )
        return result.stdout

    def write(self, relative_path: str, lines: List[str]) -> None:
        path = self.root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("".join(f"{line}\n" for line in lines))

    def commit(self, message: str, author: str = "Test User") -> str:
        """Commit everything in the working tree and return the new commit id."""
        self._clock += 3600
        date = f"{self._clock} +0000"
        env = {
            "GIT_AUTHOR_NAME": author,
            "GIT_AUTHOR_EMAIL": f"{author.split()[0].lower()}@example.com",
            "GIT_AUTHOR_DATE": date,
            "GIT_COMMITTER_DATE": date,
        }
        self.git("add", "-A")
        self.git("commit", "-q", "-m", message, env=env)
        return self.git("rev-parse", "HEAD").strip()


@pytest.fixture
def git_repo(git_check: str, tmp_path: Path) -> GitRepoBuilder:
    """An empty git repository in a temporary directory."""
    repo_root = tmp_path / "repo"
    repo_root.mkdir()
    return GitRepoBuilder(repo_root)
