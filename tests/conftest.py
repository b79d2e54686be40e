"""Pytest fixtures for Forge Session Sync tests."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from session_sync.config import Settings, override_settings, reset_settings
from session_sync.core.logging import LOGGER_NAME

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture
def test_settings(tmp_path: Path) -> Generator[Settings, None, None]:
    """Provide settings rooted in a temporary directory."""
    settings = Settings(
        state_root=tmp_path / "forge",
        plans_dir=tmp_path / "plans",
        log_level="DEBUG",
    )
    override_settings(settings)
    yield settings
    reset_settings()


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Generator[None, None, None]:
    """Close file handlers installed by ``configure_logging`` between tests."""
    yield
    package_logger = logging.getLogger(LOGGER_NAME)
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Git repositories
# ---------------------------------------------------------------------------

_GIT_ENV = {
    "GIT_AUTHOR_NAME": "Test Author",
    "GIT_AUTHOR_EMAIL": "author@example.com",
    "GIT_COMMITTER_NAME": "Test Author",
    "GIT_COMMITTER_EMAIL": "author@example.com",
    "GIT_CONFIG_NOSYSTEM": "1",
}


def run_git(repo: Path, *args: str) -> str:
    """Run git in *repo* with a fixed identity and return stdout."""
    env = {**os.environ, **_GIT_ENV}
    proc = subprocess.run(
        ["git", "-c", "commit.gpgsign=false", *args],
        cwd=repo,
        env=env,
        capture_output=True,
        text=True,
        check=True,
    )
    return proc.stdout


@pytest.fixture
def make_git_repo(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture for git repositories with N commits.

    Example:
        def test_something(make_git_repo):
            repo = make_git_repo(commits=3, branch="feature/x")
    """
    if shutil.which("git") is None:
        pytest.skip("git executable not available")

    def _make_git_repo(
        commits: int = 3,
        branch: str = "main",
        remote: str | None = None,
        name: str = "repo",
    ) -> Path:
        repo = tmp_path / name
        repo.mkdir(parents=True)
        run_git(repo, "init", "-q")
        run_git(repo, "symbolic-ref", "HEAD", f"refs/heads/{branch}")
        if remote:
            run_git(repo, "remote", "add", "origin", remote)
        for i in range(commits):
            (repo / f"file{i}.txt").write_text(f"line {i}\n", encoding="utf-8")
            run_git(repo, "add", f"file{i}.txt")
            run_git(repo, "commit", "-q", "-m", f"Commit number {i}")
        return repo

    return _make_git_repo
