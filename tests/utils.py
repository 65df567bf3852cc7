"""Test utilities for the mdchangemarks test suite.

This module provides helpers for temporary directories and for building
small git repositories that the repository and CLI tests run against.
"""

import shutil
import subprocess
import tempfile
from pathlib import Path

GIT_AVAILABLE = shutil.which("git") is not None


def create_test_temp_dir() -> Path:
    """Create a temporary directory for test files."""
    return Path(tempfile.mkdtemp(prefix="mdchangemarks_test_"))


def cleanup_test_dir(path: Path) -> None:
    """Remove a test directory and everything in it."""
    shutil.rmtree(path, ignore_errors=True)


def run_git(repo: Path, *args: str) -> str:
    """Run a git command in ``repo`` with a fixed identity and return stdout."""
    completed = subprocess.run(
        [
            "git",
            "-c",
            "user.name=Test User",
            "-c",
            "user.email=test@example.com",
            "-c",
            "commit.gpgsign=false",
            "-c",
            "core.autocrlf=false",
            *args,
        ],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    )
    return completed.stdout


def init_repo(path: Path) -> Path:
    """Initialise an empty git repository at ``path``."""
    path.mkdir(parents=True, exist_ok=True)
    run_git(path, "init", "-q")
    return path


def commit_files(repo: Path, files: dict[str, str], message: str = "update") -> str:
    """Write ``files`` (relative path to content), commit them and return the commit hash."""
    for relative, content in files.items():
        target = repo / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content.encode("utf-8"))
        run_git(repo, "add", relative)
    run_git(repo, "commit", "-q", "-m", message)
    return run_git(repo, "rev-parse", "HEAD").strip()
