#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdchangemarks/git.py
"""Read committed document versions from a git repository.

The annotation engine only needs two texts; this module supplies the old
(and, for commit-to-commit comparisons, the new) text by shelling out to the
``git`` executable. No git library is required.

Examples
--------
    >>> root = find_repository_root(["docs/guide.md"])
    >>> repo = GitRepository(root)
    >>> commit = repo.require_commit("HEAD~1")
    >>> old_text = repo.read_blob(commit, "docs/guide.md")

"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Iterable, Sequence

from mdchangemarks.constants import DEFAULT_DIFF_TIMEOUT, DEFAULT_GIT_EXECUTABLE
from mdchangemarks.exceptions import RepositoryError

logger = logging.getLogger(__name__)


def _walk_up(start: Path) -> Path | None:
    current = start
    while True:
        if (current / ".git").exists():
            return current
        parent = current.parent
        if parent == current:
            return None
        current = parent


def find_repository_root(paths: Iterable[str | Path] | None = None, cwd: str | Path | None = None) -> Path | None:
    """Find the working-tree root of the repository holding the given files.

    Each file's directory is searched upwards first, then the current
    directory. The first directory containing ``.git`` wins.

    Parameters
    ----------
    paths : iterable of str or Path, optional
        Files whose repository should be found.
    cwd : str or Path, optional
        Fallback start directory (defaults to the process working directory).

    Returns
    -------
    Path or None
        The repository root, or None if no repository was found.

    """
    for path in paths or []:
        try:
            found = _walk_up(Path(path).resolve().parent)
        except OSError as e:
            logger.debug("Cannot resolve %s while searching for a repository: %s", path, e)
            continue
        if found is not None:
            return found
    return _walk_up(Path(cwd or Path.cwd()).resolve())


class GitRepository:
    """Thin wrapper around the ``git`` executable for one working tree.

    Parameters
    ----------
    root : str or Path
        Repository working-tree root.
    git_executable : str, default "git"
        Name or path of the git executable.
    timeout : float, default 60.0
        Seconds to wait for each git command.

    """

    def __init__(
        self,
        root: str | Path,
        git_executable: str = DEFAULT_GIT_EXECUTABLE,
        timeout: float = DEFAULT_DIFF_TIMEOUT,
    ):
        """Initialize the repository wrapper."""
        self.root = Path(root).resolve()
        self.git_executable = git_executable
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"GitRepository(root={str(self.root)!r})"

    def _run(self, arguments: Sequence[str], commitish: str | None = None) -> subprocess.CompletedProcess:
        git = shutil.which(self.git_executable)
        if git is None:
            raise RepositoryError(f"Git executable not found: {self.git_executable}", commitish=commitish)
        command = [git, "-C", str(self.root), *arguments]
        logger.debug("Running %s", " ".join(command))
        try:
            return subprocess.run(command, capture_output=True, timeout=self.timeout, check=False)
        except subprocess.TimeoutExpired as e:
            raise RepositoryError(
                f"git {arguments[0]} did not finish within {self.timeout} seconds",
                commitish=commitish,
                original_error=e,
            ) from e
        except OSError as e:
            raise RepositoryError(f"Could not run git: {e}", commitish=commitish, original_error=e) from e

    def resolve_commit(self, commitish: str) -> str | None:
        """Resolve a commit expression to a full commit hash.

        Accepts anything ``git rev-parse`` understands: full or abbreviated
        hashes, ``HEAD``, ``HEAD~n``, branch and tag names.

        Returns
        -------
        str or None
            The commit hash, or None if the expression names no commit.

        """
        completed = self._run(["rev-parse", "--verify", "--quiet", f"{commitish}^{{commit}}"], commitish=commitish)
        if completed.returncode != 0:
            return None
        return completed.stdout.decode("ascii", errors="replace").strip() or None

    def require_commit(self, commitish: str) -> str:
        """Resolve a commit expression, raising if it does not name a commit.

        Raises
        ------
        RepositoryError
            If the expression cannot be resolved.

        """
        commit = self.resolve_commit(commitish)
        if commit is None:
            raise RepositoryError(f"Invalid or non-existent commit: {commitish}", commitish=commitish)
        logger.debug("Resolved %s to %s", commitish, commit)
        return commit

    def read_blob(self, commit: str, relative_path: str) -> str:
        """Return the text of ``relative_path`` at ``commit``.

        A path that does not exist in the commit yields an empty string, so a
        newly added file shows up as entirely added.

        Raises
        ------
        RepositoryError
            If git fails for any other reason.

        """
        object_name = f"{commit}:{relative_path}"
        exists = self._run(["cat-file", "-e", object_name], commitish=commit)
        if exists.returncode != 0:
            logger.debug("%s does not exist in %s", relative_path, commit[:7])
            return ""
        completed = self._run(["cat-file", "blob", object_name], commitish=commit)
        if completed.returncode != 0:
            stderr = completed.stderr.decode("utf-8", errors="replace").strip()
            raise RepositoryError(f"Could not read {relative_path} at {commit[:7]}: {stderr}", commitish=commit)
        return completed.stdout.decode("utf-8-sig", errors="replace")

    def relative_path(self, path: str | Path) -> str | None:
        """Return the repository-relative POSIX path of ``path``, or None if it lies outside."""
        try:
            return Path(path).resolve().relative_to(self.root).as_posix()
        except ValueError:
            return None
