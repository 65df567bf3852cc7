#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdchangemarks/diff/providers.py
"""Line-diff providers producing zero-context unified diff text.

Two interchangeable implementations are available:

- :class:`DifflibDiffProvider` computes the diff in-process with
  :func:`difflib.unified_diff`.
- :class:`GitDiffProvider` writes both texts to temporary files and runs
  ``git diff --no-index --unified=0`` on them.

Both inputs are LF-normalized and compared line by line, so a missing final
newline or a CRLF/LF mismatch never shows up as a change.
"""

from __future__ import annotations

import difflib
import logging
import os
import shutil
import subprocess
import tempfile
import uuid
from pathlib import Path
from typing import Protocol, runtime_checkable

from mdchangemarks.constants import DEFAULT_DIFF_TIMEOUT, DEFAULT_GIT_EXECUTABLE
from mdchangemarks.exceptions import DiffProviderError, ValidationError
from mdchangemarks.options import AnnotationOptions
from mdchangemarks.utils.text import document_lines

logger = logging.getLogger(__name__)


@runtime_checkable
class LineDiffProvider(Protocol):
    """Anything that turns two text blobs into zero-context unified diff text."""

    name: str

    def unified_diff(self, old_text: str, new_text: str) -> str:
        """Return the unified diff between ``old_text`` and ``new_text``."""
        ...


class DifflibDiffProvider:
    """Compute zero-context unified diffs in-process using :mod:`difflib`.

    Examples
    --------
    >>> print(DifflibDiffProvider().unified_diff("a\\nb\\n", "a\\nc\\n"))
    --- old
    +++ new
    @@ -2 +2 @@
    -b
    +c

    """

    name = "difflib"

    def unified_diff(self, old_text: str, new_text: str) -> str:
        """Return the unified diff between ``old_text`` and ``new_text``."""
        diff_lines = difflib.unified_diff(
            document_lines(old_text),
            document_lines(new_text),
            fromfile="old",
            tofile="new",
            n=0,
            lineterm="",
        )
        return "\n".join(diff_lines)


class GitDiffProvider:
    """Compute zero-context unified diffs with ``git diff --no-index``.

    Parameters
    ----------
    git_executable : str, default "git"
        Name or path of the git executable.
    timeout : float, default 60.0
        Seconds to wait for git before raising :class:`DiffProviderError`.
    temp_dir : str or Path, optional
        Directory for the temporary input files (system default if omitted).

    Notes
    -----
    When the executable cannot be found the provider logs a warning and
    returns an empty diff, so the document is copied through unmarked rather
    than failing. A git process that starts but fails is an error.

    """

    name = "git"

    def __init__(
        self,
        git_executable: str = DEFAULT_GIT_EXECUTABLE,
        timeout: float = DEFAULT_DIFF_TIMEOUT,
        temp_dir: str | Path | None = None,
    ):
        """Initialize the git diff provider."""
        self.git_executable = git_executable
        self.timeout = timeout
        self.temp_dir = Path(temp_dir) if temp_dir is not None else Path(tempfile.gettempdir())

    def resolve_executable(self) -> str | None:
        """Return the full path of the git executable, or None if unavailable."""
        return shutil.which(self.git_executable)

    def unified_diff(self, old_text: str, new_text: str) -> str:
        """Return the unified diff between ``old_text`` and ``new_text``.

        Raises
        ------
        DiffProviderError
            If git exits with a status other than 0 (no changes) or 1
            (changes found), or does not finish within the timeout.

        """
        git = self.resolve_executable()
        if git is None:
            logger.warning("Git executable %r not found; treating diff as empty", self.git_executable)
            return ""

        token = uuid.uuid4().hex
        old_path = self.temp_dir / f"old_{token}.md"
        new_path = self.temp_dir / f"new_{token}.md"
        try:
            _write_normalized(old_path, old_text)
            _write_normalized(new_path, new_text)
            command = [
                git,
                "diff",
                "--no-index",
                "--no-color",
                "--no-ext-diff",
                "--unified=0",
                old_path.as_posix(),
                new_path.as_posix(),
            ]
            logger.debug("Running %s", " ".join(command))
            try:
                completed = subprocess.run(
                    command,
                    capture_output=True,
                    timeout=self.timeout,
                    check=False,
                )
            except subprocess.TimeoutExpired as e:
                raise DiffProviderError(
                    f"git diff did not finish within {self.timeout} seconds", provider=self.name, original_error=e
                ) from e
            except OSError as e:
                raise DiffProviderError(f"Could not run git diff: {e}", provider=self.name, original_error=e) from e

            if completed.returncode not in (0, 1):
                stderr = completed.stderr.decode("utf-8", errors="replace").strip()
                raise DiffProviderError(
                    f"git diff exited with status {completed.returncode}: {stderr}", provider=self.name
                )
            return completed.stdout.decode("utf-8", errors="replace")
        finally:
            _remove_quietly(old_path)
            _remove_quietly(new_path)


def _write_normalized(path: Path, text: str) -> None:
    """Write LF-normalized text with a final newline, as UTF-8 without BOM."""
    lines = document_lines(text)
    payload = "\n".join(lines) + "\n" if lines else ""
    path.write_bytes(payload.encode("utf-8"))


def _remove_quietly(path: Path) -> None:
    try:
        if path.exists():
            os.chmod(path, 0o600)
            path.unlink()
    except OSError as exc:
        logger.debug("Could not remove temporary file %s: %s", path, exc)


def get_diff_provider(name: str | None = None, options: AnnotationOptions | None = None) -> LineDiffProvider:
    """Create the diff provider selected by name or options.

    Parameters
    ----------
    name : {"difflib", "git"}, optional
        Provider name. Defaults to ``options.diff_provider``.
    options : AnnotationOptions, optional
        Supplies the default provider name, git executable and timeout.

    Returns
    -------
    LineDiffProvider
        A ready-to-use provider instance.

    Raises
    ------
    ValidationError
        If the provider name is unknown.

    """
    options = options or AnnotationOptions()
    provider_name = name or options.diff_provider
    if provider_name == "difflib":
        return DifflibDiffProvider()
    if provider_name == "git":
        return GitDiffProvider(git_executable=options.git_executable, timeout=options.diff_timeout)
    raise ValidationError(
        f"Unknown diff provider: {provider_name}. Must be one of: difflib, git",
        parameter_name="diff_provider",
        parameter_value=provider_name,
    )
