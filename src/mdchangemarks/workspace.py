#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdchangemarks/workspace.py
"""Batch processing of Markdown files in a working tree.

This module resolves file patterns, chooses which two versions of each file
to compare, and writes the annotated (or stripped) result back in place.
A failure on one file is recorded in its :class:`FileResult` and the batch
continues with the next file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Sequence

from mdchangemarks.annotator import annotate_markdown
from mdchangemarks.constants import DEFAULT_COMMITISH, MARKDOWN_EXTENSIONS
from mdchangemarks.diff.providers import LineDiffProvider, get_diff_provider
from mdchangemarks.exceptions import (
    FileAccessError,
    FileNotFoundError,
    MdChangeMarksError,
    RepositoryError,
    ValidationError,
)
from mdchangemarks.git import GitRepository
from mdchangemarks.options import AnnotationOptions
from mdchangemarks.stripper import strip_change_markers
from mdchangemarks.utils.text import detect_line_ending

logger = logging.getLogger(__name__)

_GLOB_CHARS = ("*", "?", "[")


class ComparisonMode(Enum):
    """Which two versions of a file are compared."""

    WORKSPACE_VS_HEAD = "workspace_vs_head"
    WORKSPACE_VS_COMMIT = "workspace_vs_commit"
    COMMIT_VS_COMMIT = "commit_vs_commit"

    @classmethod
    def from_commits(cls, source: str | None, target: str | None) -> "ComparisonMode":
        """Select the mode from the optional source and target commit expressions.

        Raises
        ------
        ValidationError
            If a target is given without a source.

        """
        if source is None and target is not None:
            raise ValidationError(
                "A target commit requires a source commit",
                parameter_name="target",
                parameter_value=target,
            )
        if source is None:
            return cls.WORKSPACE_VS_HEAD
        if target is None:
            return cls.WORKSPACE_VS_COMMIT
        return cls.COMMIT_VS_COMMIT


class FileStatus(Enum):
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    FAILED = "failed"


@dataclass
class FileResult:
    """Outcome of processing a single file.

    Attributes
    ----------
    path : Path
        The processed file.
    status : FileStatus
        Whether the file was rewritten, left as it was, or failed.
    relative_path : str, optional
        Repository-relative path, when known.
    error : MdChangeMarksError, optional
        The error that made the file fail.

    """

    path: Path
    status: FileStatus
    relative_path: str | None = None
    error: MdChangeMarksError | None = None

    @property
    def ok(self) -> bool:
        return self.status is not FileStatus.FAILED

    @property
    def message(self) -> str:
        if self.error is not None:
            return self.error.message
        return self.status.value


def resolve_glob_pattern(pattern: str, base_dir: str | Path | None = None) -> list[Path]:
    """Resolve a file pattern to the existing files it matches.

    ``*`` and ``?`` match within one path segment and ``**`` matches any
    number of directories. Patterns may be absolute or relative to
    ``base_dir``. A pattern without wildcards names a single file.

    Parameters
    ----------
    pattern : str
        Glob pattern such as ``*.md``, ``docs/**/*.md`` or ``README.md``.
    base_dir : str or Path, optional
        Directory relative patterns are resolved against (default: cwd).

    Returns
    -------
    list of Path
        Sorted, de-duplicated absolute paths of matching files.

    Examples
    --------
    >>> resolve_glob_pattern("docs/**/*.md")  # doctest: +SKIP
    [PosixPath('/repo/docs/index.md'), PosixPath('/repo/docs/guide/setup.md')]

    """
    normalized = pattern.replace("\\", "/")
    base = Path(base_dir) if base_dir is not None else Path.cwd()
    candidate = Path(normalized)

    if not any(char in normalized for char in _GLOB_CHARS):
        full = candidate if candidate.is_absolute() else base / candidate
        return [full.resolve()] if full.is_file() else []

    if candidate.is_absolute():
        base = Path(candidate.anchor)
        normalized = candidate.relative_to(candidate.anchor).as_posix()

    matches = {match.resolve() for match in base.glob(normalized) if match.is_file()}
    return sorted(matches)


def filter_markdown_files(paths: Iterable[Path]) -> list[Path]:
    """Keep only Markdown files (``.md``, compared case-insensitively)."""
    return [path for path in paths if path.suffix.lower() in MARKDOWN_EXTENSIONS]


def read_document(path: Path) -> str:
    """Read a UTF-8 document without translating its line endings.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    FileAccessError
        If the file cannot be read or decoded.

    """
    if not path.exists():
        raise FileNotFoundError(str(path))
    try:
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FileAccessError(str(path), f"Cannot read {path}: {e}", original_error=e) from e


def write_document(path: Path, content: str) -> None:
    """Write UTF-8 text exactly as given, line endings included."""
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        raise FileAccessError(str(path), f"Cannot write {path}: {e}", original_error=e) from e


def _annotate_file(
    path: Path,
    repository: GitRepository,
    old_commit: str,
    new_commit: str | None,
    provider: LineDiffProvider,
    options: AnnotationOptions,
    dry_run: bool,
) -> FileResult:
    relative = repository.relative_path(path)
    if relative is None:
        error = RepositoryError(f"File is not within the repository: {path}")
        logger.error(error.message)
        return FileResult(path, FileStatus.FAILED, error=error)

    try:
        old_content = repository.read_blob(old_commit, relative)
        if new_commit is None:
            new_content = read_document(path)
        else:
            new_content = repository.read_blob(new_commit, relative)
        annotated = annotate_markdown(old_content, new_content, diff_provider=provider, options=options)

        current = new_content if new_commit is None else read_document(path)
        if annotated == current:
            return FileResult(path, FileStatus.UNCHANGED, relative_path=relative)
        if dry_run:
            logger.info("Would update %s", path)
        else:
            write_document(path, annotated)
            logger.info("Updated file in place: %s", path)
        return FileResult(path, FileStatus.UPDATED, relative_path=relative)
    except MdChangeMarksError as e:
        logger.error("Error processing %s: %s", path, e.message)
        return FileResult(path, FileStatus.FAILED, relative_path=relative, error=e)


def process_files(
    files: Sequence[Path],
    repository: GitRepository,
    source: str | None = None,
    target: str | None = None,
    options: AnnotationOptions | None = None,
    diff_provider: LineDiffProvider | None = None,
    dry_run: bool = False,
) -> list[FileResult]:
    """Annotate each file with the changes between two of its versions.

    Parameters
    ----------
    files : sequence of Path
        Markdown files inside ``repository``.
    repository : GitRepository
        Repository supplying the committed versions.
    source : str, optional
        Commit expression for the old version (default ``HEAD``).
    target : str, optional
        Commit expression for the new version. When omitted the working-tree
        file is the new version.
    options : AnnotationOptions, optional
        Annotation options.
    diff_provider : LineDiffProvider, optional
        Overrides the provider named in ``options``.
    dry_run : bool, default False
        Compute results without writing any file.

    Returns
    -------
    list of FileResult
        One result per input file, in input order.

    Raises
    ------
    ValidationError
        If ``target`` is given without ``source``.
    RepositoryError
        If a commit expression cannot be resolved.

    """
    options = options or AnnotationOptions()
    mode = ComparisonMode.from_commits(source, target)
    old_commit = repository.require_commit(source or DEFAULT_COMMITISH)
    new_commit = repository.require_commit(target) if mode is ComparisonMode.COMMIT_VS_COMMIT else None
    provider = diff_provider or get_diff_provider(options=options)

    if new_commit is None:
        logger.info("Comparing workspace changes with commit %s", old_commit[:7])
    else:
        logger.info("Comparing commits %s -> %s", old_commit[:7], new_commit[:7])

    results = []
    for path in files:
        logger.info("Processing %s...", path)
        results.append(_annotate_file(path, repository, old_commit, new_commit, provider, options, dry_run))
    return results


def strip_files(
    files: Sequence[Path],
    options: AnnotationOptions | None = None,
    dry_run: bool = False,
) -> list[FileResult]:
    """Remove change markers from each file in place.

    The stripped text keeps the file's line ending and ends with one line
    ending unless it is empty.
    """
    options = options or AnnotationOptions()
    results = []
    for path in files:
        try:
            content = read_document(path)
            line_ending = detect_line_ending(content)
            stripped = strip_change_markers(content, options=options)
            if stripped:
                stripped += line_ending
            if stripped == content:
                results.append(FileResult(path, FileStatus.UNCHANGED))
                continue
            if dry_run:
                logger.info("Would strip markers from %s", path)
            else:
                write_document(path, stripped)
                logger.info("Stripped markers from %s", path)
            results.append(FileResult(path, FileStatus.UPDATED))
        except MdChangeMarksError as e:
            logger.error("Error processing %s: %s", path, e.message)
            results.append(FileResult(path, FileStatus.FAILED, error=e))
    return results
