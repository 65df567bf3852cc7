#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdchangemarks/cli/output.py
"""Per-file result reporting for the mark and strip commands."""

import argparse
import importlib.util
import sys
from io import TextIOWrapper
from typing import Sequence

from mdchangemarks.workspace import FileResult, FileStatus


def check_rich_available() -> bool:
    """Return True if the optional ``rich`` dependency can be imported."""
    return importlib.util.find_spec("rich") is not None


def should_use_rich_output(args: argparse.Namespace, stream: TextIOWrapper | None = None) -> bool:
    """Decide whether results are printed as a rich table.

    ``--force-rich`` always selects the table; ``--rich`` selects it only
    when ``stream`` (default ``sys.stdout``) is a terminal. Without ``rich``
    installed a warning is printed and plain output is used.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command arguments.
    stream : file-like, optional
        Stream whose TTY status is checked.

    Returns
    -------
    bool
        True for rich output.

    """
    force = getattr(args, "force_rich", False)
    if not (getattr(args, "rich", False) or force):
        return False

    if not check_rich_available():
        print("Warning: Rich output requested but 'rich' is not installed; using plain output", file=sys.stderr)
        return False

    if force:
        return True

    target = stream or sys.stdout
    isatty = getattr(target, "isatty", None)
    return bool(callable(isatty) and isatty())


def _display_path(result: FileResult) -> str:
    return result.relative_path or str(result.path)


def print_results_plain(results: Sequence[FileResult], dry_run: bool = False) -> None:
    """Print one status line per file to stderr, then a one-line summary."""
    for result in results:
        if result.status is FileStatus.FAILED:
            print(f"Error processing {_display_path(result)}: {result.message}", file=sys.stderr)
        elif result.status is FileStatus.UPDATED:
            verb = "Would update" if dry_run else "Updated file in-place"
            print(f"{verb}: {_display_path(result)}", file=sys.stderr)
        else:
            print(f"Unchanged: {_display_path(result)}", file=sys.stderr)

    print(format_summary(results, dry_run=dry_run), file=sys.stderr)


def format_summary(results: Sequence[FileResult], dry_run: bool = False) -> str:
    """Return a summary such as ``3 file(s): 2 updated, 1 unchanged, 0 failed``."""
    counts = {status: 0 for status in FileStatus}
    for result in results:
        counts[result.status] += 1
    updated = "would update" if dry_run else "updated"
    return (
        f"{len(results)} file(s): {counts[FileStatus.UPDATED]} {updated}, "
        f"{counts[FileStatus.UNCHANGED]} unchanged, {counts[FileStatus.FAILED]} failed"
    )


def print_results_rich(results: Sequence[FileResult], title: str, dry_run: bool = False) -> None:
    """Print a rich table with one row per processed file."""
    from rich.console import Console
    from rich.table import Table

    table = Table(title=title)
    table.add_column("File", style="cyan", no_wrap=True)
    table.add_column("Status", style="bold")
    table.add_column("Details", style="dim")

    styles = {FileStatus.UPDATED: "green", FileStatus.UNCHANGED: "white", FileStatus.FAILED: "red"}
    for result in results:
        status = result.status.value
        if dry_run and result.status is FileStatus.UPDATED:
            status = "would update"
        details = result.error.message if result.error is not None else ""
        table.add_row(_display_path(result), f"[{styles[result.status]}]{status}[/{styles[result.status]}]", details)

    console = Console()
    console.print(table)
    console.print(format_summary(results, dry_run=dry_run))
