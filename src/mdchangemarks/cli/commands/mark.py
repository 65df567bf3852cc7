#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdchangemarks/cli/commands/mark.py
"""Change-marking command.

This module provides the ``mark`` command, which compares Markdown files with
an earlier version from git and rewrites them in place with change markers.
Three comparisons are supported:

- no commit given: the working tree against ``HEAD``
- ``--source``: the working tree against that commit
- ``--source`` and ``--target``: two commits (the working tree is ignored as
  input, but the target version is written to the working-tree file)
"""

import argparse
import logging

from mdchangemarks.cli.builder import add_common_arguments, add_file_pattern_argument
from mdchangemarks.cli.commands.shared import (
    build_options,
    collect_markdown_files,
    report_error,
    report_results,
    setup_logging,
)
from mdchangemarks.exceptions import MdChangeMarksError, RepositoryError
from mdchangemarks.git import GitRepository, find_repository_root
from mdchangemarks.workspace import ComparisonMode, process_files

logger = logging.getLogger(__name__)


def _create_mark_parser() -> argparse.ArgumentParser:
    """Create argparse parser for the mark command.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser for mark command

    """
    parser = argparse.ArgumentParser(
        prog="mdchangemarks mark",
        description=(
            "Highlight changes in markdown files compared with a git commit. "
            "Files are updated in place; run 'mdchangemarks strip' to remove the markers."
        ),
        add_help=True,
    )
    add_file_pattern_argument(parser)
    parser.add_argument(
        "-s",
        "--source",
        help="Source commit (hash, HEAD~n, branch or tag). Default: compare the workspace with HEAD",
    )
    parser.add_argument(
        "-t",
        "--target",
        help="Target commit; requires --source. Compares two commits instead of the workspace",
    )
    parser.add_argument(
        "--diff-provider",
        choices=["difflib", "git"],
        default=None,
        help="Line-diff implementation (default: difflib, or the configured value)",
    )
    parser.add_argument("--git-executable", default=None, help="Git executable to use (default: git)")
    parser.add_argument(
        "--no-footer",
        dest="append_footer",
        action="store_const",
        const=False,
        default=None,
        help="Do not append the provenance footer",
    )
    add_common_arguments(parser)
    return parser


def handle_mark_command(args: list[str] | None = None) -> int:
    """Handle the mark command.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments (beyond 'mark')

    Returns
    -------
    int
        Exit code (0 for success)

    """
    parser = _create_mark_parser()
    try:
        parsed = parser.parse_args(args or [])
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 0

    setup_logging(parsed)

    try:
        ComparisonMode.from_commits(parsed.source, parsed.target)
        options = build_options(
            parsed,
            {
                "diff_provider": parsed.diff_provider,
                "git_executable": parsed.git_executable,
                "append_footer": parsed.append_footer,
            },
        )
        files = collect_markdown_files(parsed.file_pattern)
    except (MdChangeMarksError, argparse.ArgumentTypeError) as e:
        return report_error(e)

    root = find_repository_root(files)
    if root is None:
        return report_error(
            RepositoryError(
                "No Git repository found in current directory, parent directories, or near the specified files."
            )
        )

    repository = GitRepository(root, git_executable=options.git_executable, timeout=options.diff_timeout)
    try:
        results = process_files(
            files,
            repository,
            source=parsed.source,
            target=parsed.target,
            options=options,
            dry_run=parsed.dry_run,
        )
    except MdChangeMarksError as e:
        return report_error(e)

    return report_results(parsed, results, title="Change markers")
