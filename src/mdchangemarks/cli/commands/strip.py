#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdchangemarks/cli/commands/strip.py
"""Marker removal command.

Removes every change marker (banners, chips, wrappers, figure blocks and the
footer) from the matching Markdown files, dropping deleted content. No git
repository is needed.
"""

import argparse

from mdchangemarks.cli.builder import add_common_arguments, add_file_pattern_argument
from mdchangemarks.cli.commands.shared import (
    build_options,
    collect_markdown_files,
    report_error,
    report_results,
    setup_logging,
)
from mdchangemarks.exceptions import MdChangeMarksError
from mdchangemarks.workspace import strip_files


def _create_strip_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdchangemarks strip",
        description="Remove change markers from markdown files in place",
        add_help=True,
    )
    add_file_pattern_argument(parser)
    parser.add_argument(
        "--keep-summary",
        dest="drop_summary_section",
        action="store_const",
        const=False,
        default=None,
        help="Keep a '## Summary of Changes' section instead of dropping it",
    )
    add_common_arguments(parser)
    return parser


def handle_strip_command(args: list[str] | None = None) -> int:
    """Handle the strip command.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments (beyond 'strip')

    Returns
    -------
    int
        Exit code (0 for success)

    """
    parser = _create_strip_parser()
    try:
        parsed = parser.parse_args(args or [])
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 0

    setup_logging(parsed)

    try:
        options = build_options(parsed, {"drop_summary_section": parsed.drop_summary_section})
        files = collect_markdown_files(parsed.file_pattern)
    except (MdChangeMarksError, argparse.ArgumentTypeError) as e:
        return report_error(e)

    results = strip_files(files, options=options, dry_run=parsed.dry_run)
    return report_results(parsed, results, title="Stripped markers")
