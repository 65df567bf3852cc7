#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdchangemarks/cli/builder.py
"""Shared argparse building blocks and exit codes for the mdchangemarks CLI."""

import argparse

from mdchangemarks import __version__
from mdchangemarks.exceptions import (
    DiffProviderError,
    FileError,
    RepositoryError,
    ValidationError,
)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_REPOSITORY_ERROR = 5
EXIT_DIFF_PROVIDER_ERROR = 6


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (ValidationError, argparse.ArgumentTypeError)):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR

    if isinstance(exception, RepositoryError):
        return EXIT_REPOSITORY_ERROR

    if isinstance(exception, DiffProviderError):
        return EXIT_DIFF_PROVIDER_ERROR

    return EXIT_ERROR


def add_file_pattern_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-f",
        "--file-pattern",
        dest="file_pattern",
        required=True,
        help="Glob pattern for markdown files to process (e.g. '*.md', 'docs/**/*.md', 'README.md')",
    )


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the options shared by every command.

    Covers configuration, output, dry-run and logging flags. Command-specific
    options are added by each command's parser factory.

    Parameters
    ----------
    parser : argparse.ArgumentParser
        Parser to extend

    """
    parser.add_argument("--config", help="Path to configuration file (TOML, YAML or JSON)")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show which files would change without writing them",
    )
    parser.add_argument("--rich", action="store_true", help="Print a rich summary table")
    parser.add_argument(
        "--force-rich",
        action="store_true",
        help="Use rich output even when stdout is not a terminal (implies --rich)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write log messages to this file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show progress messages (INFO level)")
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable debug logging with timestamps and logger names",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
