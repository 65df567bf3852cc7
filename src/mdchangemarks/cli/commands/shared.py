#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdchangemarks/cli/commands/shared.py
"""Helpers shared by the mark and strip commands."""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Sequence

from mdchangemarks.cli.builder import EXIT_SUCCESS, get_exit_code_for_exception
from mdchangemarks.cli.config import load_config_with_priority
from mdchangemarks.cli.output import print_results_plain, print_results_rich, should_use_rich_output
from mdchangemarks.constants import CONFIG_ENV_VAR
from mdchangemarks.exceptions import FileNotFoundError
from mdchangemarks.logging_utils import configure_logging, resolve_log_level
from mdchangemarks.options import AnnotationOptions
from mdchangemarks.workspace import FileResult, filter_markdown_files, resolve_glob_pattern

logger = logging.getLogger(__name__)


def setup_logging(parsed_args: argparse.Namespace) -> None:
    """Configure logging from the ``--log-level``, ``--verbose`` and ``--trace`` flags."""
    log_level = resolve_log_level(parsed_args.log_level, verbose=parsed_args.verbose, trace=parsed_args.trace)
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def build_options(parsed_args: argparse.Namespace, overrides: Dict[str, Any] | None = None) -> AnnotationOptions:
    """Build annotation options from the config file and command-line overrides.

    CLI values win over config values; ``None`` overrides are ignored.

    Raises
    ------
    argparse.ArgumentTypeError
        If the config file cannot be loaded.
    ValidationError
        If a resulting option value is invalid.

    """
    config = load_config_with_priority(
        explicit_path=parsed_args.config,
        env_var_path=os.environ.get(CONFIG_ENV_VAR),
    )
    if config:
        logger.debug("Loaded configuration keys: %s", ", ".join(sorted(config)))
    options = AnnotationOptions.from_mapping(config)

    updates = {key: value for key, value in (overrides or {}).items() if value is not None}
    if updates:
        options = options.create_updated(**updates)
    return options


def collect_markdown_files(pattern: str) -> list[Path]:
    """Resolve a file pattern to Markdown files.

    Raises
    ------
    FileNotFoundError
        If nothing matches, or nothing that matches is a Markdown file.

    """
    matching = resolve_glob_pattern(pattern)
    if not matching:
        raise FileNotFoundError(pattern, f"No files found matching pattern: {pattern}")

    markdown_files = filter_markdown_files(matching)
    if not markdown_files:
        raise FileNotFoundError(pattern, f"No markdown files found matching pattern: {pattern}")

    logger.info("Found %d markdown file(s) matching pattern '%s'", len(markdown_files), pattern)
    return markdown_files


def report_results(parsed_args: argparse.Namespace, results: Sequence[FileResult], title: str) -> int:
    """Print the per-file outcome and return the command's exit code.

    The exit code is that of the first failed file, or success if none failed.
    """
    if should_use_rich_output(parsed_args):
        print_results_rich(results, title=title, dry_run=parsed_args.dry_run)
    else:
        print_results_plain(results, dry_run=parsed_args.dry_run)

    for result in results:
        if result.error is not None:
            return get_exit_code_for_exception(result.error)
    return EXIT_SUCCESS


def report_error(error: Exception) -> int:
    """Print an error to stderr and return its exit code."""
    message = getattr(error, "message", None) or str(error)
    print(f"Error: {message}", file=sys.stderr)
    return get_exit_code_for_exception(error)
