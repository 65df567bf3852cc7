"""Command-line interface for mdchangemarks.

Annotates Markdown files in a git working tree with visible change markers,
or removes them again.

Examples
--------
Compare the workspace with HEAD::

    $ mdchangemarks -f "docs/**/*.md"

Compare the workspace with an older commit::

    $ mdchangemarks -f README.md -s HEAD~3

Compare two commits, using git for the line diff::

    $ mdchangemarks mark -f "*.md" -s v1.0 -t v1.1 --diff-provider git

Remove all markers::

    $ mdchangemarks strip -f "docs/**/*.md"

Configuration defaults are read from ``--config``, the
``MDCHANGEMARKS_CONFIG`` environment variable, or a discovered
``.mdchangemarks.toml``/``.yaml``/``.json`` file or ``[tool.mdchangemarks]``
table in ``pyproject.toml``.

"""

import logging
import sys

from mdchangemarks.cli.builder import get_exit_code_for_exception
from mdchangemarks.cli.commands import dispatch_command

logger = logging.getLogger(__name__)

__all__ = ["main", "get_exit_code_for_exception"]


def main(args: list[str] | None = None) -> int:
    """Execute the CLI entry point."""
    return dispatch_command(args)


if __name__ == "__main__":
    sys.exit(main())
