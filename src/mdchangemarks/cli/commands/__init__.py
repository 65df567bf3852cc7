#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdchangemarks/cli/commands/__init__.py
"""CLI command handlers for mdchangemarks."""

import logging
import sys

logger = logging.getLogger(__name__)

COMMANDS = ("mark", "strip")


def dispatch_command(args: list[str] | None = None) -> int:
    """Route the arguments to the matching command handler.

    ``mark`` is the default command: when the first argument is not a command
    name, all arguments go to the mark command.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments (defaults to ``sys.argv[1:]``)

    Returns
    -------
    int
        Exit code of the command

    """
    if args is None:
        args = sys.argv[1:]

    if args and args[0] == "strip":
        from mdchangemarks.cli.commands.strip import handle_strip_command

        return handle_strip_command(args[1:])

    from mdchangemarks.cli.commands.mark import handle_mark_command

    if args and args[0] == "mark":
        return handle_mark_command(args[1:])
    return handle_mark_command(args)
