#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdchangemarks/utils/text.py
"""Line-ending helpers shared by the annotator, the stripper and the diff providers."""

from __future__ import annotations

from mdchangemarks.constants import DEFAULT_LINE_ENDING, LineEnding


def detect_line_ending(content: str) -> LineEnding:
    """Detect the line-ending style of ``content``.

    CRLF wins whenever it appears at all; a text without any newline falls
    back to LF.

    Parameters
    ----------
    content : str
        Text to inspect

    Returns
    -------
    str
        ``"\\r\\n"`` or ``"\\n"``

    """
    if "\r\n" in content:
        return "\r\n"
    return DEFAULT_LINE_ENDING


def split_lines(content: str) -> list[str]:
    """Split text into lines after normalizing CRLF to LF.

    Unlike :meth:`str.splitlines`, a trailing newline produces a final empty
    element, so ``"\\n".join(split_lines(x))`` reproduces ``x`` (modulo CRLF).
    """
    return content.replace("\r\n", "\n").split("\n")


def document_lines(content: str) -> list[str]:
    """Return the lines of a document, without the phantom line after a final newline."""
    if not content:
        return []
    lines = split_lines(content)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def is_blank(line: str) -> bool:
    """Return True if ``line`` is empty or whitespace only."""
    return not line.strip()
