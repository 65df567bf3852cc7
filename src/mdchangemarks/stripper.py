#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdchangemarks/stripper.py
"""Remove change markers and restore plain Markdown.

This is the inverse of :func:`mdchangemarks.annotator.annotate_markdown`.
Banners and the provenance footer are dropped together with the single
blank line they own. Lines that only carry deleted content (struck-through
text, ``OLD:`` figure blocks) are dropped, because that content is no longer
part of the document. On every other line the inline chip, addition
wrappers and figure ``NEW:`` prefixes are removed.

Stripping is repeated until the text no longer changes, so
``strip_change_markers(strip_change_markers(x)) == strip_change_markers(x)``
holds for any input.
"""

from __future__ import annotations

import logging
import re

from mdchangemarks.constants import (
    BANNERS,
    FIGURE_NEW_PREFIX,
    FIGURE_OLD_PREFIX,
    FOOTER,
    LEGACY_FOOTERS,
    LINE_BREAK,
    LIST_CHANGE_CHIP,
    SUMMARY_HEADING,
)
from mdchangemarks.options import AnnotationOptions
from mdchangemarks.utils.text import detect_line_ending, is_blank, split_lines

logger = logging.getLogger(__name__)

_DELETION_RE = re.compile(r"<mark>~~(.*?)~~</mark>")
_ADDITION_RE = re.compile(r"<mark>(.*?)</mark>")
_LEGACY_INSERT_RE = re.compile(r"<ins>(.*?)</ins>")
_TRAILING_BREAK_RE = re.compile(re.escape(LINE_BREAK) + r"\s*$")
# What may remain of a line once its deleted content is gone: list or heading
# prefix, pipes, and table cells that are never wrapped (``--``, ``:-:``)
_DELETION_RESIDUE_RE = re.compile(r"^[\s|]*(?:#{1,6}|[-*+]|\d+[.)])?(?:[\s|]|:?-+:?(?=[\s|]|$))*$")

_FOOTERS = frozenset((FOOTER, *LEGACY_FOOTERS))


def is_footer_line(line: str) -> bool:
    """Return True if the trimmed line is a provenance footer (current or legacy)."""
    return line.strip() in _FOOTERS


def is_banner_line(line: str) -> bool:
    """Return True if the trimmed line starts with a generic, table or figure banner."""
    trimmed = line.strip()
    return any(trimmed.startswith(banner) for banner in BANNERS)


def strip_inline_markers(line: str) -> str | None:
    """Remove inline markers from a single line.

    Parameters
    ----------
    line : str
        One line of an annotated document (not a banner or footer).

    Returns
    -------
    str or None
        The cleaned line, or None if the line only carried deleted content
        and should be dropped.

    Examples
    --------
    >>> strip_inline_markers("- <mark>**[CHANGE]**</mark> <mark>new item</mark>")
    '- new item'
    >>> strip_inline_markers("<mark>~~removed sentence~~</mark>") is None
    True

    """
    if FIGURE_OLD_PREFIX in line:
        return None

    processed = line.replace(f"{LIST_CHANGE_CHIP} ", "")

    without_deletions, removed = _DELETION_RE.subn("", processed)
    if removed:
        if _DELETION_RESIDUE_RE.match(without_deletions):
            return None
        processed = without_deletions

    processed = _ADDITION_RE.sub(r"\1", processed)
    processed = _LEGACY_INSERT_RE.sub(r"\1", processed)

    if FIGURE_NEW_PREFIX in processed:
        processed = processed.replace(FIGURE_NEW_PREFIX, "")
        processed = _TRAILING_BREAK_RE.sub("", processed)
    return processed


def _drop_summary_section(lines: list[str]) -> list[str]:
    for index, line in enumerate(lines):
        if line.strip() == SUMMARY_HEADING:
            logger.debug("Dropping summary section starting at line %d", index + 1)
            return lines[:index]
    return lines


def _strip_once(content: str, line_ending: str, drop_summary_section: bool) -> str:
    lines = split_lines(content)
    result: list[str] = []

    index = 0
    while index < len(lines):
        line = lines[index]
        index += 1

        if is_footer_line(line) or is_banner_line(line):
            # the banner or footer owns at most one following blank line
            if index < len(lines) and is_blank(lines[index]):
                index += 1
            continue

        cleaned = strip_inline_markers(line)
        if cleaned is not None:
            result.append(cleaned)

    if drop_summary_section:
        result = _drop_summary_section(result)

    while result and is_blank(result[-1]):
        result.pop()

    return line_ending.join(result)


def strip_change_markers(content: str, options: AnnotationOptions | None = None) -> str:
    """Return ``content`` with all change markers removed.

    Parameters
    ----------
    content : str
        An annotated (or plain) Markdown document.
    options : AnnotationOptions, optional
        Controls the legacy ``## Summary of Changes`` removal.

    Returns
    -------
    str
        Plain Markdown joined with the detected line ending, with trailing
        blank lines removed and no final line ending.

    Examples
    --------
    >>> strip_change_markers("<mark>**[CHANGE]**</mark>\\n<mark>Hello there</mark>\\n")
    'Hello there'

    """
    options = options or AnnotationOptions()
    line_ending = detect_line_ending(content)

    current = content
    while True:
        stripped = _strip_once(current, line_ending, options.drop_summary_section)
        if stripped == current:
            return stripped
        current = stripped
