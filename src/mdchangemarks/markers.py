#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdchangemarks/markers.py
"""Build the marked-up text for changed lines.

Every function here is pure: it receives a line (plus its role) and returns
the annotated text without a line ending. The annotator decides *which*
function to call and *when* banners are due; this module only knows how the
markers look. Headings and list items keep their syntax outside the markers,
and table rows are wrapped cell by cell so pipes and padding stay intact.
"""

from __future__ import annotations

from typing import Sequence

from mdchangemarks.classify import is_separator_cell, is_table_separator, leading_whitespace, match_bullet, match_heading
from mdchangemarks.constants import (
    FIGURE_NEW_PREFIX,
    FIGURE_OLD_PREFIX,
    LINE_BREAK,
    LIST_CHANGE_CHIP,
    MARK_CLOSE,
    MARK_OPEN,
    STRIKE,
)
from mdchangemarks.utils.text import is_blank


def wrap_addition(text: str) -> str:
    """Wrap text in the addition marker: ``<mark>text</mark>``."""
    return f"{MARK_OPEN}{text}{MARK_CLOSE}"


def wrap_deletion(text: str) -> str:
    """Wrap text in the deletion marker: ``<mark>~~text~~</mark>``."""
    return f"{MARK_OPEN}{STRIKE}{text}{STRIKE}{MARK_CLOSE}"


def _wrap(text: str, deletion: bool) -> str:
    return wrap_deletion(text) if deletion else wrap_addition(text)


def wrap_line(line: str, deletion: bool = False) -> str:
    """Wrap a line outside a table.

    Headings and list items only have their text wrapped, so the ``#`` run
    and the list marker keep working. Blank lines are returned unchanged.

    Examples
    --------
    >>> wrap_line("## Usage")
    '## <mark>Usage</mark>'
    >>> wrap_line("- item", deletion=True)
    '- <mark>~~item~~</mark>'

    """
    if is_blank(line):
        return line
    heading = match_heading(line)
    if heading is not None:
        if not heading.text:
            return line
        return f"{heading.marker}{_wrap(heading.text, deletion)}"
    bullet = match_bullet(line)
    if bullet is not None:
        if not bullet.body:
            return line
        return f"{bullet.prefix}{_wrap(bullet.body, deletion)}"
    return _wrap(line, deletion)


def wrap_continuation(line: str, deletion: bool = False) -> str:
    """Wrap a list continuation line, keeping its indentation outside the marker."""
    if is_blank(line):
        return line
    indent = leading_whitespace(line)
    return f"{indent}{_wrap(line[len(indent):], deletion)}"


def inline_list_change(line: str, deletion: bool = False) -> str:
    """Render the first list item of a change run with the inline change chip.

    A standalone banner line between list items would itself become a list
    entry, so the chip sits after the list prefix instead.

    Examples
    --------
    >>> inline_list_change("1. first")
    '1. <mark>**[CHANGE]**</mark> <mark>first</mark>'

    """
    bullet = match_bullet(line)
    if bullet is None:
        return wrap_line(line, deletion)
    return f"{bullet.prefix}{LIST_CHANGE_CHIP} {_wrap(bullet.body, deletion)}"


def _split_padding(cell: str) -> tuple[str, str, str]:
    stripped = cell.strip(" ")
    left = len(cell) - len(cell.lstrip(" "))
    right = len(cell) - len(cell.rstrip(" "))
    return " " * left, stripped, " " * right


def split_cells(line: str) -> list[str]:
    """Split a table row on pipes, keeping the (possibly empty) outer segments."""
    return line.split("|")


def wrap_table_row(line: str, deletion: bool = False, counterpart: str | None = None) -> str:
    """Wrap the cells of a changed table row.

    Separator rows are returned unchanged. Empty and separator-only cells are
    skipped, and each wrapped cell keeps its surrounding spaces.

    Parameters
    ----------
    line : str
        The table row to wrap.
    deletion : bool, default False
        Use the deletion marker instead of the addition marker.
    counterpart : str, optional
        The row this one replaced (or was replaced by). When it has the same
        number of cells, only cells whose text differs are wrapped.

    Examples
    --------
    >>> wrap_table_row("| A | 2 |", counterpart="| A | 1 |")
    '| A | <mark>2</mark> |'
    >>> wrap_table_row("| A | 2 |")
    '| <mark>A</mark> | <mark>2</mark> |'

    """
    if is_table_separator(line):
        return line

    cells = split_cells(line)
    reference: Sequence[str] | None = None
    if counterpart is not None:
        other = split_cells(counterpart)
        if len(other) == len(cells):
            reference = [cell.strip() for cell in other]

    for index, cell in enumerate(cells):
        left, content, right = _split_padding(cell)
        if not content.strip() or is_separator_cell(content):
            continue
        if reference is not None and reference[index] == content.strip():
            continue
        cells[index] = f"{left}{_wrap(content, deletion)}{right}"
    return "|".join(cells)


def figure_old_block(image_line: str) -> str:
    """Render a deleted image as ``OLD:<br/><mark>~~image~~</mark><br/>``."""
    return f"{FIGURE_OLD_PREFIX}{wrap_deletion(image_line.strip())}{LINE_BREAK}"


def figure_new_block(image_line: str) -> str:
    """Render a new image as ``NEW:<br/><mark>image</mark>``."""
    return f"{FIGURE_NEW_PREFIX}{wrap_addition(image_line.strip())}"
