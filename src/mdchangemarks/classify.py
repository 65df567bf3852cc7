#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdchangemarks/classify.py
"""Line-level Markdown structure detection.

The annotator works line by line and never builds a Markdown AST. This
module supplies the small amount of structure it needs: pure predicates for
headings, list items, images and table rows, a bounded backward scan for list
continuation lines, and a forward scan for table regions.

When a line matches several constructs, :func:`classify_line` resolves it
with a fixed precedence: image, then table row, then list item, then list
continuation, then generic text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from mdchangemarks.constants import LIST_CONTEXT_LOOKBACK
from mdchangemarks.utils.text import is_blank

_HEADING_RE = re.compile(r"^(\s{0,3})(#{1,6})(\s*)(.*)$")
_BULLET_RE = re.compile(r"^(\s*(?:[-*+]\s+|\d+[.)]\s+))(.*)$")
_IMAGE_RE = re.compile(r"^!\[[^\]]*\]\([^)]*\)")
_SEPARATOR_CELL_RE = re.compile(r"^:?-+:?$")


class LineKind(Enum):
    """Structural role of a line, in precedence order."""

    IMAGE = "image"
    TABLE_ROW = "table_row"
    LIST_ITEM = "list_item"
    LIST_CONTINUATION = "list_continuation"
    GENERIC = "generic"


@dataclass(frozen=True)
class HeadingMatch:
    """A heading split into the parts that must survive wrapping.

    ``prefix + hashes + separator + text`` reproduces the original line.
    """

    prefix: str
    hashes: str
    separator: str
    text: str

    @property
    def level(self) -> int:
        return len(self.hashes)

    @property
    def marker(self) -> str:
        """Everything before the heading text."""
        return self.prefix + self.hashes + self.separator


@dataclass(frozen=True)
class BulletMatch:
    """A list item split into its prefix (indent, marker, spacing) and body."""

    prefix: str
    body: str

    @property
    def prefix_length(self) -> int:
        return len(self.prefix)


@dataclass(frozen=True)
class TableRegion:
    """A maximal run of table rows, 1-based and inclusive on both ends."""

    start: int
    end: int

    def __contains__(self, line_number: object) -> bool:
        return isinstance(line_number, int) and self.start <= line_number <= self.end

    def __len__(self) -> int:
        return self.end - self.start + 1


def match_heading(line: str) -> HeadingMatch | None:
    """Match an ATX heading (up to three leading spaces, one to six ``#``).

    Examples
    --------
    >>> match_heading("## Install")
    HeadingMatch(prefix='', hashes='##', separator=' ', text='Install')
    >>> match_heading("Plain text") is None
    True

    """
    match = _HEADING_RE.match(line)
    if match is None:
        return None
    prefix, hashes, separator, text = match.groups()
    return HeadingMatch(prefix=prefix, hashes=hashes, separator=separator, text=text)


def is_heading(line: str) -> bool:
    return match_heading(line) is not None


def match_bullet(line: str) -> BulletMatch | None:
    """Match a bullet (``-``, ``*``, ``+``) or ordered (``1.``, ``1)``) list item.

    The marker must be followed by whitespace, so emphasis (``**bold**``) and
    thematic breaks (``---``) are not list items.
    """
    match = _BULLET_RE.match(line)
    if match is None:
        return None
    return BulletMatch(prefix=match.group(1), body=match.group(2))


def bullet_prefix_length(line: str) -> int:
    """Return the length of the list prefix of ``line``, or 0 if it is not a list item."""
    match = match_bullet(line)
    return match.prefix_length if match else 0


def is_bullet_line(line: str) -> bool:
    return bullet_prefix_length(line) > 0


def is_image_line(line: str) -> bool:
    """Return True if the trimmed line starts with a Markdown image ``![alt](target)``."""
    return _IMAGE_RE.match(line.strip()) is not None


def is_table_row(line: str) -> bool:
    """Return True if the trimmed line contains a pipe character."""
    return "|" in line.strip()


def is_separator_cell(cell: str) -> bool:
    """Return True if a table cell holds only header-separator syntax (``:--:``)."""
    return _SEPARATOR_CELL_RE.match(cell.strip()) is not None


def is_table_separator(line: str) -> bool:
    """Return True for a table header separator row such as ``|:---|---:|``.

    Examples
    --------
    >>> is_table_separator("| --- | :-: |")
    True
    >>> is_table_separator("| a | - |")
    False

    """
    trimmed = line.strip()
    if "|" not in trimmed:
        return False
    if trimmed.startswith("|"):
        trimmed = trimmed[1:]
    if trimmed.endswith("|"):
        trimmed = trimmed[:-1]
    cells = trimmed.split("|")
    return bool(cells) and all(is_separator_cell(cell) for cell in cells)


def leading_whitespace(line: str) -> str:
    """Return the run of spaces and tabs at the start of ``line``."""
    return line[: len(line) - len(line.lstrip(" \t"))]


def prior_bullet_prefix_length(lines: Sequence[str], line_number: int) -> int:
    """Find the list prefix of a bullet shortly above ``line_number``.

    Scans at most :data:`LIST_CONTEXT_LOOKBACK` lines upwards, stopping at the
    first blank line or heading.

    Parameters
    ----------
    lines : sequence of str
        Document lines.
    line_number : int
        1-based line number of the line being classified.

    Returns
    -------
    int
        Prefix length of the nearest bullet above, or 0 if there is none.

    """
    for previous in range(line_number - 1, max(1, line_number - LIST_CONTEXT_LOOKBACK) - 1, -1):
        prev = lines[previous - 1]
        if is_blank(prev) or is_heading(prev):
            break
        length = bullet_prefix_length(prev)
        if length > 0:
            return length
    return 0


def in_list_context(lines: Sequence[str], line_number: int) -> bool:
    """Return True if the line is a list item or continues one above it.

    A heading is never treated as list continuation.
    """
    line = lines[line_number - 1]
    if is_bullet_line(line):
        return True
    if is_heading(line):
        return False
    return prior_bullet_prefix_length(lines, line_number) > 0


def classify_line(lines: Sequence[str], line_number: int) -> LineKind:
    """Return the structural role of a line, applying the fixed precedence."""
    line = lines[line_number - 1]
    if is_image_line(line):
        return LineKind.IMAGE
    if is_table_row(line):
        return LineKind.TABLE_ROW
    if is_bullet_line(line):
        return LineKind.LIST_ITEM
    if in_list_context(lines, line_number):
        return LineKind.LIST_CONTINUATION
    return LineKind.GENERIC


def find_table_regions(lines: Sequence[str]) -> list[TableRegion]:
    """Detect table regions with a single forward scan.

    A region opens on the first table row after a non-table line and closes
    before the next non-table line (or at the end of the document). Image
    lines never belong to a region.

    Examples
    --------
    >>> find_table_regions(["intro", "| a |", "|---|", "| 1 |", "", "end"])
    [TableRegion(start=2, end=4)]

    """
    regions: list[TableRegion] = []
    start: int | None = None
    for number, line in enumerate(lines, start=1):
        if is_table_row(line) and not is_image_line(line):
            if start is None:
                start = number
        elif start is not None:
            regions.append(TableRegion(start, number - 1))
            start = None
    if start is not None:
        regions.append(TableRegion(start, len(lines)))
    return regions


def region_for_line(regions: Sequence[TableRegion], line_number: int) -> TableRegion | None:
    """Return the region containing ``line_number``, if any."""
    for region in regions:
        if line_number in region:
            return region
    return None
