#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdchangemarks/diff/hunks.py
"""Parse zero-context unified diffs into new-side change information.

The parser walks the diff once with two cursors. Added lines are recorded by
their new-side line number; deleted lines are attached to the new-side
position they would have occupied, so the annotator can render them directly
before that line. Deletions past the last new line are keyed at
``len(new_lines) + 1``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable

from mdchangemarks.exceptions import AnnotationError
from mdchangemarks.utils.text import is_blank, split_lines

logger = logging.getLogger(__name__)

HUNK_HEADER_RE = re.compile(r"^@@\s*-(\d+)(?:,(\d+))?\s*\+(\d+)(?:,(\d+))?\s*@@")


@dataclass
class LineChanges:
    """New-side view of a line diff.

    Parameters
    ----------
    changed_lines : set of int
        1-based new-side line numbers that were added or modified.
    deletions : dict of int to list of str
        Deleted old-side lines keyed by the new-side position they preceded.
        Whitespace-only deletions are never recorded.

    """

    changed_lines: set[int] = field(default_factory=set)
    deletions: dict[int, list[str]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        """Return True if the diff records no change at all."""
        return not self.changed_lines and not self.deletions

    def deletions_at(self, position: int) -> list[str]:
        """Return the deletions keyed at ``position`` (empty list if none)."""
        return self.deletions.get(position, [])

    def add_deletion(self, position: int, line: str) -> None:
        """Record a deleted line before ``position``, dropping blank lines."""
        if is_blank(line):
            return
        self.deletions.setdefault(position, []).append(line)


class _Cursor:
    """Old/new line cursors for the hunk currently being read."""

    __slots__ = ("old_line", "new_line", "active")

    def __init__(self) -> None:
        self.old_line = 0
        self.new_line = 0
        self.active = False

    def reset(self, header: str) -> None:
        match = HUNK_HEADER_RE.match(header)
        if match is None:
            logger.debug("Ignoring malformed hunk header: %r", header)
            self.old_line = self.new_line = 0
            self.active = False
            return

        old_start, _old_count, new_start, new_count = match.groups()
        self.old_line = int(old_start)
        self.new_line = int(new_start)
        # "+c,0" names the line *after which* the deletion happened
        if new_count is not None and int(new_count) == 0:
            self.new_line += 1
        self.active = True

    def check(self) -> None:
        if self.old_line < 0 or self.new_line < 0:
            raise AnnotationError(f"Diff cursor went negative (old={self.old_line}, new={self.new_line})")


def parse_unified_diff(diff_text: str | Iterable[str]) -> LineChanges:
    """Parse unified diff output into changed line numbers and deletions.

    Parameters
    ----------
    diff_text : str or iterable of str
        Unified diff text (``--unified=0`` semantics), or its lines.

    Returns
    -------
    LineChanges
        Changed new-side line numbers and the deletion map.

    Notes
    -----
    File headers (``---``/``+++``), blank lines and ``\\ No newline at end of
    file`` markers are skipped. Lines outside a valid hunk, including those
    after a malformed ``@@`` header, are ignored instead of raising, so an
    unparseable diff degrades to "no changes".

    Examples
    --------
    >>> changes = parse_unified_diff("@@ -1 +1 @@\\n-old\\n+new\\n")
    >>> changes.changed_lines, changes.deletions
    ({1}, {1: ['old']})

    """
    lines = split_lines(diff_text) if isinstance(diff_text, str) else list(diff_text)
    changes = LineChanges()
    cursor = _Cursor()

    for raw in lines:
        line = raw.rstrip("\r\n")
        if line.startswith("@@"):
            cursor.reset(line)
            continue
        if line.startswith("diff "):
            cursor.active = False
            continue
        if not cursor.active or not line or line.startswith("\\"):
            continue

        marker = line[0]
        if marker == " ":
            cursor.old_line += 1
            cursor.new_line += 1
        elif marker == "+":
            changes.changed_lines.add(cursor.new_line)
            cursor.new_line += 1
        elif marker == "-":
            changes.add_deletion(cursor.new_line, line[1:])
            cursor.old_line += 1
        cursor.check()

    logger.debug(
        "Parsed diff: %d changed line(s), %d deletion position(s)",
        len(changes.changed_lines),
        len(changes.deletions),
    )
    return changes
