#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdchangemarks/diff/__init__.py
"""Line-diff computation and zero-context unified diff parsing.

The annotation engine never computes diffs itself. It asks a
:class:`~mdchangemarks.diff.providers.LineDiffProvider` for unified diff
text with zero context lines and turns that text into a
:class:`~mdchangemarks.diff.hunks.LineChanges` structure.

Examples
--------
Parse a diff produced in-process:
    >>> from mdchangemarks.diff import DifflibDiffProvider, parse_unified_diff
    >>> diff_text = DifflibDiffProvider().unified_diff("a\\nb\\n", "a\\nc\\n")
    >>> changes = parse_unified_diff(diff_text)
    >>> sorted(changes.changed_lines)
    [2]

"""

from mdchangemarks.diff.hunks import LineChanges, parse_unified_diff
from mdchangemarks.diff.providers import (
    DifflibDiffProvider,
    GitDiffProvider,
    LineDiffProvider,
    get_diff_provider,
)

__all__ = [
    "DifflibDiffProvider",
    "GitDiffProvider",
    "LineChanges",
    "LineDiffProvider",
    "get_diff_provider",
    "parse_unified_diff",
]
