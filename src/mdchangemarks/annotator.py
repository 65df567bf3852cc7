#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdchangemarks/annotator.py
"""Annotate a Markdown document with visible, reversible change markers.

The annotator walks the new document once. For every line it consults the
parsed diff (:class:`~mdchangemarks.diff.hunks.LineChanges`) and the table
regions found by :mod:`mdchangemarks.classify`, renders any deletions keyed
at that position, then the line itself. A small state machine decides when a
contiguous block of changes needs a new banner (or inline list chip) and when
it continues the block already announced.

Run states
----------
IDLE
    No open run. The next changed line opens one.
GENERIC_RUN_OPEN
    A generic banner was written; following changes share it.
LIST_RUN_PENDING
    A run started on a list continuation line; no marker written yet.
LIST_RUN_OPEN
    The inline ``[CHANGE]`` chip was written on a list item.
TABLE_RUN_OPEN
    Inside a changed table whose banner was written.
FIGURE_ISOLATED
    A figure block was just written. Treated like IDLE by the next line.

Unchanged lines, table boundaries and figures always end a run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from mdchangemarks.classify import (
    LineKind,
    TableRegion,
    classify_line,
    find_table_regions,
    is_bullet_line,
    is_heading,
    is_image_line,
    is_table_row,
    leading_whitespace,
    prior_bullet_prefix_length,
    region_for_line,
)
from mdchangemarks.constants import FIGURE_BANNER, FOOTER, GENERIC_BANNER, TABLE_BANNER
from mdchangemarks.diff.hunks import LineChanges, parse_unified_diff
from mdchangemarks.diff.providers import LineDiffProvider, get_diff_provider
from mdchangemarks.markers import (
    figure_new_block,
    figure_old_block,
    inline_list_change,
    wrap_continuation,
    wrap_line,
    wrap_table_row,
)
from mdchangemarks.options import AnnotationOptions
from mdchangemarks.stripper import strip_change_markers
from mdchangemarks.utils.text import detect_line_ending, is_blank

logger = logging.getLogger(__name__)


class RunState(Enum):
    """Position of the annotator within the current block of changes."""

    IDLE = "idle"
    GENERIC_RUN_OPEN = "generic_run_open"
    LIST_RUN_PENDING = "list_run_pending"
    LIST_RUN_OPEN = "list_run_open"
    TABLE_RUN_OPEN = "table_run_open"
    FIGURE_ISOLATED = "figure_isolated"

    @property
    def is_marked(self) -> bool:
        """True if the current run already carries a banner or chip usable by prose and lists."""
        return self in (RunState.GENERIC_RUN_OPEN, RunState.LIST_RUN_OPEN)


@dataclass
class _DeletionPlan:
    """Deletions split by where they are rendered."""

    prose: dict[int, list[str]] = field(default_factory=dict)
    table: dict[int, list[str]] = field(default_factory=dict)
    # Deleted rows that followed a region's last row, keyed by region start
    after_region: dict[int, list[str]] = field(default_factory=dict)


class AnnotationPass:
    """One annotation run over a stripped document.

    Parameters
    ----------
    lines : sequence of str
        Lines of the new document with all previous markers removed.
    changes : LineChanges
        Parsed diff between the old document and ``lines``.

    Notes
    -----
    Instances are single-use: create one per document and call
    :meth:`render` once.

    """

    def __init__(self, lines: Sequence[str], changes: LineChanges):
        """Prepare region and deletion lookups for the pass."""
        self.lines = list(lines)
        self.changes = changes
        self.regions = find_table_regions(self.lines)
        self.deletions = self._plan_deletions()
        self.changed_regions = {region.start for region in self.regions if self._region_changed(region)}
        self.row_pairs = self._pair_table_rows()
        self.state = RunState.IDLE
        self.output: list[str] = []

    # ------------------------------------------------------------------
    # Preparation
    # ------------------------------------------------------------------

    def _plan_deletions(self) -> _DeletionPlan:
        plan = _DeletionPlan()
        last = len(self.lines) + 1
        for position in sorted(self.changes.deletions):
            deleted = self.changes.deletions[position]
            clamped = min(max(position, 1), last)
            if clamped != position:
                logger.debug("Deletion key %d outside document; rendering at %d", position, clamped)

            region = region_for_line(self.regions, clamped)
            if region is not None:
                rows = [d for d in deleted if is_table_row(d) and not is_image_line(d)]
                others = [d for d in deleted if not is_table_row(d) or is_image_line(d)]
                if rows:
                    plan.table.setdefault(clamped, []).extend(rows)
                if others:
                    # prose removed from between rows is shown after the table
                    plan.prose.setdefault(region.end + 1, []).extend(others)
                continue

            remaining = list(deleted)
            preceding = region_for_line(self.regions, clamped - 1)
            if preceding is not None:
                rows: list[str] = []
                while remaining and is_table_row(remaining[0]) and not is_image_line(remaining[0]):
                    rows.append(remaining.pop(0))
                if rows:
                    plan.after_region.setdefault(preceding.start, []).extend(rows)
            if remaining:
                plan.prose.setdefault(clamped, []).extend(remaining)
        return plan

    def _region_changed(self, region: TableRegion) -> bool:
        if any(number in self.changes.changed_lines for number in range(region.start, region.end + 1)):
            return True
        if any(position in region for position in self.deletions.table):
            return True
        return region.start in self.deletions.after_region

    def _pair_table_rows(self) -> dict[int, str]:
        """Map changed table rows to the deleted row they replaced."""
        pairs: dict[int, str] = {}
        for position, deleted in self.deletions.table.items():
            region = region_for_line(self.regions, position)
            for offset, old_row in enumerate(deleted):
                number = position + offset
                if region is not None and number in region and number in self.changes.changed_lines:
                    pairs[number] = old_row
        return pairs

    # ------------------------------------------------------------------
    # Emission helpers
    # ------------------------------------------------------------------

    def _emit(self, text: str) -> None:
        self.output.append(text)

    def _close_run(self) -> None:
        if self.state is not RunState.IDLE:
            logger.debug("Closing %s run", self.state.value)
        self.state = RunState.IDLE

    def _open_generic_run(self) -> None:
        if not self.state.is_marked:
            self._emit(GENERIC_BANNER)
            self.state = RunState.GENERIC_RUN_OPEN

    def _open_list_run(self) -> None:
        if not self.state.is_marked:
            self.state = RunState.LIST_RUN_PENDING

    def _emit_list_item(self, line: str, deletion: bool) -> None:
        if self.state.is_marked:
            self._emit(wrap_line(line, deletion))
        else:
            self._emit(inline_list_change(line, deletion))
            self.state = RunState.LIST_RUN_OPEN

    def _emit_table_banner(self) -> None:
        self._emit(TABLE_BANNER)
        self._emit("")
        self.state = RunState.TABLE_RUN_OPEN

    def _emit_deleted_row(self, row: str) -> None:
        rendered = wrap_table_row(row, deletion=True)
        if rendered == row:
            # separator or empty row: nothing to strike through
            logger.debug("Skipping deleted table row without content: %r", row)
            return
        self._emit(rendered)

    def _emit_deleted(self, line: str, list_context: bool = False) -> None:
        """Render one deleted line outside a table region.

        ``list_context`` is True when the deleted line sat directly below a
        list item of the new document, so it is rendered as continuation.
        """
        if is_table_row(line):
            if wrap_table_row(line, deletion=True) == line:
                return
            if self.state is not RunState.TABLE_RUN_OPEN:
                self._emit_table_banner()
            self._emit_deleted_row(line)
            return
        if self.state is RunState.TABLE_RUN_OPEN:
            self._close_run()
        rendered = wrap_line(line, deletion=True)
        if rendered == line:
            return
        if is_bullet_line(line):
            self._emit_list_item(line, deletion=True)
        elif list_context and not is_heading(line):
            self._open_list_run()
            self._emit(wrap_continuation(line, deletion=True))
        else:
            self._open_generic_run()
            self._emit(rendered)

    def _emit_changed(self, line: str, kind: LineKind) -> None:
        """Render one changed, non-table, non-figure line."""
        if self.state in (RunState.TABLE_RUN_OPEN, RunState.FIGURE_ISOLATED):
            self._close_run()
        if is_blank(line) or wrap_line(line) == line:
            # nothing to highlight (blank line, bare heading or list marker)
            self._emit(line)
            return
        if kind is LineKind.LIST_ITEM:
            self._emit_list_item(line, deletion=False)
        elif kind is LineKind.LIST_CONTINUATION:
            self._open_list_run()
            self._emit(wrap_continuation(line))
        else:
            self._open_generic_run()
            self._emit(wrap_line(line))

    def _emit_figure(self, old_images: Sequence[str], new_image: str | None) -> None:
        self._emit(FIGURE_BANNER)
        for old in old_images:
            self._emit(f"{leading_whitespace(old)}{figure_old_block(old)}")
        if new_image is not None:
            self._emit(f"{leading_whitespace(new_image)}{figure_new_block(new_image)}")
        self.state = RunState.FIGURE_ISOLATED

    # ------------------------------------------------------------------
    # Line handlers
    # ------------------------------------------------------------------

    def _render_table_line(self, number: int, line: str, region: TableRegion) -> None:
        changed_region = region.start in self.changed_regions
        if number == region.start:
            self._close_run()
            if changed_region:
                self._emit_table_banner()

        for old_row in self.deletions.table.get(number, []):
            self._emit_deleted_row(old_row)

        if number in self.changes.changed_lines:
            self._emit(wrap_table_row(line, counterpart=self.row_pairs.get(number)))
        else:
            self._emit(line)

        if number == region.end:
            for old_row in self.deletions.after_region.get(region.start, []):
                self._emit_deleted_row(old_row)
            self._close_run()

    def _render_line(self, number: int, line: str) -> None:
        region = region_for_line(self.regions, number)
        if region is not None:
            self._render_table_line(number, line, region)
            return

        changed = number in self.changes.changed_lines
        kind = classify_line(self.lines, number)
        deleted = self.deletions.prose.get(number, [])

        old_images = [d for d in deleted if is_image_line(d)]
        new_image = line if changed and kind is LineKind.IMAGE else None

        list_context = prior_bullet_prefix_length(self.lines, number) > 0
        for old_line in deleted:
            if not is_image_line(old_line):
                self._emit_deleted(old_line, list_context=list_context)

        if old_images or new_image is not None:
            self._emit_figure(old_images, new_image)
            if new_image is not None:
                return

        if changed:
            self._emit_changed(line, kind)
        else:
            self._emit(line)
            self._close_run()

    def _render_trailing_deletions(self) -> None:
        position = len(self.lines) + 1
        trailing = self.deletions.prose.get(position, [])
        if not trailing:
            return
        if self.state is RunState.FIGURE_ISOLATED:
            self._close_run()

        # same rules as deletions keyed before an existing line
        list_context = prior_bullet_prefix_length(self.lines, position) > 0
        for old_line in trailing:
            if not is_image_line(old_line):
                self._emit_deleted(old_line, list_context=list_context)

        old_images = [d for d in trailing if is_image_line(d)]
        if old_images:
            self._emit_figure(old_images, None)
        self._close_run()

    def render(self) -> list[str]:
        """Annotate every line and return the output lines (without line endings)."""
        for number, line in enumerate(self.lines, start=1):
            self._render_line(number, line)
        self._render_trailing_deletions()
        return self.output


def annotate_lines(lines: Sequence[str], changes: LineChanges) -> list[str]:
    """Annotate already-stripped document lines with the given changes.

    Parameters
    ----------
    lines : sequence of str
        Lines of the new document, free of change markers.
    changes : LineChanges
        Parsed diff between the old document and ``lines``.

    Returns
    -------
    list of str
        Annotated output lines without line endings and without the footer.

    """
    return AnnotationPass(lines, changes).render()


def annotate_markdown(
    old_content: str,
    new_content: str,
    diff_provider: LineDiffProvider | None = None,
    options: AnnotationOptions | None = None,
) -> str:
    """Mark every change between two versions of a Markdown document.

    The new content is stripped of any existing markers first, so running the
    annotation again on its own output gives the same result.

    Parameters
    ----------
    old_content : str
        Previous version of the document (e.g. from a commit).
    new_content : str
        Current version of the document; may already contain markers.
    diff_provider : LineDiffProvider, optional
        Source of the zero-context unified diff. Defaults to the provider
        named by ``options.diff_provider``.
    options : AnnotationOptions, optional
        Annotation options (footer, provider settings).

    Returns
    -------
    str
        The annotated document, using the line ending detected in
        ``new_content`` throughout.

    Raises
    ------
    DiffProviderError
        If an external diff process fails or times out.

    Examples
    --------
    >>> result = annotate_markdown("# Title\\n\\nHello world\\n", "# Title\\n\\nHello there\\n")
    >>> "<mark>Hello there</mark>" in result
    True

    """
    options = options or AnnotationOptions()
    provider = diff_provider or get_diff_provider(options=options)
    line_ending = detect_line_ending(new_content)

    # a "Summary of Changes" section is document content here; only strip drops it
    clean_content = strip_change_markers(new_content, options=options.create_updated(drop_summary_section=False))
    diff_text = provider.unified_diff(old_content, clean_content)
    changes = parse_unified_diff(diff_text)
    lines = clean_content.replace("\r\n", "\n").split("\n") if clean_content else []

    logger.debug(
        "Annotating %d line(s) with %s: %d changed, %d deletion position(s)",
        len(lines),
        getattr(provider, "name", type(provider).__name__),
        len(changes.changed_lines),
        len(changes.deletions),
    )
    body = line_ending.join(annotate_lines(lines, changes))

    if not options.append_footer:
        return body + line_ending if body else ""
    if not body:
        return FOOTER + line_ending
    return f"{body}{line_ending}{line_ending}{FOOTER}{line_ending}"
