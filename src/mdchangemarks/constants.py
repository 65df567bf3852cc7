#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the mdchangemarks library.

This module centralizes the marker vocabulary written into annotated
documents together with the default configuration values used across the
library. The marker literals form the on-disk wire format: the stripper and
any other tool reading annotated files depend on them being byte-exact.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Marker Vocabulary - Banners, wrappers, figure scaffolding, footer
3. Legacy Marker Vocabulary - Literals recognised only when stripping
4. Classification Limits - Bounds used by the structural classifier
5. Defaults - Option and CLI defaults
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

DiffProviderName = Literal["difflib", "git"]
LineEnding = Literal["\n", "\r\n"]

# =============================================================================
# Marker Vocabulary
# =============================================================================

MARK_OPEN = "<mark>"
MARK_CLOSE = "</mark>"
STRIKE = "~~"

GENERIC_BANNER = "<mark>**[CHANGE]**</mark>"
TABLE_BANNER = "<mark>**[CHANGE] in table**</mark>"
FIGURE_BANNER = "<mark>**[CHANGE] in figure**</mark>"

# Written after a list prefix, followed by a single space and the wrapped body
LIST_CHANGE_CHIP = GENERIC_BANNER

BANNERS = (GENERIC_BANNER, TABLE_BANNER, FIGURE_BANNER)

LINE_BREAK = "<br/>"
FIGURE_OLD_PREFIX = "OLD:<br/>"
FIGURE_NEW_PREFIX = "NEW:<br/>"

FOOTER = "<br/><mark>_(Change markers generated with mdchangemarks)_</mark>"

SUMMARY_HEADING = "## Summary of Changes"

# =============================================================================
# Legacy Marker Vocabulary
# =============================================================================

LEGACY_FOOTERS = (
    "<br/><mark>(Change markers generated with "
    "[MarkdownGitDiffMarker](https://github.com/thgossler/MarkdownGitDiffMarker))</mark>",
    "<br/><mark>_(Change markers generated with "
    "[MarkdownGitDiffMarker](https://github.com/thgossler/MarkdownGitDiffMarker))_</mark>",
)
LEGACY_FIGURE_OLD_PREFIX = "<br/>OLD:<br/>"

# =============================================================================
# Classification Limits
# =============================================================================

# How far back a non-bullet line looks for a bullet to count as list continuation
LIST_CONTEXT_LOOKBACK = 6
MAX_HEADING_LEVEL = 6

# =============================================================================
# Defaults
# =============================================================================

DEFAULT_DIFF_PROVIDER: DiffProviderName = "difflib"
DEFAULT_GIT_EXECUTABLE = "git"
DEFAULT_DIFF_TIMEOUT = 60.0
DEFAULT_APPEND_FOOTER = True
DEFAULT_DROP_SUMMARY_SECTION = True
DEFAULT_LINE_ENDING: LineEnding = "\n"
DEFAULT_COMMITISH = "HEAD"

MARKDOWN_EXTENSIONS = (".md",)

CONFIG_ENV_VAR = "MDCHANGEMARKS_CONFIG"
CONFIG_FILENAMES = (
    ".mdchangemarks.toml",
    ".mdchangemarks.yaml",
    ".mdchangemarks.yml",
    ".mdchangemarks.json",
)
PYPROJECT_TOOL_SECTION = "mdchangemarks"
