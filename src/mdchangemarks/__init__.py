"""mdchangemarks - visible, reversible change markers for Markdown documents.

mdchangemarks compares two versions of a Markdown document and rewrites the
newer one so that every change is highlighted in place with ``<mark>``
markers. Additions are highlighted, deletions are shown struck through at the
position they used to occupy, and each contiguous block of changes is
announced by a single banner. Headings, list items, tables and images keep
working because markers are placed inside their syntax, never around it.

The transformation is reversible: :func:`strip_change_markers` removes every
marker again, and annotating an already annotated document first strips the
old markers, so re-running the tool never stacks markers.

Key Features
------------
- Markdown-aware placement for headings, list items, tables and figures
- Cell-level highlighting of changed table rows
- Old/new rendering of changed images
- In-process (difflib) or ``git diff`` line-diff providers
- Batch processing of files against ``HEAD``, a commit, or between commits

Examples
--------
Annotate two versions of a document:

    >>> from mdchangemarks import annotate_markdown, strip_change_markers
    >>> marked = annotate_markdown("# Title\\n\\nHello world\\n", "# Title\\n\\nHello there\\n")
    >>> "<mark>Hello there</mark>" in marked
    True

Remove the markers again:

    >>> strip_change_markers(marked)
    '# Title\\n\\nHello there'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdchangemarks/__init__.py

from mdchangemarks.annotator import annotate_lines, annotate_markdown
from mdchangemarks.diff import (
    DifflibDiffProvider,
    GitDiffProvider,
    LineChanges,
    LineDiffProvider,
    get_diff_provider,
    parse_unified_diff,
)
from mdchangemarks.exceptions import (
    AnnotationError,
    DiffProviderError,
    FileAccessError,
    FileError,
    FileNotFoundError,
    MdChangeMarksError,
    RepositoryError,
    ValidationError,
)
from mdchangemarks.options import AnnotationOptions
from mdchangemarks.stripper import strip_change_markers

__version__ = "0.1.0"

__all__ = [
    "AnnotationError",
    "AnnotationOptions",
    "DiffProviderError",
    "DifflibDiffProvider",
    "FileAccessError",
    "FileError",
    "FileNotFoundError",
    "GitDiffProvider",
    "LineChanges",
    "LineDiffProvider",
    "MdChangeMarksError",
    "RepositoryError",
    "ValidationError",
    "__version__",
    "annotate_lines",
    "annotate_markdown",
    "get_diff_provider",
    "parse_unified_diff",
    "strip_change_markers",
]
