"""Unit tests for zero-context unified diff parsing."""

import pytest

from mdchangemarks.diff.hunks import HUNK_HEADER_RE, LineChanges, _Cursor, parse_unified_diff
from mdchangemarks.exceptions import AnnotationError


@pytest.mark.unit
class TestHunkHeader:
    """Tests for the hunk header pattern."""

    def test_header_with_counts(self):
        """Test that start and count are captured on both sides."""
        match = HUNK_HEADER_RE.match("@@ -3,2 +4,5 @@ heading context")
        assert match.groups() == ("3", "2", "4", "5")

    def test_header_without_counts(self):
        """Test that omitted counts are None."""
        match = HUNK_HEADER_RE.match("@@ -7 +7 @@")
        assert match.groups() == ("7", None, "7", None)

    def test_malformed_header(self):
        """Test that a header without ranges does not match."""
        assert HUNK_HEADER_RE.match("@@ garbage @@") is None


@pytest.mark.unit
class TestParseUnifiedDiff:
    """Tests for parse_unified_diff."""

    def test_single_line_replacement(self):
        """Test that a replaced line is changed and its old text is keyed at the same position."""
        diff = "--- old\n+++ new\n@@ -3 +3 @@\n-Hello world\n+Hello there\n"
        changes = parse_unified_diff(diff)
        assert changes.changed_lines == {3}
        assert changes.deletions == {3: ["Hello world"]}

    def test_pure_addition(self):
        """Test that added lines are recorded without deletions."""
        changes = parse_unified_diff("@@ -2,0 +3,2 @@\n+one\n+two\n")
        assert changes.changed_lines == {3, 4}
        assert changes.deletions == {}

    def test_pure_deletion_keyed_after_anchor(self):
        """Test that a '+c,0' hunk keys its deletions at c + 1."""
        changes = parse_unified_diff("@@ -4,2 +3,0 @@\n-gone one\n-gone two\n")
        assert changes.changed_lines == set()
        assert changes.deletions == {4: ["gone one", "gone two"]}

    def test_deletion_at_document_start(self):
        """Test that deleting the first lines keys them at position 1."""
        changes = parse_unified_diff("@@ -1,2 +0,0 @@\n-first\n-second\n")
        assert changes.deletions == {1: ["first", "second"]}

    def test_trailing_deletion_lands_past_end(self):
        """Test that deletions after the last new line land at len(new) + 1."""
        changes = parse_unified_diff("@@ -3 +2,0 @@\n-last line\n")
        assert changes.deletions == {3: ["last line"]}

    def test_multiple_hunks(self):
        """Test that each hunk resets the cursors."""
        diff = "@@ -1 +1 @@\n-a\n+A\n@@ -10,0 +11 @@\n+new\n"
        changes = parse_unified_diff(diff)
        assert changes.changed_lines == {1, 11}
        assert changes.deletions == {1: ["a"]}

    def test_blank_deletions_are_dropped(self):
        """Test that whitespace-only deleted lines are never recorded."""
        changes = parse_unified_diff("@@ -1,2 +1 @@\n-   \n-text\n+new\n")
        assert changes.deletions == {1: ["text"]}

    def test_context_lines_advance_both_cursors(self):
        """Test that context lines are tolerated when present."""
        changes = parse_unified_diff("@@ -1,3 +1,3 @@\n a\n-b\n+B\n c\n")
        assert changes.changed_lines == {2}
        assert changes.deletions == {2: ["b"]}

    def test_lines_before_first_hunk_are_ignored(self):
        """Test that +/- lines outside a hunk are ignored."""
        changes = parse_unified_diff("+stray\n-stray\n@@ -1 +1 @@\n-x\n+y\n")
        assert changes.changed_lines == {1}
        assert changes.deletions == {1: ["x"]}

    def test_lines_after_malformed_header_are_ignored(self):
        """Test that a malformed header disables the hunk until the next valid one."""
        changes = parse_unified_diff("@@ nonsense @@\n+lost\n@@ -2 +2 @@\n+kept\n")
        assert changes.changed_lines == {2}

    def test_no_newline_marker_is_skipped(self):
        """Test that the '\\ No newline at end of file' marker is not a change."""
        diff = "@@ -1 +1 @@\n-old\n\\ No newline at end of file\n+new\n\\ No newline at end of file\n"
        changes = parse_unified_diff(diff)
        assert changes.changed_lines == {1}
        assert changes.deletions == {1: ["old"]}

    def test_git_headers_are_skipped(self):
        """Test that git's file header lines are not treated as changes."""
        diff = (
            "diff --git a/old.md b/new.md\n"
            "index 3b18e51..a5c1966 100644\n"
            "--- a/old.md\n"
            "+++ b/new.md\n"
            "@@ -2 +2 @@\n"
            "-before\n"
            "+after\n"
        )
        changes = parse_unified_diff(diff)
        assert changes.changed_lines == {2}
        assert changes.deletions == {2: ["before"]}

    def test_deleted_line_that_looks_like_header(self):
        """Test that '---' inside a hunk is a deleted '--' line."""
        changes = parse_unified_diff("@@ -1 +1 @@\n---\n+text\n")
        assert changes.deletions == {1: ["--"]}

    def test_crlf_diff_text(self):
        """Test that CRLF line endings in the diff text are tolerated."""
        changes = parse_unified_diff("@@ -1 +1 @@\r\n-a\r\n+b\r\n")
        assert changes.changed_lines == {1}
        assert changes.deletions == {1: ["a"]}

    def test_accepts_iterable_of_lines(self):
        """Test that a list of lines is accepted as well as a string."""
        changes = parse_unified_diff(["@@ -1 +1 @@", "-a", "+b"])
        assert changes.changed_lines == {1}

    def test_empty_diff(self):
        """Test that an empty diff means no changes."""
        assert parse_unified_diff("").is_empty


@pytest.mark.unit
class TestLineChanges:
    """Tests for the LineChanges container."""

    def test_deletions_at_missing_position(self):
        """Test that an unknown position has no deletions."""
        assert LineChanges().deletions_at(5) == []

    def test_add_deletion_appends_in_order(self):
        """Test that deletions at one position keep their order."""
        changes = LineChanges()
        changes.add_deletion(2, "first")
        changes.add_deletion(2, "second")
        assert changes.deletions_at(2) == ["first", "second"]
        assert not changes.is_empty


@pytest.mark.unit
class TestCursor:
    """Tests for the per-hunk line cursors."""

    def test_zero_count_header_moves_to_next_line(self):
        """Test that a "+c,0" header positions the new cursor after line c."""
        cursor = _Cursor()
        cursor.reset("@@ -4,2 +3,0 @@")
        assert (cursor.old_line, cursor.new_line, cursor.active) == (4, 4, True)

    def test_malformed_header_deactivates(self):
        """Test that a malformed header leaves the cursor inactive at zero."""
        cursor = _Cursor()
        cursor.reset("@@ -1 +1 @@")
        cursor.reset("@@ nonsense @@")
        assert (cursor.old_line, cursor.new_line, cursor.active) == (0, 0, False)

    @pytest.mark.parametrize("old_line,new_line", [(-1, 0), (0, -1), (-3, -3)])
    def test_negative_position_raises(self, old_line, new_line):
        """Test that a cursor below zero is reported as an annotation error."""
        cursor = _Cursor()
        cursor.old_line = old_line
        cursor.new_line = new_line
        with pytest.raises(AnnotationError, match="went negative"):
            cursor.check()

    def test_valid_position_passes(self):
        """Test that non-negative cursors pass the check."""
        cursor = _Cursor()
        cursor.reset("@@ -1 +1 @@")
        cursor.check()
