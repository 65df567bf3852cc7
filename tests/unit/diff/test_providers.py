"""Unit tests for the line-diff providers."""

import subprocess
from unittest.mock import patch

import pytest
from utils import GIT_AVAILABLE

from mdchangemarks.diff import parse_unified_diff
from mdchangemarks.diff.providers import (
    DifflibDiffProvider,
    GitDiffProvider,
    LineDiffProvider,
    get_diff_provider,
)
from mdchangemarks.exceptions import DiffProviderError, ValidationError
from mdchangemarks.options import AnnotationOptions

requires_git = pytest.mark.skipif(not GIT_AVAILABLE, reason="git executable not available")


@pytest.mark.unit
class TestDifflibDiffProvider:
    """Tests for the in-process difflib provider."""

    def test_satisfies_protocol(self):
        """Test that the provider is a LineDiffProvider."""
        assert isinstance(DifflibDiffProvider(), LineDiffProvider)

    def test_identical_texts_produce_empty_diff(self):
        """Test that no diff is produced for identical inputs."""
        assert DifflibDiffProvider().unified_diff("a\nb\n", "a\nb\n") == ""

    def test_zero_context(self):
        """Test that the diff carries no context lines."""
        diff = DifflibDiffProvider().unified_diff("a\nb\nc\n", "a\nB\nc\n")
        body = [line for line in diff.split("\n") if line and line[0] in " +-" and not line.startswith(("---", "+++"))]
        assert body == ["-b", "+B"]

    def test_line_ending_differences_are_ignored(self):
        """Test that CRLF and LF versions of the same text do not differ."""
        assert DifflibDiffProvider().unified_diff("a\r\nb\r\n", "a\nb\n") == ""

    def test_missing_final_newline_is_ignored(self):
        """Test that a missing trailing newline does not count as a change."""
        assert DifflibDiffProvider().unified_diff("a\nb", "a\nb\n") == ""

    def test_pure_deletion_round_trips_through_parser(self):
        """Test that difflib's deletion headers key deletions after the anchor line."""
        diff = DifflibDiffProvider().unified_diff("a\nb\nc\n", "a\nc\n")
        changes = parse_unified_diff(diff)
        assert changes.changed_lines == set()
        assert changes.deletions == {2: ["b"]}

    def test_added_file(self):
        """Test that an empty old text marks every new line as changed."""
        changes = parse_unified_diff(DifflibDiffProvider().unified_diff("", "x\ny\n"))
        assert changes.changed_lines == {1, 2}


@pytest.mark.unit
class TestGitDiffProvider:
    """Tests for the git-backed provider."""

    def test_missing_git_returns_empty_diff(self, caplog):
        """Test that an unavailable executable degrades to an empty diff with a warning."""
        provider = GitDiffProvider(git_executable="definitely-not-git-xyz")
        with caplog.at_level("WARNING"):
            assert provider.unified_diff("a\n", "b\n") == ""
        assert "not found" in caplog.text

    def test_unexpected_exit_status_raises(self, temp_dir):
        """Test that exit statuses other than 0 and 1 raise DiffProviderError."""
        provider = GitDiffProvider(temp_dir=temp_dir)
        failed = subprocess.CompletedProcess(args=[], returncode=128, stdout=b"", stderr=b"fatal: boom")
        with patch.object(provider, "resolve_executable", return_value="/usr/bin/git"):
            with patch("mdchangemarks.diff.providers.subprocess.run", return_value=failed):
                with pytest.raises(DiffProviderError, match="status 128"):
                    provider.unified_diff("a\n", "b\n")

    def test_timeout_raises(self, temp_dir):
        """Test that a timeout is reported as DiffProviderError."""
        provider = GitDiffProvider(temp_dir=temp_dir, timeout=0.5)
        with patch.object(provider, "resolve_executable", return_value="/usr/bin/git"):
            with patch(
                "mdchangemarks.diff.providers.subprocess.run",
                side_effect=subprocess.TimeoutExpired(cmd="git", timeout=0.5),
            ):
                with pytest.raises(DiffProviderError) as exc_info:
                    provider.unified_diff("a\n", "b\n")
        assert exc_info.value.provider == "git"

    def test_temporary_files_are_removed(self, temp_dir):
        """Test that the temporary inputs are deleted even when git fails."""
        provider = GitDiffProvider(temp_dir=temp_dir)
        with patch.object(provider, "resolve_executable", return_value="/usr/bin/git"):
            with patch("mdchangemarks.diff.providers.subprocess.run", side_effect=OSError("cannot exec")):
                with pytest.raises(DiffProviderError):
                    provider.unified_diff("a\n", "b\n")
        assert list(temp_dir.iterdir()) == []

    @requires_git
    def test_real_git_diff(self, temp_dir):
        """Test that real git output parses to the same changes as difflib."""
        old = "# Title\n\nHello world\n\nBye\n"
        new = "# Title\n\nHello there\n"
        git_changes = parse_unified_diff(GitDiffProvider(temp_dir=temp_dir).unified_diff(old, new))
        difflib_changes = parse_unified_diff(DifflibDiffProvider().unified_diff(old, new))
        assert git_changes.changed_lines == difflib_changes.changed_lines == {3}
        assert git_changes.deletions == difflib_changes.deletions

    @requires_git
    def test_real_git_identical(self, temp_dir):
        """Test that identical inputs give an empty diff (exit status 0)."""
        assert GitDiffProvider(temp_dir=temp_dir).unified_diff("same\r\n", "same\n") == ""


@pytest.mark.unit
class TestGetDiffProvider:
    """Tests for the provider factory."""

    def test_default_is_difflib(self):
        """Test that difflib is the default provider."""
        assert isinstance(get_diff_provider(), DifflibDiffProvider)

    def test_git_uses_options(self):
        """Test that the git provider picks up executable and timeout from options."""
        options = AnnotationOptions(git_executable="/opt/git/bin/git", diff_timeout=5)
        provider = get_diff_provider("git", options=options)
        assert isinstance(provider, GitDiffProvider)
        assert provider.git_executable == "/opt/git/bin/git"
        assert provider.timeout == 5

    def test_name_from_options(self):
        """Test that the provider name falls back to the options."""
        assert isinstance(get_diff_provider(options=AnnotationOptions(diff_provider="git")), GitDiffProvider)

    def test_unknown_name(self):
        """Test that an unknown provider name is rejected."""
        with pytest.raises(ValidationError):
            get_diff_provider("svn")
