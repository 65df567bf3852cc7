"""Unit tests for CLI configuration discovery and loading."""

import argparse
import json

import pytest

from mdchangemarks.cli.config import (
    discover_config_file,
    find_config_in_parents,
    load_config_file,
    load_config_with_priority,
)


@pytest.mark.unit
@pytest.mark.cli
class TestLoadConfigFile:
    """Tests for loading each supported format."""

    def test_toml(self, temp_dir):
        """Test a dedicated TOML config file."""
        path = temp_dir / ".mdchangemarks.toml"
        path.write_text('diff_provider = "git"\nappend_footer = false\n', encoding="utf-8")
        assert load_config_file(path) == {"diff_provider": "git", "append_footer": False}

    def test_yaml(self, temp_dir):
        """Test a YAML config file."""
        path = temp_dir / "config.yaml"
        path.write_text("diff-timeout: 5\ngit-executable: /usr/local/bin/git\n", encoding="utf-8")
        assert load_config_file(path) == {"diff-timeout": 5, "git-executable": "/usr/local/bin/git"}

    def test_empty_yaml(self, temp_dir):
        """Test that an empty YAML file is an empty configuration."""
        path = temp_dir / "config.yml"
        path.write_text("", encoding="utf-8")
        assert load_config_file(path) == {}

    def test_json(self, temp_dir):
        """Test a JSON config file."""
        path = temp_dir / "config.json"
        path.write_text(json.dumps({"append_footer": False}), encoding="utf-8")
        assert load_config_file(str(path)) == {"append_footer": False}

    def test_pyproject_section(self, temp_dir):
        """Test the [tool.mdchangemarks] table of pyproject.toml."""
        path = temp_dir / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.mdchangemarks]\ndiff_provider = "git"\n', encoding="utf-8")
        assert load_config_file(path) == {"diff_provider": "git"}

    @pytest.mark.parametrize(
        "filename,content,match",
        [
            ("bad.toml", "diff_provider = ", "Invalid TOML"),
            ("bad.json", "{not json", "Invalid JSON"),
            ("list.json", "[1, 2]", "must contain an object"),
            ("list.yaml", "- a\n- b\n", "must contain a mapping"),
            ("config.ini", "[x]", "Unsupported config file format"),
        ],
    )
    def test_invalid_files(self, temp_dir, filename, content, match):
        """Test that unreadable configs raise ArgumentTypeError."""
        path = temp_dir / filename
        path.write_text(content, encoding="utf-8")
        with pytest.raises(argparse.ArgumentTypeError, match=match):
            load_config_file(path)

    def test_missing_file(self, temp_dir):
        """Test that a missing explicit config is an error."""
        with pytest.raises(argparse.ArgumentTypeError, match="does not exist"):
            load_config_file(temp_dir / "nope.toml")


@pytest.mark.unit
@pytest.mark.cli
class TestConfigDiscovery:
    """Tests for config discovery and priority."""

    def test_found_in_parent(self, temp_dir):
        """Test that a config in a parent directory is discovered."""
        config = temp_dir / ".mdchangemarks.yaml"
        config.write_text("append_footer: false\n", encoding="utf-8")
        nested = temp_dir / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_in_parents(nested) == config.resolve()

    def test_pyproject_without_section_is_skipped(self, temp_dir):
        """Test that a pyproject.toml without our table does not count."""
        (temp_dir / "pyproject.toml").write_text('[project]\nname = "x"\n', encoding="utf-8")
        assert find_config_in_parents(temp_dir) != (temp_dir / "pyproject.toml").resolve()

    def test_dedicated_file_beats_pyproject(self, temp_dir):
        """Test the order of candidates within one directory."""
        (temp_dir / "pyproject.toml").write_text("[tool.mdchangemarks]\nappend_footer = true\n", encoding="utf-8")
        (temp_dir / ".mdchangemarks.toml").write_text("append_footer = false\n", encoding="utf-8")
        assert find_config_in_parents(temp_dir) == (temp_dir / ".mdchangemarks.toml").resolve()

    def test_home_directory_fallback(self, temp_dir, monkeypatch):
        """Test that the home directory is searched last."""
        home = temp_dir / "home"
        home.mkdir()
        (home / ".mdchangemarks.json").write_text("{}", encoding="utf-8")
        monkeypatch.setenv("HOME", str(home))
        work = temp_dir / "work"
        work.mkdir()
        assert discover_config_file(work) == home / ".mdchangemarks.json"

    def test_priority(self, temp_dir, monkeypatch):
        """Test that an explicit path beats the env var, which beats discovery."""
        explicit = temp_dir / "explicit.toml"
        explicit.write_text('diff_provider = "git"\n', encoding="utf-8")
        from_env = temp_dir / "env.toml"
        from_env.write_text("append_footer = false\n", encoding="utf-8")
        monkeypatch.chdir(temp_dir)

        assert load_config_with_priority(str(explicit), str(from_env)) == {"diff_provider": "git"}
        assert load_config_with_priority(None, str(from_env)) == {"append_footer": False}
