"""Pytest configuration and shared fixtures for the mdchangemarks test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import logging
import os
from pathlib import Path
from typing import Generator

import pytest
from utils import GIT_AVAILABLE, cleanup_test_dir, create_test_temp_dir, init_repo

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=20)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )

    settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test files.

    Yields
    ------
    Path
        Temporary directory path that will be cleaned up after test.

    """
    temp_path = create_test_temp_dir()
    try:
        yield temp_path
    finally:
        cleanup_test_dir(temp_path)


@pytest.fixture
def git_repo(temp_dir: Path) -> Path:
    """Provide an empty git repository, skipping the test when git is missing."""
    if not GIT_AVAILABLE:
        pytest.skip("git executable not available")
    return init_repo(temp_dir / "repo")


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch, tmp_path_factory):
    """Keep user config files and the config env var out of every test."""
    monkeypatch.delenv("MDCHANGEMARKS_CONFIG", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path_factory.mktemp("home")))
    yield
    logging.getLogger().handlers.clear()


@pytest.fixture
def sample_document() -> str:
    """Provide a document touching every structure the annotator knows about.

    Returns
    -------
    str
        Markdown with headings, a list, a table and an image.

    """
    return """# Sample Document

Intro paragraph.

## Steps

- First step
- Second step
  continued here

| Name | Value |
|------|-------|
| A    | 1     |
| B    | 2     |

![Diagram](diagram.png)

Closing words.
"""
