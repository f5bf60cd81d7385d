"""Fixtures for CLI integration tests."""

import logging

import pytest
from click.testing import CliRunner


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Undo the handlers the CLI installs on the root logger."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers[:] = original_handlers
    root.setLevel(original_level)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()
