"""Shared test fixtures for ucvt."""

import shutil
import tempfile
from array import array
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test isolation."""
    dir_path = tempfile.mkdtemp()
    yield Path(dir_path)
    shutil.rmtree(dir_path, ignore_errors=True)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, temp_dir: Path) -> Path:
    """Point config lookup at an empty temp location and clear UCVT_* vars."""
    for var in (
        "UCVT_LOG_LEVEL",
        "UCVT_LOG_FILE",
        "UCVT_LOG_FORMAT",
        "UCVT_CASEFOLD_URL",
        "UCVT_CASEFOLD_TIMEOUT",
    ):
        monkeypatch.delenv(var, raising=False)
    config_path = temp_dir / "config.toml"
    monkeypatch.setenv("UCVT_CONFIG_PATH", str(config_path))
    return config_path


@pytest.fixture
def ucs4_buffer():
    """Return a factory for 32-bit destination buffers pre-filled with junk."""

    def _make(size: int) -> array:
        return array("I", [0xAAAA] * size)

    return _make


@pytest.fixture
def ucs2_buffer():
    """Return a factory for 16-bit destination buffers pre-filled with junk."""

    def _make(size: int) -> array:
        return array("H", [0xAAAA] * size)

    return _make


@pytest.fixture
def utf8_buffer():
    """Return a factory for byte destination buffers pre-filled with junk."""

    def _make(size: int) -> bytearray:
        return bytearray(b"\xaa" * size)

    return _make
