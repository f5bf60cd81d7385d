"""Unit tests for configuration loading and precedence."""

from pathlib import Path

import pytest

from ucvt.casefold.generator import CASEFOLDING_URL
from ucvt.config import (
    EnvReader,
    build_config,
    get_config,
    get_default_config_path,
    load_config_file,
)
from ucvt.config.loader import DEFAULT_CONFIG_FILE
from ucvt.config.logging_factory import build_logging_config
from ucvt.config.models import LoggingConfig
from ucvt.exceptions import ConfigError

CONFIG_TOML = """\
[logging]
level = "info"
file = "~/ucvt-test.log"
format = "json"
include_stderr = true

[casefold]
source = "/data/CaseFolding.txt"
timeout_seconds = 5
"""


@pytest.fixture
def config_file(temp_dir: Path) -> Path:
    path = temp_dir / "ucvt.toml"
    path.write_text(CONFIG_TOML, encoding="utf-8")
    return path


class TestGetDefaultConfigPath:
    """Tests for get_default_config_path()."""

    def test_default_location(self) -> None:
        assert get_default_config_path(EnvReader(env={})) == DEFAULT_CONFIG_FILE

    def test_env_override(self) -> None:
        reader = EnvReader(env={"UCVT_CONFIG_PATH": "/etc/ucvt.toml"})
        assert get_default_config_path(reader) == Path("/etc/ucvt.toml")


class TestLoadConfigFile:
    """Tests for load_config_file()."""

    def test_missing_file_is_empty(self, temp_dir: Path) -> None:
        assert load_config_file(temp_dir / "missing.toml") == {}

    def test_parses_toml(self, config_file: Path) -> None:
        data = load_config_file(config_file)
        assert data["logging"]["level"] == "info"
        assert data["casefold"]["timeout_seconds"] == 5

    def test_invalid_toml_warns(
        self, temp_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        path = temp_dir / "bad.toml"
        path.write_text("[logging\nlevel =", encoding="utf-8")

        assert load_config_file(path) == {}
        assert "Failed to load config file" in caplog.text

    def test_invalid_toml_strict_raises(self, temp_dir: Path) -> None:
        path = temp_dir / "bad.toml"
        path.write_text("[logging\nlevel =", encoding="utf-8")

        with pytest.raises(ConfigError, match="Cannot load config file"):
            load_config_file(path, strict=True)


class TestBuildConfig:
    """Tests for build_config() precedence."""

    def test_defaults(self) -> None:
        config = build_config({}, EnvReader(env={}))

        assert config.logging == LoggingConfig()
        assert config.casefold.source == CASEFOLDING_URL
        assert config.casefold.timeout_seconds == 30.0

    def test_file_values(self, config_file: Path) -> None:
        config = build_config(load_config_file(config_file), EnvReader(env={}))

        assert config.logging.level == "info"
        assert config.logging.format == "json"
        assert config.logging.file == Path.home() / "ucvt-test.log"
        assert config.logging.include_stderr is True
        assert config.casefold.source == "/data/CaseFolding.txt"
        assert config.casefold.timeout_seconds == 5.0

    def test_env_overrides_file(self, config_file: Path) -> None:
        reader = EnvReader(
            env={
                "UCVT_LOG_LEVEL": "debug",
                "UCVT_LOG_FORMAT": "text",
                "UCVT_LOG_FILE": "/tmp/other.log",
                "UCVT_CASEFOLD_URL": "https://example.invalid/cf.txt",
                "UCVT_CASEFOLD_TIMEOUT": "1.5",
            }
        )
        config = build_config(load_config_file(config_file), reader)

        assert config.logging.level == "debug"
        assert config.logging.format == "text"
        assert config.logging.file == Path("/tmp/other.log")
        assert config.casefold.source == "https://example.invalid/cf.txt"
        assert config.casefold.timeout_seconds == 1.5

    def test_invalid_level_raises(self) -> None:
        with pytest.raises(ConfigError, match="level must be one of"):
            build_config({"logging": {"level": "loud"}}, EnvReader(env={}))

    def test_zero_timeout_raises(self) -> None:
        reader = EnvReader(env={"UCVT_CASEFOLD_TIMEOUT": "0"})
        with pytest.raises(ConfigError, match="timeout_seconds must be positive"):
            build_config({}, reader)

    def test_section_must_be_table(self) -> None:
        with pytest.raises(ConfigError, match=r"\[logging\] must be a table"):
            build_config({"logging": "info"}, EnvReader(env={}))


class TestGetConfig:
    """Tests for get_config()."""

    def test_explicit_path(self, config_file: Path) -> None:
        config = get_config(config_file, reader=EnvReader(env={}))
        assert config.logging.level == "info"

    def test_path_from_env(self, config_file: Path) -> None:
        reader = EnvReader(env={"UCVT_CONFIG_PATH": str(config_file)})
        assert get_config(reader=reader).casefold.timeout_seconds == 5.0

    def test_missing_file_gives_defaults(self, temp_dir: Path) -> None:
        config = get_config(temp_dir / "missing.toml", reader=EnvReader(env={}))
        assert config.logging.level == "warning"


class TestBuildLoggingConfig:
    """Tests for build_logging_config()."""

    def test_no_overrides_keeps_base(self) -> None:
        base = LoggingConfig(level="info", format="json")
        assert build_logging_config(base) == base

    def test_overrides_applied(self, temp_dir: Path) -> None:
        base = LoggingConfig(level="info", max_bytes=1024)
        result = build_logging_config(
            base, level="debug", file=temp_dir / "x.log", format="json"
        )

        assert result.level == "debug"
        assert result.file == temp_dir / "x.log"
        assert result.format == "json"
        assert result.max_bytes == 1024

    def test_invalid_override_raises(self) -> None:
        with pytest.raises(ValueError):
            build_logging_config(LoggingConfig(), format="xml")
