"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (applied by the CLI on top of the returned config)
2. Environment variables (UCVT_*)
3. Config file (~/.ucvt/config.toml)
4. Default values

Environment variables:
- UCVT_CONFIG_PATH: Path to config file (overrides default location)
- UCVT_LOG_LEVEL: Log level (debug, info, warning, error)
- UCVT_LOG_FILE: Log file path
- UCVT_LOG_FORMAT: Log format (text, json)
- UCVT_CASEFOLD_URL: CaseFolding.txt URL or path used by gen-table
- UCVT_CASEFOLD_TIMEOUT: Download timeout in seconds

Example config file:

    [logging]
    level = "info"
    file = "~/.ucvt/ucvt.log"
    format = "json"

    [casefold]
    source = "https://www.unicode.org/Public/15.1.0/ucd/CaseFolding.txt"
    timeout_seconds = 10
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

from ucvt.config.env import EnvReader
from ucvt.config.models import CaseFoldSourceConfig, LoggingConfig, UcvtConfig
from ucvt.exceptions import ConfigError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".ucvt"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"


def get_default_config_path(reader: EnvReader | None = None) -> Path:
    """Get the config file path, honoring UCVT_CONFIG_PATH."""
    reader = reader or EnvReader()
    path = reader.get_path("UCVT_CONFIG_PATH", DEFAULT_CONFIG_FILE)
    return path or DEFAULT_CONFIG_FILE


def load_config_file(path: Path, *, strict: bool = False) -> dict[str, Any]:
    """Load configuration from a TOML file.

    Args:
        path: Path to config file.
        strict: If True, raise ConfigError on read or parse failures.
                If False (default), log a warning and return empty dict.

    Returns:
        Parsed configuration dict. Empty dict if file doesn't exist.

    Raises:
        ConfigError: If strict is True and the file cannot be used.
    """
    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        if strict:
            raise ConfigError(f"Cannot load config file {path}: {e}") from e
        logger.warning("Failed to load config file %s: %s", path, e)
        return {}

    logger.debug("Loaded config from %s", path)
    return data


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table, got {type(section).__name__}")
    return section


def build_config(file_config: dict[str, Any], reader: EnvReader) -> UcvtConfig:
    """Build UcvtConfig from parsed file values overridden by environment.

    Args:
        file_config: Parsed TOML config (possibly empty).
        reader: Environment reader.

    Returns:
        Fully resolved configuration.

    Raises:
        ConfigError: If a value fails validation.
    """
    file_logging = _section(file_config, "logging")
    file_casefold = _section(file_config, "casefold")

    defaults = LoggingConfig()
    file_log_path = file_logging.get("file")

    try:
        logging_config = LoggingConfig(
            level=reader.get_str("UCVT_LOG_LEVEL")
            or file_logging.get("level", defaults.level),
            file=reader.get_path(
                "UCVT_LOG_FILE",
                Path(file_log_path).expanduser() if file_log_path else None,
            ),
            format=reader.get_str("UCVT_LOG_FORMAT")
            or file_logging.get("format", defaults.format),
            include_stderr=bool(
                file_logging.get("include_stderr", defaults.include_stderr)
            ),
            max_bytes=int(file_logging.get("max_bytes", defaults.max_bytes)),
            backup_count=int(file_logging.get("backup_count", defaults.backup_count)),
        )

        casefold_defaults = CaseFoldSourceConfig()
        casefold_config = CaseFoldSourceConfig(
            source=reader.get_str("UCVT_CASEFOLD_URL")
            or file_casefold.get("source", casefold_defaults.source),
            timeout_seconds=reader.get_float(
                "UCVT_CASEFOLD_TIMEOUT",
                float(
                    file_casefold.get(
                        "timeout_seconds", casefold_defaults.timeout_seconds
                    )
                ),
            ),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    return UcvtConfig(logging=logging_config, casefold=casefold_config)


def get_config(
    config_path: Path | None = None,
    *,
    reader: EnvReader | None = None,
    strict: bool = False,
) -> UcvtConfig:
    """Load the effective configuration.

    Args:
        config_path: Config file to read. Defaults to UCVT_CONFIG_PATH or
            ~/.ucvt/config.toml.
        reader: Environment reader. Defaults to one over os.environ.
        strict: Raise instead of warn when the config file is unreadable.

    Returns:
        Resolved configuration.
    """
    reader = reader or EnvReader()
    path = config_path or get_default_config_path(reader)
    return build_config(load_config_file(path, strict=strict), reader)
