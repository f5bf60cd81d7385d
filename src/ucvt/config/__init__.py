"""Configuration for ucvt tooling."""

from ucvt.config.env import EnvReader
from ucvt.config.loader import (
    DEFAULT_CONFIG_FILE,
    build_config,
    get_config,
    get_default_config_path,
    load_config_file,
)
from ucvt.config.models import CaseFoldSourceConfig, LoggingConfig, UcvtConfig

__all__ = [
    "DEFAULT_CONFIG_FILE",
    "CaseFoldSourceConfig",
    "EnvReader",
    "LoggingConfig",
    "UcvtConfig",
    "build_config",
    "get_config",
    "get_default_config_path",
    "load_config_file",
]
