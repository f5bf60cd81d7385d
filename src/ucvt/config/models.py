"""Configuration data models.

This module defines dataclasses for ucvt configuration options. None of them
affects conversion or comparison results; they only drive logging and the
case-fold table tooling.
"""

from dataclasses import dataclass, field
from pathlib import Path

from ucvt.casefold.generator import CASEFOLDING_URL

_VALID_LEVELS = frozenset({"debug", "info", "warning", "error"})
_VALID_FORMATS = frozenset({"text", "json"})


@dataclass
class LoggingConfig:
    """Configuration for logging output."""

    # Log level: debug, info, warning, error
    level: str = "warning"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.level.lower() not in _VALID_LEVELS:
            raise ValueError(
                f"level must be one of {sorted(_VALID_LEVELS)}, got {self.level}"
            )
        if self.format.lower() not in _VALID_FORMATS:
            raise ValueError(
                f"format must be one of {sorted(_VALID_FORMATS)}, got {self.format}"
            )


@dataclass
class CaseFoldSourceConfig:
    """Where ``ucvt gen-table`` reads case-folding data from."""

    # CaseFolding.txt URL or local path
    source: str = CASEFOLDING_URL

    # Download timeout in seconds
    timeout_seconds: float = 30.0

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.timeout_seconds <= 0:
            raise ValueError(
                f"timeout_seconds must be positive, got {self.timeout_seconds}"
            )


@dataclass
class UcvtConfig:
    """Top-level ucvt configuration."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    casefold: CaseFoldSourceConfig = field(default_factory=CaseFoldSourceConfig)
