"""Structured logging module for ucvt.

Provides text and JSON formatters that carry conversion fields, file
rotation, and a context manager tying codec records to the file being
converted.
"""

from ucvt.logging.config import configure_logging
from ucvt.logging.context import (
    ConversionContextFilter,
    conversion_context,
    get_conversion_context,
)
from ucvt.logging.handlers import EVENT_FIELDS, JSONFormatter, TextFormatter

__all__ = [
    "EVENT_FIELDS",
    "ConversionContextFilter",
    "JSONFormatter",
    "TextFormatter",
    "configure_logging",
    "conversion_context",
    "get_conversion_context",
]
