"""Log formatters for ucvt.

Converters and the case-fold table generator attach structured fields to
their records through ``extra`` (see EVENT_FIELDS). JSONFormatter lifts those
fields to the top level of each entry; TextFormatter appends them to the line
as ``key=value`` pairs.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Structured fields set by ucvt code, in output order.
EVENT_FIELDS: tuple[str, ...] = (
    "conversion",
    "input_path",
    "converter",
    "units_written",
    "source_offset",
    "mapping_count",
    "longest_bucket",
    "unicode_version",
)

# Attributes present on every LogRecord, plus those Formatter.format() adds.
_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


def split_extras(record: logging.LogRecord) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split a record's extras into (event fields, other context).

    Event fields that are None are dropped.
    """
    fields = {
        name: getattr(record, name)
        for name in EVENT_FIELDS
        if getattr(record, name, None) is not None
    }
    context = {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS
        and key not in EVENT_FIELDS
        and not key.startswith("_")
    }
    return fields, context


class JSONFormatter(logging.Formatter):
    """Format log records as one JSON object per line.

    Keys, in order: timestamp (ISO-8601 UTC), level, logger (omitted for the
    root logger), message, then any EVENT_FIELDS present, then ``context``
    for remaining extras and ``exception`` for tracebacks.
    """

    def format(self, record: logging.LogRecord) -> str:
        record_time = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": record_time.isoformat(),
            "level": record.levelname,
        }
        if record.name and record.name != "root":
            entry["logger"] = record.name
        entry["message"] = record.getMessage()

        fields, context = split_extras(record)
        entry.update(fields)
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable formatter that appends event fields to the message.

    Example line::

        2024-05-01T10:00:00+0000 - ucvt.codec.converters - DEBUG - utf8_to_ucs2:
        destination capacity exhausted [conversion=utf8->ucs2
        converter=utf8_to_ucs2 units_written=3 source_offset=4]
    """

    def __init__(self) -> None:
        super().__init__(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        fields, _ = split_extras(record)
        if not fields:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in fields.items())
        return f"{line} [{pairs}]"
