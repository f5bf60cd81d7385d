"""Conversion context for log records.

The convert command runs one conversion at a time but the converters log from
deep inside the codec. A context variable carries the encoding pair and input
file down to them so every record can be tied back to the file being
converted.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_conversion: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "conversion", default=None
)
_input_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "input_path", default=None
)


@contextmanager
def conversion_context(
    source_encoding: str,
    target_encoding: str,
    input_path: Path | str | None = None,
) -> Generator[None, None, None]:
    """Tag log records emitted inside the block with a conversion.

    Args:
        source_encoding: Encoding being read, e.g. "utf8".
        target_encoding: Encoding being written, e.g. "ucs2".
        input_path: File being converted, if any.

    Example:
        with conversion_context("utf8", "ucs2", "names.txt"):
            utf8_to_ucs2(data, dst, None)  # records carry conversion=utf8->ucs2
    """
    conversion_token = _conversion.set(f"{source_encoding}->{target_encoding}")
    path_token = _input_path.set(str(input_path) if input_path is not None else None)
    try:
        yield
    finally:
        _input_path.reset(path_token)
        _conversion.reset(conversion_token)


def get_conversion_context() -> tuple[str | None, str | None]:
    """Return (conversion, input_path) for the current context."""
    return _conversion.get(), _input_path.get()


class ConversionContextFilter(logging.Filter):
    """Inject ``conversion`` and ``input_path`` into log records.

    Records logged outside conversion_context() get None for both. Values
    passed explicitly through ``extra`` are left alone.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        conversion, input_path = get_conversion_context()
        if getattr(record, "conversion", None) is None:
            record.conversion = conversion
        if getattr(record, "input_path", None) is None:
            record.input_path = input_path
        return True
