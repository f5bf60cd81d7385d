"""Bulk converters between UTF-8 and fixed-width Unicode forms.

All seven converters share one contract:
- The source is terminated by a zero unit or by its own end.
- ``capacity`` counts destination units including the terminator and
  defaults to the length of ``dst``. One unit is reserved for the terminator
  before anything else is written.
- The terminator is always written when capacity is non-zero, also when the
  output was cut short.
- Output is well formed up to the truncation point. Undecodable or
  unrepresentable input becomes REPLACEMENT_CHAR.
- The return value is the number of content units written, which is also
  the index of the terminator.

Example:
    >>> from array import array
    >>> dst = array("I", [0] * 8)
    >>> utf8_to_ucs4("h\\u00e9".encode(), dst)
    2
    >>> list(dst[:3])
    [104, 233, 0]
"""

from __future__ import annotations

import logging
from collections.abc import MutableSequence, Sequence

from ucvt.codec.decoder import decode_codepoint
from ucvt.codec.encoder import encode_codepoint
from ucvt.codec.types import (
    BOGUS,
    HIGH_SURROGATE_FIRST,
    HIGH_SURROGATE_LAST,
    LOW_SURROGATE_FIRST,
    LOW_SURROGATE_LAST,
    REPLACEMENT_CHAR,
    DestCursor,
    SourceCursor,
    resolve_capacity,
)

logger = logging.getLogger(__name__)

_UCS2_MAX = 0xFFFF
_UCS4_MAX = 0xFFFFFFFF


def _log_exhausted(name: str, writer: DestCursor, reader: SourceCursor) -> None:
    if writer.remaining == 0:
        logger.debug(
            "%s: destination capacity exhausted after %d units (source offset %d)",
            name,
            writer.pos,
            reader.pos,
            extra={
                "converter": name,
                "units_written": writer.pos,
                "source_offset": reader.pos,
            },
        )


def _utf8_to_fixed(
    name: str,
    src: Sequence[int],
    dst: MutableSequence[int],
    capacity: int | None,
    limit: int,
) -> int:
    """Decode UTF-8 into one unit per scalar, replacing scalars above ``limit``."""
    capacity = resolve_capacity(dst, capacity)
    if capacity == 0:
        return 0

    reader = SourceCursor(src)
    writer = DestCursor(dst, remaining=capacity - 1)

    while writer.remaining > 0:
        cp = decode_codepoint(reader)
        if cp == 0:
            break
        if cp is BOGUS or cp > limit:
            cp = REPLACEMENT_CHAR
        writer.put(cp)

    _log_exhausted(name, writer, reader)
    writer.terminate()
    return writer.pos


def utf8_to_ucs4(
    src: Sequence[int],
    dst: MutableSequence[int],
    capacity: int | None = None,
) -> int:
    """Convert UTF-8 to UCS-4 (UTF-32), one unit per scalar.

    Args:
        src: UTF-8 bytes.
        dst: Destination of 32-bit units, e.g. ``array("I")``.
        capacity: Destination units including the terminator.

    Returns:
        Number of units written before the terminator.
    """
    return _utf8_to_fixed("utf8_to_ucs4", src, dst, capacity, _UCS4_MAX)


def utf8_to_ucs2(
    src: Sequence[int],
    dst: MutableSequence[int],
    capacity: int | None = None,
) -> int:
    """Convert UTF-8 to UCS-2.

    UCS-2 has no surrogate pairs, so scalars above U+FFFF become
    REPLACEMENT_CHAR.
    """
    return _utf8_to_fixed("utf8_to_ucs2", src, dst, capacity, _UCS2_MAX)


def utf8_to_utf16(
    src: Sequence[int],
    dst: MutableSequence[int],
    capacity: int | None = None,
) -> int:
    """Convert UTF-8 to UTF-16, encoding astral scalars as surrogate pairs.

    When only one unit of capacity is left and the next scalar needs a pair,
    conversion stops before the high surrogate. An unpaired surrogate is never
    produced by truncation.

    Args:
        src: UTF-8 bytes.
        dst: Destination of 16-bit units, e.g. ``array("H")``.
        capacity: Destination units including the terminator.

    Returns:
        Number of units written before the terminator.
    """
    capacity = resolve_capacity(dst, capacity)
    if capacity == 0:
        return 0

    reader = SourceCursor(src)
    writer = DestCursor(dst, remaining=capacity - 1)

    while writer.remaining > 0:
        start = reader.pos
        cp = decode_codepoint(reader)
        if cp == 0:
            break
        if cp is BOGUS:
            cp = REPLACEMENT_CHAR

        if cp > _UCS2_MAX:
            if writer.remaining < 2:
                logger.debug(
                    "utf8_to_utf16: no room for surrogate pair after %d units",
                    writer.pos,
                    extra={
                        "converter": "utf8_to_utf16",
                        "units_written": writer.pos,
                        "source_offset": start,
                    },
                )
                break
            cp -= 0x10000  # 20-bit value
            writer.put(HIGH_SURROGATE_FIRST + ((cp >> 10) & 0x3FF))
            cp = LOW_SURROGATE_FIRST + (cp & 0x3FF)

        writer.put(cp)

    _log_exhausted("utf8_to_utf16", writer, reader)
    writer.terminate()
    return writer.pos


def _utf8_from_fixed(
    name: str,
    src: Sequence[int],
    dst: MutableSequence[int],
    capacity: int | None,
    mask: int,
) -> int:
    """Encode fixed-width units straight to UTF-8, one scalar per unit."""
    capacity = resolve_capacity(dst, capacity)
    if capacity == 0:
        return 0

    reader = SourceCursor(src)
    writer = DestCursor(dst, remaining=capacity - 1)

    while writer.remaining > 0:
        cp = reader.take() & mask
        if cp == 0:
            break
        encode_codepoint(cp, writer)

    _log_exhausted(name, writer, reader)
    writer.terminate()
    return writer.pos


def utf8_from_ucs4(
    src: Sequence[int],
    dst: MutableSequence[int],
    capacity: int | None = None,
) -> int:
    """Convert UCS-4 (UTF-32) to UTF-8.

    Args:
        src: 32-bit units, e.g. ``array("I")``.
        dst: Destination ``bytearray``.
        capacity: Destination bytes including the terminator.

    Returns:
        Number of bytes written before the terminator.
    """
    return _utf8_from_fixed("utf8_from_ucs4", src, dst, capacity, _UCS4_MAX)


def utf8_from_ucs2(
    src: Sequence[int],
    dst: MutableSequence[int],
    capacity: int | None = None,
) -> int:
    """Convert UCS-2 to UTF-8. Each unit is taken as a scalar as-is."""
    return _utf8_from_fixed("utf8_from_ucs2", src, dst, capacity, _UCS2_MAX)


def utf8_from_latin1(
    src: Sequence[int],
    dst: MutableSequence[int],
    capacity: int | None = None,
) -> int:
    """Convert Latin-1 to UTF-8.

    Latin-1 bytes are the first 256 Unicode codepoints, so no table is needed.
    """
    return _utf8_from_fixed("utf8_from_latin1", src, dst, capacity, 0xFF)


def utf8_from_utf16(
    src: Sequence[int],
    dst: MutableSequence[int],
    capacity: int | None = None,
) -> int:
    """Convert UTF-16 to UTF-8, combining surrogate pairs.

    A low surrogate without a preceding high surrogate, or a high surrogate
    not followed by a low surrogate, becomes REPLACEMENT_CHAR. In the second
    case the following unit is left in place and decoded on its own.

    Args:
        src: 16-bit units, e.g. ``array("H")``.
        dst: Destination ``bytearray``.
        capacity: Destination bytes including the terminator.

    Returns:
        Number of bytes written before the terminator.
    """
    capacity = resolve_capacity(dst, capacity)
    if capacity == 0:
        return 0

    reader = SourceCursor(src)
    writer = DestCursor(dst, remaining=capacity - 1)

    while writer.remaining > 0:
        cp = reader.take() & _UCS2_MAX
        if cp == 0:
            break

        if LOW_SURROGATE_FIRST <= cp <= LOW_SURROGATE_LAST:
            cp = REPLACEMENT_CHAR  # orphaned second half
        elif HIGH_SURROGATE_FIRST <= cp <= HIGH_SURROGATE_LAST:
            pair = reader.peek() & _UCS2_MAX
            if LOW_SURROGATE_FIRST <= pair <= LOW_SURROGATE_LAST:
                reader.advance(1)
                cp = (
                    ((cp - HIGH_SURROGATE_FIRST) << 10) | (pair - LOW_SURROGATE_FIRST)
                ) + 0x10000
            else:
                cp = REPLACEMENT_CHAR

        encode_codepoint(cp, writer)

    _log_exhausted("utf8_from_utf16", writer, reader)
    writer.terminate()
    return writer.pos
