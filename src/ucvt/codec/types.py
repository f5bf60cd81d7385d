"""Shared types and constants for the UTF-8 codec.

This module holds the pieces every codec routine agrees on:
- The decode failure marker returned by the codepoint decoder
- The replacement scalar substituted for it at the public boundary
- Source and destination cursors over caller-owned buffers

From RFC 3629:

    Char. number range  |        UTF-8 octet sequence
       (hexadecimal)    |              (binary)
    --------------------+---------------------------------------------
    0000 0000-0000 007F | 0xxxxxxx
    0000 0080-0000 07FF | 110xxxxx 10xxxxxx
    0000 0800-0000 FFFF | 1110xxxx 10xxxxxx 10xxxxxx
    0001 0000-0010 FFFF | 11110xxx 10xxxxxx 10xxxxxx 10xxxxxx
"""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Union

# Largest valid Unicode codepoint.
MAX_CODEPOINT = 0x10FFFF

# Scalar written wherever the input could not be decoded or represented.
REPLACEMENT_CHAR = 0x3F  # '?'

# The seven UTF-16 surrogate values that are illegal in UTF-8.
ILLEGAL_SURROGATES: frozenset[int] = frozenset(
    {0xD800, 0xDB7F, 0xDB80, 0xDBFF, 0xDC00, 0xDF80, 0xDFFF}
)

# Non-characters at the top of the Basic Multilingual Plane.
NONCHARACTERS: frozenset[int] = frozenset({0xFFFE, 0xFFFF})

HIGH_SURROGATE_FIRST = 0xD800
HIGH_SURROGATE_LAST = 0xDBFF
LOW_SURROGATE_FIRST = 0xDC00
LOW_SURROGATE_LAST = 0xDFFF


class DecodeFailure(Enum):
    """Marker returned by the decoder when bytes do not form a scalar.

    Never a valid codepoint, never equal to REPLACEMENT_CHAR. Public
    converters replace it before anything reaches a destination buffer.
    """

    BOGUS = "bogus"


BOGUS = DecodeFailure.BOGUS

Decoded = Union[int, DecodeFailure]


@dataclass
class SourceCursor:
    """Read position in a terminated source sequence.

    The end of ``data`` behaves like a zero terminator unit, so reads past
    the last element yield 0 instead of raising.

    Attributes:
        data: Bytes-like object or integer sequence being read.
        pos: Index of the next unit to read.
    """

    data: Sequence[int]
    pos: int = 0

    def peek(self, offset: int = 0) -> int:
        """Return the unit ``offset`` places past the cursor, or 0 past the end."""
        index = self.pos + offset
        if index < len(self.data):
            return self.data[index]
        return 0

    def take(self) -> int:
        """Return the unit at the cursor and advance past it.

        At the end of the data this returns 0 and leaves the cursor alone.
        """
        unit = self.peek()
        if self.pos < len(self.data):
            self.pos += 1
        return unit

    def advance(self, count: int) -> None:
        """Move the cursor ``count`` units forward, clamped to the data length."""
        self.pos = min(self.pos + count, len(self.data))


@dataclass
class DestCursor:
    """Write position and residual capacity in a destination buffer.

    Attributes:
        buf: Caller-owned mutable sequence receiving units.
        pos: Index of the next unit to write.
        remaining: Units that may still be written. Reaching 0 stops all
            further writes for this buffer.
    """

    buf: MutableSequence[int]
    pos: int = 0
    remaining: int = 0

    def put(self, unit: int) -> None:
        """Write one unit and consume one unit of capacity."""
        self.buf[self.pos] = unit
        self.pos += 1
        self.remaining -= 1

    def terminate(self) -> None:
        """Write the terminator unit at the current position.

        The terminator slot is reserved up front by every converter, so this
        never consumes ``remaining``.
        """
        self.buf[self.pos] = 0


def resolve_capacity(buf: Sequence[int], capacity: int | None) -> int:
    """Validate a caller-supplied destination capacity.

    Args:
        buf: Destination buffer.
        capacity: Capacity in destination units including the terminator,
            or None to use the whole buffer.

    Returns:
        The effective capacity.

    Raises:
        ValueError: If capacity is negative or larger than the buffer.
    """
    if capacity is None:
        return len(buf)
    if capacity < 0:
        raise ValueError(f"capacity must be non-negative, got {capacity}")
    if capacity > len(buf):
        raise ValueError(
            f"capacity {capacity} exceeds destination buffer length {len(buf)}"
        )
    return capacity
