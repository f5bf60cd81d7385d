"""UTF-8 codepoint encoder.

Encodes one scalar value at a time into a destination cursor with a residual
capacity. A scalar is written completely or not at all.
"""

from __future__ import annotations

from ucvt.codec.types import (
    ILLEGAL_SURROGATES,
    MAX_CODEPOINT,
    NONCHARACTERS,
    REPLACEMENT_CHAR,
    DestCursor,
)


def sanitize_scalar(cp: int) -> int:
    """Replace values that must never appear in UTF-8 output.

    Values above U+10FFFF, the two BMP non-characters and the seven illegal
    surrogate values become REPLACEMENT_CHAR. Everything else passes through.
    """
    if cp > MAX_CODEPOINT or cp in NONCHARACTERS or cp in ILLEGAL_SURROGATES:
        return REPLACEMENT_CHAR
    return cp


def encoded_length(cp: int) -> int:
    """Return the number of UTF-8 bytes needed for a sanitized scalar."""
    if cp < 0x80:
        return 1
    if cp < 0x800:
        return 2
    if cp < 0x10000:
        return 3
    return 4


def encode_codepoint(cp: int, dst: DestCursor) -> None:
    """Write the UTF-8 encoding of ``cp`` and consume its capacity.

    If the residual capacity is already 0 nothing happens. If it is too small
    for the whole sequence, nothing is written and the capacity drops to 0,
    which stops every later write into the same buffer. A truncated multi-byte
    tail is never produced.

    Args:
        cp: Scalar value to encode. Invalid values are sanitized first.
        dst: Destination cursor over a byte buffer.
    """
    if dst.remaining == 0:
        return

    cp = sanitize_scalar(cp)
    length = encoded_length(cp)

    if dst.remaining < length:
        dst.remaining = 0
        return

    if length == 1:
        dst.put(cp)
    elif length == 2:
        dst.put(0xC0 | (cp >> 6))
        dst.put(0x80 | (cp & 0x3F))
    elif length == 3:
        dst.put(0xE0 | (cp >> 12))
        dst.put(0x80 | ((cp >> 6) & 0x3F))
        dst.put(0x80 | (cp & 0x3F))
    else:
        dst.put(0xF0 | (cp >> 18))
        dst.put(0x80 | ((cp >> 12) & 0x3F))
        dst.put(0x80 | ((cp >> 6) & 0x3F))
        dst.put(0x80 | (cp & 0x3F))
