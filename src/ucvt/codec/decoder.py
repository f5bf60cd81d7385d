"""UTF-8 codepoint decoder.

Decodes one scalar value at a time from a terminated UTF-8 byte sequence.
Every malformed construct is reported in-band as ``BOGUS``; the decoder never
raises for bad input and never reads past the end of the source.
"""

from __future__ import annotations

from ucvt.codec.types import (
    BOGUS,
    ILLEGAL_SURROGATES,
    MAX_CODEPOINT,
    Decoded,
    SourceCursor,
)

# Payload bits kept from a lead byte, by total sequence length.
_LEAD_MASKS: dict[int, int] = {2: 0x1F, 3: 0x0F, 4: 0x07, 5: 0x03, 6: 0x01}

# Inclusive scalar ranges accepted for each modern sequence length.
_VALID_RANGES: dict[int, tuple[int, int]] = {
    2: (0x80, 0x7FF),
    3: (0x800, 0xFFFD),
    4: (0x10000, MAX_CODEPOINT),
}


def sequence_length(lead: int) -> int:
    """Return the total sequence length announced by a lead byte.

    Covers the pre-RFC 3629 five and six octet forms so that they can be
    skipped as a unit. Only meaningful for lead bytes 0xC0 and above.
    """
    if lead < 0xE0:
        return 2
    if lead < 0xF0:
        return 3
    if lead < 0xF8:
        return 4
    if lead < 0xFC:
        return 5
    return 6


def is_continuation(octet: int) -> bool:
    """Check whether a byte has the 10xxxxxx continuation format."""
    return (octet & 0xC0) == 0x80


def decode_codepoint(src: SourceCursor) -> Decoded:
    """Decode the next scalar value and advance the cursor past it.

    Rules:
    - A zero byte (or the end of the data) returns 0 without advancing.
    - ASCII advances by one byte.
    - A continuation byte in lead position returns BOGUS after advancing
      one byte. Each stray byte is reported on its own.
    - If a continuation byte is missing, BOGUS is returned with the cursor
      advanced past the lead byte only, so the offending byte is decoded
      again as a potential lead byte.
    - A structurally complete sequence is always consumed whole, even when
      its value is rejected (overlong, surrogate, non-character, out of
      range, or a five/six octet legacy form).

    Args:
        src: Cursor into the UTF-8 source.

    Returns:
        The decoded scalar, 0 at the terminator, or BOGUS.
    """
    lead = src.peek()
    if lead == 0:
        return 0

    if lead < 0x80:
        src.advance(1)
        return lead

    if lead < 0xC0:
        src.advance(1)
        return BOGUS

    length = sequence_length(lead)
    src.advance(1)  # guarantee progress if the sequence turns out bad

    value = lead & _LEAD_MASKS[length]
    for offset in range(length - 1):
        octet = src.peek(offset)
        if not is_continuation(octet):
            return BOGUS
        value = (value << 6) | (octet & 0x3F)

    src.advance(length - 1)

    if length == 3 and value in ILLEGAL_SURROGATES:
        return BOGUS

    bounds = _VALID_RANGES.get(length)
    if bounds is None:
        # Five and six octet forms became illegal in RFC 3629.
        return BOGUS

    low, high = bounds
    if low <= value <= high:
        return value
    return BOGUS
