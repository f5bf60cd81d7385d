"""UTF-8 codec package.

Codepoint-level decoder and encoder plus the bulk converters built on them.
Nothing here allocates destination storage or performs I/O; callers own every
buffer passed in.
"""

from ucvt.codec.converters import (
    utf8_from_latin1,
    utf8_from_ucs2,
    utf8_from_ucs4,
    utf8_from_utf16,
    utf8_to_ucs2,
    utf8_to_ucs4,
    utf8_to_utf16,
)
from ucvt.codec.decoder import decode_codepoint
from ucvt.codec.encoder import encode_codepoint
from ucvt.codec.types import (
    BOGUS,
    MAX_CODEPOINT,
    REPLACEMENT_CHAR,
    DecodeFailure,
    DestCursor,
    SourceCursor,
)

__all__ = [
    # types
    "BOGUS",
    "MAX_CODEPOINT",
    "REPLACEMENT_CHAR",
    "DecodeFailure",
    "DestCursor",
    "SourceCursor",
    # primitives
    "decode_codepoint",
    "encode_codepoint",
    # converters
    "utf8_to_ucs4",
    "utf8_to_ucs2",
    "utf8_to_utf16",
    "utf8_from_ucs4",
    "utf8_from_ucs2",
    "utf8_from_utf16",
    "utf8_from_latin1",
]
