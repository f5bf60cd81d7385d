"""ucvt - UTF-8 conversion and case-insensitive comparison.

Bounded converters between UTF-8 and UCS-4, UCS-2, UTF-16 and Latin-1 that
write into caller-owned buffers, full Unicode case folding, and
case-insensitive comparators over UTF-8 and ASCII byte strings.
"""

from ucvt.casefold import fold
from ucvt.codec import (
    BOGUS,
    REPLACEMENT_CHAR,
    DecodeFailure,
    decode_codepoint,
    encode_codepoint,
    utf8_from_latin1,
    utf8_from_ucs2,
    utf8_from_ucs4,
    utf8_from_utf16,
    utf8_to_ucs2,
    utf8_to_ucs4,
    utf8_to_utf16,
)
from ucvt.compare import (
    ascii_compare_ci,
    ascii_compare_ci_n,
    utf8_compare_ci,
    utf8_compare_ci_n,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # codec
    "BOGUS",
    "REPLACEMENT_CHAR",
    "DecodeFailure",
    "decode_codepoint",
    "encode_codepoint",
    "utf8_to_ucs4",
    "utf8_to_ucs2",
    "utf8_to_utf16",
    "utf8_from_ucs4",
    "utf8_from_ucs2",
    "utf8_from_utf16",
    "utf8_from_latin1",
    # case folding
    "fold",
    # comparison
    "utf8_compare_ci",
    "utf8_compare_ci_n",
    "ascii_compare_ci",
    "ascii_compare_ci_n",
]
