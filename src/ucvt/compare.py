"""Locale-independent case-insensitive string comparison.

Two families of comparators, all returning -1, 0 or 1:

- ``utf8_compare_ci`` / ``utf8_compare_ci_n`` decode UTF-8 codepoint by
  codepoint and compare the streams of full case foldings, so a character
  that folds to several scalars matches its spelled-out form
  ("STRASSE" equals "straße").
- ``ascii_compare_ci`` / ``ascii_compare_ci_n`` only fold A-Z and never
  decode. Use them for tokens already known to be ASCII.

Strings are bytes-like objects terminated by a zero byte or by their end.
Malformed UTF-8 never raises: an undecodable sequence compares equal to
another undecodable sequence and greater than any valid codepoint.
"""

from __future__ import annotations

from collections.abc import Sequence

from ucvt.casefold.lookup import fold_expansion
from ucvt.codec.decoder import decode_codepoint
from ucvt.codec.types import BOGUS, Decoded, SourceCursor


def _folded(cp: Decoded) -> tuple[Decoded, ...]:
    if cp is BOGUS or cp == 0:
        return (cp,)
    return fold_expansion(cp)


def _compare_units(unit1: Decoded, unit2: Decoded) -> int:
    if unit1 == unit2:
        return 0
    if unit1 is BOGUS:
        return 1
    if unit2 is BOGUS:
        return -1
    return -1 if unit1 < unit2 else 1


def _compare_expansions(
    reader1: SourceCursor,
    reader2: SourceCursor,
    pending1: tuple[Decoded, ...],
    pending2: tuple[Decoded, ...],
) -> int:
    """Compare folded scalars until both expansions run out on the same scalar.

    A shorter expansion is topped up by decoding the next codepoint from its
    own string, so "ß" lines up against "ss".
    """
    while True:
        if not pending1:
            pending1 = _folded(decode_codepoint(reader1))
        if not pending2:
            pending2 = _folded(decode_codepoint(reader2))

        rc = _compare_units(pending1[0], pending2[0])
        if rc != 0:
            return rc
        pending1 = pending1[1:]
        pending2 = pending2[1:]
        if not pending1 and not pending2:
            return 0


def utf8_compare_ci(str1: Sequence[int], str2: Sequence[int]) -> int:
    """Compare two UTF-8 strings ignoring case.

    Args:
        str1: First UTF-8 string.
        str2: Second UTF-8 string.

    Returns:
        -1, 0 or 1 as str1 sorts before, equal to or after str2.

    Example:
        >>> utf8_compare_ci(b"ABC", b"abc")
        0
        >>> utf8_compare_ci("Stra\\u00dfe".encode(), b"STRASSE")
        0
    """
    return utf8_compare_ci_n(str1, str2, None)


def utf8_compare_ci_n(
    str1: Sequence[int], str2: Sequence[int], n: int | None
) -> int:
    """Compare at most ``n`` codepoint pairs of two UTF-8 strings.

    Strings that match for ``n`` pairs compare equal even if they go on to
    differ. When folding lines one codepoint up against several (as with
    "\u00df" and "ss"), the whole aligned group counts as one pair.
    ``n=None`` compares up to the terminators.

    Args:
        str1: First UTF-8 string.
        str2: Second UTF-8 string.
        n: Maximum number of codepoint pairs to compare.

    Returns:
        -1, 0 or 1.
    """
    reader1 = SourceCursor(str1)
    reader2 = SourceCursor(str2)
    remaining = n

    while remaining is None or remaining > 0:
        cp1 = decode_codepoint(reader1)
        cp2 = decode_codepoint(reader2)
        if cp1 == cp2:
            # Identical codepoints fold identically.
            if cp1 == 0:
                return 0
        else:
            rc = _compare_expansions(reader1, reader2, _folded(cp1), _folded(cp2))
            if rc != 0:
                return rc
        if remaining is not None:
            remaining -= 1

    return 0


def _ascii_fold(ch: int) -> int:
    if 0x41 <= ch <= 0x5A:  # A-Z
        return ch + 32
    return ch


def ascii_compare_ci(str1: Sequence[int], str2: Sequence[int]) -> int:
    """Compare two byte strings, folding only ASCII A-Z.

    Bytes compare as unsigned values. Non-ASCII letters are not folded.

    Example:
        >>> ascii_compare_ci(b"Content-Type", b"content-type")
        0
    """
    return ascii_compare_ci_n(str1, str2, None)


def ascii_compare_ci_n(
    str1: Sequence[int], str2: Sequence[int], n: int | None
) -> int:
    """Compare at most ``n`` bytes of two strings, folding only ASCII A-Z."""
    reader1 = SourceCursor(str1)
    reader2 = SourceCursor(str2)
    remaining = n

    while remaining is None or remaining > 0:
        ch1 = _ascii_fold(reader1.take())
        ch2 = _ascii_fold(reader2.take())
        if ch1 < ch2:
            return -1
        if ch1 > ch2:
            return 1
        if ch1 == 0:
            return 0
        if remaining is not None:
            remaining -= 1

    return 0
