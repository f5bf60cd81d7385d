"""Case-fold lookup over the generated hash table."""

from __future__ import annotations

from ucvt.casefold._table import CASE_FOLD_BUCKETS

HASH_BUCKETS = 256

Folded = tuple[int, int, int]


def bucket_index(cp: int) -> int:
    """Return the hash bucket holding the fold mapping for ``cp``."""
    return (cp ^ (cp >> 8)) & 0xFF


def fold(cp: int) -> Folded:
    """Return the full case folding of a scalar as three components.

    Unused trailing components are 0. Scalars without a mapping fold to
    themselves, so the result is defined for every integer.

    Example:
        >>> fold(0x41)
        (97, 0, 0)
        >>> fold(0xDF)  # LATIN SMALL LETTER SHARP S
        (115, 115, 0)
    """
    for source, to0, to1, to2 in CASE_FOLD_BUCKETS[bucket_index(cp)]:
        if source == cp:
            return (to0, to1, to2)
    return (cp, 0, 0)


def fold_expansion(cp: int) -> tuple[int, ...]:
    """Return the folded scalars of ``cp`` without the trailing zeros."""
    to0, to1, to2 = fold(cp)
    if to2:
        return (to0, to1, to2)
    if to1:
        return (to0, to1)
    return (to0,)
