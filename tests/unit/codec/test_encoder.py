"""Unit tests for the UTF-8 codepoint encoder."""

import pytest

from ucvt.codec.encoder import encode_codepoint, encoded_length, sanitize_scalar
from ucvt.codec.types import REPLACEMENT_CHAR, DestCursor


def _encode(cp: int, remaining: int = 8) -> tuple[bytes, int]:
    buf = bytearray(8)
    cursor = DestCursor(buf, remaining=remaining)
    encode_codepoint(cp, cursor)
    return bytes(buf[: cursor.pos]), cursor.remaining


class TestSanitizeScalar:
    """Tests for sanitize_scalar()."""

    @pytest.mark.parametrize(
        "cp", [0x110000, 0xFFFFFFFF, 0xFFFE, 0xFFFF, 0xD800, 0xDBFF, 0xDFFF]
    )
    def test_replaced(self, cp: int) -> None:
        assert sanitize_scalar(cp) == REPLACEMENT_CHAR

    @pytest.mark.parametrize("cp", [0x41, 0xFFFD, 0x10FFFF, 0xD801])
    def test_kept(self, cp: int) -> None:
        assert sanitize_scalar(cp) == cp


class TestEncodeCodepoint:
    """Tests for encode_codepoint()."""

    @pytest.mark.parametrize("char", ["A", "é", "€", "😀", "\U0010ffff"])
    def test_matches_python_codec(self, char: str) -> None:
        encoded, remaining = _encode(ord(char))
        assert encoded == char.encode("utf-8")
        assert remaining == 8 - len(encoded)
        assert encoded_length(ord(char)) == len(encoded)

    def test_out_of_range_becomes_question_mark(self) -> None:
        assert _encode(0x110000) == (b"?", 7)

    def test_noncharacter_becomes_question_mark(self) -> None:
        assert _encode(0xFFFE) == (b"?", 7)

    def test_unlisted_surrogate_is_encoded(self) -> None:
        assert _encode(0xD801)[0] == b"\xed\xa0\x81"

    def test_exact_fit(self) -> None:
        assert _encode(0x20AC, remaining=3) == ("€".encode(), 0)

    def test_insufficient_capacity_writes_nothing(self) -> None:
        buf = bytearray(b"\xaa" * 4)
        cursor = DestCursor(buf, remaining=2)
        encode_codepoint(0x0800, cursor)
        assert cursor.pos == 0
        assert cursor.remaining == 0
        assert buf == bytearray(b"\xaa" * 4)

    def test_exhausted_capacity_blocks_later_writes(self) -> None:
        buf = bytearray(4)
        cursor = DestCursor(buf, remaining=2)
        encode_codepoint(0x0800, cursor)
        encode_codepoint(0x41, cursor)
        assert cursor.pos == 0

    def test_zero_capacity_is_noop(self) -> None:
        assert _encode(0x41, remaining=0) == (b"", 0)
