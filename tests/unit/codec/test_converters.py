"""Unit tests for the bulk UTF-8 converters."""

import logging
from array import array

import pytest

from ucvt.codec import (
    utf8_from_latin1,
    utf8_from_ucs2,
    utf8_from_ucs4,
    utf8_from_utf16,
    utf8_to_ucs2,
    utf8_to_ucs4,
    utf8_to_utf16,
)

SAMPLES = [
    "hello",
    "héllo wörld",
    "日本語テキスト",
    "mixed 😀 emoji \U0010fffd end",
]


def _utf16_units(text: str) -> list[int]:
    data = text.encode("utf-16-le")
    return [int.from_bytes(data[i : i + 2], "little") for i in range(0, len(data), 2)]


# =============================================================================
# UTF-8 to fixed width
# =============================================================================


class TestUtf8ToUcs4:
    """Tests for utf8_to_ucs4()."""

    def test_basic(self, ucs4_buffer) -> None:
        dst = ucs4_buffer(8)
        assert utf8_to_ucs4("hé😀".encode(), dst) == 3
        assert list(dst[:4]) == [0x68, 0xE9, 0x1F600, 0]

    def test_stops_at_embedded_zero(self, ucs4_buffer) -> None:
        dst = ucs4_buffer(8)
        assert utf8_to_ucs4(b"ab\x00cd", dst) == 2
        assert list(dst[:3]) == [0x61, 0x62, 0]

    def test_overlong_nul_is_one_replacement(self, ucs4_buffer) -> None:
        dst = ucs4_buffer(4)
        assert utf8_to_ucs4(b"\xc0\x80", dst) == 1
        assert list(dst[:2]) == [0x3F, 0]

    def test_truncated_sequence(self, ucs4_buffer) -> None:
        dst = ucs4_buffer(4)
        assert utf8_to_ucs4(b"\xe2", dst) == 1
        assert list(dst[:2]) == [0x3F, 0]

    def test_broken_sequence_resyncs(self, ucs4_buffer) -> None:
        dst = ucs4_buffer(8)
        assert utf8_to_ucs4(b"\xe2\x82A", dst) == 3
        assert list(dst[:4]) == [0x3F, 0x3F, 0x41, 0]

    def test_truncates_to_capacity(self, ucs4_buffer) -> None:
        dst = ucs4_buffer(10)
        assert utf8_to_ucs4(b"abcdef", dst, 4) == 3
        assert list(dst[:4]) == [0x61, 0x62, 0x63, 0]
        assert dst[4] == 0xAAAA

    def test_truncation_logs_position(
        self, ucs4_buffer, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="ucvt.codec.converters"):
            utf8_to_ucs4("aé€bc".encode(), ucs4_buffer(10), 4)

        (record,) = caplog.records
        assert record.converter == "utf8_to_ucs4"
        assert record.units_written == 3
        assert record.source_offset == 6

    def test_no_log_when_source_fits(
        self, ucs4_buffer, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="ucvt.codec.converters"):
            utf8_to_ucs4(b"abc", ucs4_buffer(10))
        assert caplog.records == []

    def test_capacity_one_writes_terminator_only(self, ucs4_buffer) -> None:
        dst = ucs4_buffer(4)
        assert utf8_to_ucs4(b"abc", dst, 1) == 0
        assert dst[0] == 0
        assert dst[1] == 0xAAAA

    def test_capacity_zero_writes_nothing(self, ucs4_buffer) -> None:
        dst = ucs4_buffer(4)
        assert utf8_to_ucs4(b"abc", dst, 0) == 0
        assert list(dst) == [0xAAAA] * 4

    def test_empty_destination(self) -> None:
        assert utf8_to_ucs4(b"abc", array("I")) == 0

    def test_negative_capacity_rejected(self, ucs4_buffer) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            utf8_to_ucs4(b"abc", ucs4_buffer(4), -1)

    def test_capacity_beyond_buffer_rejected(self, ucs4_buffer) -> None:
        with pytest.raises(ValueError, match="exceeds"):
            utf8_to_ucs4(b"abc", ucs4_buffer(4), 5)

    def test_accepts_list_destination(self) -> None:
        dst = [0] * 4
        assert utf8_to_ucs4(b"ok", dst) == 2
        assert dst == [0x6F, 0x6B, 0, 0]


class TestUtf8ToUcs2:
    """Tests for utf8_to_ucs2()."""

    def test_bmp(self, ucs2_buffer) -> None:
        dst = ucs2_buffer(8)
        assert utf8_to_ucs2("a€".encode(), dst) == 2
        assert list(dst[:3]) == [0x61, 0x20AC, 0]

    def test_astral_becomes_replacement(self, ucs2_buffer) -> None:
        dst = ucs2_buffer(8)
        assert utf8_to_ucs2("a😀b".encode(), dst) == 3
        assert list(dst[:4]) == [0x61, 0x3F, 0x62, 0]


class TestUtf8ToUtf16:
    """Tests for utf8_to_utf16()."""

    def test_surrogate_pair(self, ucs2_buffer) -> None:
        dst = ucs2_buffer(4)
        assert utf8_to_utf16("😀".encode(), dst) == 2
        assert list(dst[:3]) == [0xD83D, 0xDE00, 0]

    @pytest.mark.parametrize("text", SAMPLES)
    def test_matches_python_codec(self, text: str, ucs2_buffer) -> None:
        dst = ucs2_buffer(64)
        count = utf8_to_utf16(text.encode(), dst)
        assert list(dst[:count]) == _utf16_units(text)
        assert dst[count] == 0

    def test_no_room_for_pair(self, ucs2_buffer) -> None:
        dst = ucs2_buffer(4)
        assert utf8_to_utf16("a😀".encode(), dst, 3) == 1
        assert list(dst[:2]) == [0x61, 0]
        assert dst[2] == 0xAAAA

    def test_no_room_for_pair_logs_offset_of_pair(
        self, ucs2_buffer, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="ucvt.codec.converters"):
            utf8_to_utf16("a😀".encode(), ucs2_buffer(4), 3)

        (record,) = caplog.records
        assert record.converter == "utf8_to_utf16"
        assert record.units_written == 1
        assert record.source_offset == 1

    def test_pair_fits_exactly(self, ucs2_buffer) -> None:
        dst = ucs2_buffer(3)
        assert utf8_to_utf16("😀".encode(), dst) == 2
        assert list(dst) == [0xD83D, 0xDE00, 0]


# =============================================================================
# Fixed width to UTF-8
# =============================================================================


class TestUtf8FromUcs4:
    """Tests for utf8_from_ucs4()."""

    def test_basic(self, utf8_buffer) -> None:
        dst = utf8_buffer(16)
        count = utf8_from_ucs4(array("I", [0x68, 0xE9, 0x1F600]), dst)
        assert bytes(dst[:count]) == "hé😀".encode()
        assert dst[count] == 0

    def test_invalid_scalars_replaced(self, utf8_buffer) -> None:
        dst = utf8_buffer(16)
        count = utf8_from_ucs4([0x110000, 0xFFFE, 0xD800, 0xFFFFFFFF], dst)
        assert bytes(dst[:count]) == b"????"

    def test_multibyte_never_split(self, utf8_buffer) -> None:
        dst = utf8_buffer(3)
        assert utf8_from_ucs4([0x0800], dst, 2) == 0
        assert dst[0] == 0
        assert dst[1:] == b"\xaa\xaa"

    def test_stops_after_first_unfit_scalar(self, utf8_buffer) -> None:
        dst = utf8_buffer(8)
        assert utf8_from_ucs4([0x41, 0x0800, 0x42], dst, 3) == 1
        assert bytes(dst[:2]) == b"A\x00"

    @pytest.mark.parametrize("text", SAMPLES)
    def test_round_trip(self, text: str, ucs4_buffer, utf8_buffer) -> None:
        original = text.encode()
        wide = ucs4_buffer(len(original) + 1)
        count = utf8_to_ucs4(original, wide)
        back = utf8_buffer(4 * count + 1)
        written = utf8_from_ucs4(wide[:count], back)
        assert bytes(back[:written]) == original


class TestUtf8FromUcs2:
    """Tests for utf8_from_ucs2()."""

    def test_basic(self, utf8_buffer) -> None:
        dst = utf8_buffer(16)
        count = utf8_from_ucs2(array("H", [0x61, 0x20AC]), dst)
        assert bytes(dst[:count]) == "a€".encode()

    def test_units_masked_to_16_bits(self, utf8_buffer) -> None:
        dst = utf8_buffer(8)
        count = utf8_from_ucs2([0x10041], dst)
        assert bytes(dst[:count]) == b"A"


class TestUtf8FromUtf16:
    """Tests for utf8_from_utf16()."""

    def test_surrogate_pair_round_trip(self, ucs2_buffer, utf8_buffer) -> None:
        wide = ucs2_buffer(4)
        count = utf8_to_utf16("😀".encode(), wide)
        dst = utf8_buffer(8)
        written = utf8_from_utf16(wide[:count], dst)
        assert bytes(dst[:written]) == b"\xf0\x9f\x98\x80"

    @pytest.mark.parametrize("text", SAMPLES)
    def test_matches_python_codec(self, text: str, utf8_buffer) -> None:
        dst = utf8_buffer(64)
        count = utf8_from_utf16(_utf16_units(text), dst)
        assert bytes(dst[:count]) == text.encode()

    def test_orphan_low_surrogate(self, utf8_buffer) -> None:
        dst = utf8_buffer(8)
        count = utf8_from_utf16([0xDC00, 0x41], dst)
        assert bytes(dst[:count]) == b"?A"

    def test_high_surrogate_without_low(self, utf8_buffer) -> None:
        dst = utf8_buffer(8)
        count = utf8_from_utf16([0xD83D, 0x41], dst)
        assert bytes(dst[:count]) == b"?A"

    def test_high_surrogate_at_end(self, utf8_buffer) -> None:
        dst = utf8_buffer(8)
        count = utf8_from_utf16([0x41, 0xD83D], dst)
        assert bytes(dst[:count]) == b"A?"


class TestUtf8FromLatin1:
    """Tests for utf8_from_latin1()."""

    def test_basic(self, utf8_buffer) -> None:
        dst = utf8_buffer(16)
        count = utf8_from_latin1("café ÿ".encode("latin-1"), dst)
        assert bytes(dst[:count]) == "café ÿ".encode()

    def test_truncation_keeps_whole_characters(self, utf8_buffer) -> None:
        dst = utf8_buffer(8)
        assert utf8_from_latin1(b"a\xe9", dst, 3) == 1
        assert bytes(dst[:2]) == b"a\x00"
