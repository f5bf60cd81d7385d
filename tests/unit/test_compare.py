"""Unit tests for case-insensitive comparison."""

import pytest

from ucvt.compare import (
    ascii_compare_ci,
    ascii_compare_ci_n,
    utf8_compare_ci,
    utf8_compare_ci_n,
)


def _u(text: str) -> bytes:
    return text.encode("utf-8")


# =============================================================================
# Unicode comparator
# =============================================================================


class TestUtf8CompareCi:
    """Tests for utf8_compare_ci()."""

    @pytest.mark.parametrize(
        "a,b",
        [
            ("ABC", "abc"),
            ("", ""),
            ("Straße", "STRASSE"),
            ("ẞ", "ss"),
            ("ﬃ", "FFI"),
            ("İ", "i̇"),
            ("ΣΑΣ", "σας"),
            ("Ångström", "ÅNGSTRÖM"),
            ("ДОБРЫЙ", "добрый"),
            ("𐐀", "𐐨"),
        ],
    )
    def test_equal(self, a: str, b: str) -> None:
        assert utf8_compare_ci(_u(a), _u(b)) == 0
        assert utf8_compare_ci(_u(b), _u(a)) == 0

    def test_less(self) -> None:
        assert utf8_compare_ci(b"apple", b"Banana") == -1

    def test_greater(self) -> None:
        assert utf8_compare_ci(b"Banana", b"apple") == 1

    def test_prefix_sorts_first(self) -> None:
        assert utf8_compare_ci(b"ab", b"ABC") == -1
        assert utf8_compare_ci(b"abc", b"AB") == 1

    def test_expansion_against_shorter_string(self) -> None:
        assert utf8_compare_ci(_u("ß"), b"s") == 1
        assert utf8_compare_ci(b"s", _u("ß")) == -1

    def test_expansion_mismatch(self) -> None:
        assert utf8_compare_ci(_u("ß"), b"st") == -1

    def test_stops_at_embedded_zero(self) -> None:
        assert utf8_compare_ci(b"abc\x00x", b"ABC\x00y") == 0

    def test_malformed_sorts_after_valid(self) -> None:
        assert utf8_compare_ci(b"\xff", _u("\U0010ffff")) == 1
        assert utf8_compare_ci(b"a", b"\x80") == -1

    def test_malformed_equal_to_malformed(self) -> None:
        assert utf8_compare_ci(b"a\xffb", b"A\xfeB") == 0

    def test_accepts_bytearray_and_lists(self) -> None:
        assert utf8_compare_ci(bytearray(b"ABC"), [0x61, 0x62, 0x63]) == 0


class TestUtf8CompareCiN:
    """Tests for utf8_compare_ci_n()."""

    def test_equal_up_to_n(self) -> None:
        assert utf8_compare_ci_n(b"abcX", b"ABCy", 3) == 0

    def test_difference_within_n(self) -> None:
        assert utf8_compare_ci_n(b"abcX", b"ABCy", 4) == -1

    def test_zero_is_equal(self) -> None:
        assert utf8_compare_ci_n(b"a", b"b", 0) == 0

    def test_n_beyond_length(self) -> None:
        assert utf8_compare_ci_n(b"abc", b"ABC", 100) == 0
        assert utf8_compare_ci_n(b"abc", b"ABD", 100) == -1

    def test_n_counts_codepoint_pairs(self) -> None:
        # identical "ß" on both sides is one pair, not two folded scalars
        assert utf8_compare_ci_n(_u("ßX"), _u("ßY"), 2) == -1
        assert utf8_compare_ci_n(_u("ßX"), _u("ßY"), 1) == 0

    def test_expansion_group_is_one_pair(self) -> None:
        assert utf8_compare_ci_n(_u("ß"), b"ss", 1) == 0
        assert utf8_compare_ci_n(_u("ß"), b"st", 1) == -1
        assert utf8_compare_ci_n(_u("aßX"), b"assY", 2) == 0
        assert utf8_compare_ci_n(_u("aßX"), b"assY", 3) == -1

    def test_none_is_unbounded(self) -> None:
        assert utf8_compare_ci_n(b"abcX", b"ABCy", None) == -1


# =============================================================================
# ASCII comparator
# =============================================================================


class TestAsciiCompareCi:
    """Tests for ascii_compare_ci()."""

    def test_equal(self) -> None:
        assert ascii_compare_ci(b"ABC", b"abc") == 0
        assert ascii_compare_ci(b"Content-Type", b"CONTENT-type") == 0

    def test_empty(self) -> None:
        assert ascii_compare_ci(b"", b"") == 0
        assert ascii_compare_ci(b"", b"a") == -1

    def test_order(self) -> None:
        assert ascii_compare_ci(b"apple", b"Banana") == -1
        assert ascii_compare_ci(b"zed", b"ZEBRA") == 1

    def test_only_letters_are_folded(self) -> None:
        # '[' sits between 'Z' and 'a'
        assert ascii_compare_ci(b"[", b"A") == -1
        assert ascii_compare_ci(b"@", b"`") == -1

    def test_non_ascii_not_folded(self) -> None:
        assert ascii_compare_ci(_u("É"), _u("é")) == -1
        assert utf8_compare_ci(_u("É"), _u("é")) == 0

    def test_bytes_compare_unsigned(self) -> None:
        assert ascii_compare_ci(b"\xe9", b"a") == 1
        assert ascii_compare_ci(b"a", b"\x80") == -1

    def test_stops_at_embedded_zero(self) -> None:
        assert ascii_compare_ci(b"ab\x00c", b"AB\x00d") == 0


class TestAsciiCompareCiN:
    """Tests for ascii_compare_ci_n()."""

    def test_equal_up_to_n(self) -> None:
        assert ascii_compare_ci_n(b"abcd", b"ABCE", 3) == 0

    def test_difference_within_n(self) -> None:
        assert ascii_compare_ci_n(b"abcd", b"ABCE", 4) == -1

    def test_zero_is_equal(self) -> None:
        assert ascii_compare_ci_n(b"a", b"b", 0) == 0

    def test_shorter_string(self) -> None:
        assert ascii_compare_ci_n(b"ab", b"abc", 5) == -1
