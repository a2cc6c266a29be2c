import pytest
from hypothesis import given, strategies as st

from kernlib.printf import cformat, doprnt, sprintf

INT32 = st.integers(min_value=-(2 ** 31) + 1, max_value=2 ** 31 - 1)
ANY32 = st.integers(min_value=-(2 ** 31), max_value=2 ** 31 - 1)
TEXT = st.text(alphabet=st.characters(min_codepoint=32, max_codepoint=126))


def test_plain_text_passes_through():
    assert cformat("hello world") == "hello world"


def test_percent_escape():
    assert cformat("100%%") == "100%"


def test_trailing_percent_is_echoed():
    assert cformat("abc%") == "abc%"


def test_unknown_conversion_echoes_letter():
    assert sprintf("%q") == "q"


def test_null_string():
    assert cformat("%s", None) == "(null)"


def test_char_conversion():
    assert cformat("[%c]", ord("A")) == "[A]"
    assert cformat("%c", "z") == "z"


def test_string_stops_at_nul():
    assert cformat("%s", "ab\0cd") == "ab"


def test_negative_zero_fill():
    assert cformat("%05d", -42) == "-0042"


def test_negative_space_fill():
    assert cformat("%5d", -42) == "  -42"


def test_star_width_from_arguments():
    result = cformat("%*d", 6, 7)
    assert len(result) == 6
    assert result.strip() == "7"


def test_precision_and_width_on_string():
    result = cformat("%5.2s", "hello")
    assert len(result) == 5
    assert result.endswith("he")
    assert result[:3].strip() == ""


def test_width_over_limit_is_ignored():
    assert cformat("%81d", 5) == "5"


def test_extended_word_pair_full_high_word():
    assert cformat("%H", 0x12345678, 0x9ABCDEF0) == "123456789ABCDEF0"


def test_extended_word_pair_short_high_word():
    assert cformat("%h", 0x1, 0xABC) == "1"


def test_plain_dialect_lacks_word_pair():
    assert sprintf("%H", 1, 2) == "H"


def test_missing_argument_raises():
    with pytest.raises(ValueError):
        cformat("%d")


def test_wrong_argument_type_raises():
    with pytest.raises(TypeError):
        cformat("%d", "seven")


def test_doprnt_emits_characters():
    seen = []
    doprnt("a%db", [3], seen.append, False)
    assert seen == ["a", "3", "b"]


@given(INT32)
def test_decimal_round_trip(n):
    assert int(cformat("%d", n)) == n


@given(ANY32)
def test_unsigned_round_trip(n):
    assert int(cformat("%u", n)) == n & 0xFFFFFFFF


@given(ANY32)
def test_octal_round_trip(n):
    assert int(cformat("%o", n), 8) == n & 0xFFFFFFFF


@given(ANY32)
def test_hex_round_trip(n):
    lower = cformat("%x", n)
    upper = cformat("%X", n)
    assert int(lower, 16) == n & 0xFFFFFFFF
    assert lower == upper.lower()
    assert lower == "0" or not lower.startswith("0")


@given(ANY32)
def test_binary_round_trip(n):
    assert int(cformat("%b", n), 2) == n & 0xFFFFFFFF


@given(INT32)
def test_right_justified_width(n):
    result = cformat("%12d", n)
    assert len(result) == max(12, len(str(n)))
    assert result.lstrip(" ") == str(n)


@given(INT32)
def test_left_justified_width(n):
    result = cformat("%-12d", n)
    assert len(result) == max(12, len(str(n)))
    assert result.rstrip(" ") == str(n)


@given(TEXT)
def test_precision_truncates(text):
    assert sprintf("%.3s", text) == text[:3]