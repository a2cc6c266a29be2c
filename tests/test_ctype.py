import string

import pytest

from kernlib import ctype

ASCII = range(128)


@pytest.mark.parametrize("code", ASCII)
def test_alpha_digit_case_match_ascii(code):
    ch = chr(code)
    assert ctype.isalpha(code) == ch.isalpha()
    assert ctype.isdigit(code) == ch.isdigit()
    assert ctype.isupper(code) == ch.isupper()
    assert ctype.islower(code) == ch.islower()


@pytest.mark.parametrize("code", ASCII)
def test_table_classes(code):
    ch = chr(code)
    assert ctype.isxdigit(ch) == (ch in string.hexdigits)
    assert ctype.ispunct(ch) == (ch in string.punctuation)
    assert ctype.isprint(ch) == (ch in string.printable)
    assert ctype.isspace(ch) == (ch in " \t\n\r\x0b\x0c")
    assert ctype.iscntrl(ch) == ((code < 32 or code == 127) and not 9 <= code <= 13)


@pytest.mark.parametrize("code", ASCII)
def test_isalnum_is_alpha_or_digit(code):
    assert ctype.isalnum(code) == (ctype.isalpha(code) or ctype.isdigit(code))


def test_minus_one_has_no_class():
    assert not any(
        f(-1)
        for f in (ctype.isalpha, ctype.isdigit, ctype.isspace, ctype.isprint, ctype.iscntrl)
    )


@pytest.mark.parametrize("bad", [128, 255, -2])
def test_out_of_table_raises(bad):
    with pytest.raises(ValueError):
        ctype.isalpha(bad)


def test_bad_type_raises():
    with pytest.raises(TypeError):
        ctype.isdigit("ab")


def test_isascii_bounds():
    assert ctype.isascii(127) is True
    assert ctype.isascii(128) is False
    assert ctype.isascii(-1) is False


@pytest.mark.parametrize("letter", string.ascii_lowercase)
def test_toupper_tolower_round_trip(letter):
    upper = ctype.toupper(letter)
    assert upper == letter.upper()
    assert ctype.tolower(upper) == letter


def test_case_mapping_keeps_type():
    assert ctype.toupper(ord("q")) == ord("Q")
    assert ctype.tolower(b"Z") == b"z"


def test_toupper_shift_is_unconditional():
    assert ctype.toupper("A") == "!"


def test_toascii_strips_high_bit():
    assert ctype.toascii(ord("A") | 0x80) == ord("A")
    assert ctype.toascii("k") == "k"


def test_iseof():
    assert ctype.iseof("\x04") is True
    assert ctype.iseof(4) is True
    assert ctype.iseof("d") is False