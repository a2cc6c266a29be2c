"""Character classification and case mapping over a 7-bit ASCII table."""

from __future__ import annotations

from typing import Union

Char = Union[int, str, bytes]

_U = 0x01  # upper case letter
_L = 0x02  # lower case letter
_N = 0x04  # decimal digit
_S = 0x08  # white space
_P = 0x10  # punctuation
_C = 0x20  # control character
_X = 0x40  # hexadecimal letter

_SPANS = (
    (0, 31, _C),
    (9, 13, _S),
    (32, 32, _S),
    (33, 47, _P),
    (48, 57, _N),
    (58, 64, _P),
    (65, 70, _U | _X),
    (71, 90, _U),
    (91, 96, _P),
    (97, 102, _L | _X),
    (103, 122, _L),
    (123, 126, _P),
    (127, 127, _C),
)


def _build_table() -> bytes:
    table = bytearray(128)
    for low, high, flags in _SPANS:
        table[low:high + 1] = bytes([flags]) * (high - low + 1)
    return bytes(table)


_TABLE = _build_table()


def _code(c: Char) -> int:
    """Return the integer code of an int or a one-character str/bytes."""
    if isinstance(c, int):
        return c
    if isinstance(c, (str, bytes)) and len(c) == 1:
        return ord(c)
    raise TypeError(f"expected an int or a single character, got {c!r}")


def _flags(c: Char) -> int:
    code = _code(c)
    if code == -1:
        return 0
    if not 0 <= code < 128:
        raise ValueError(f"character code {code} is outside the table")
    return _TABLE[code]


def _like(original: Char, code: int) -> Char:
    """Return code in the same form as the original argument."""
    if isinstance(original, str):
        return chr(code)
    if isinstance(original, bytes):
        return bytes([code])
    return code


def isalpha(c: Char) -> bool:
    return bool(_flags(c) & (_U | _L))


def isupper(c: Char) -> bool:
    return bool(_flags(c) & _U)


def islower(c: Char) -> bool:
    return bool(_flags(c) & _L)


def isdigit(c: Char) -> bool:
    return bool(_flags(c) & _N)


def isxdigit(c: Char) -> bool:
    return bool(_flags(c) & (_N | _X))


def isspace(c: Char) -> bool:
    return bool(_flags(c) & _S)


def ispunct(c: Char) -> bool:
    return bool(_flags(c) & _P)


def isalnum(c: Char) -> bool:
    return bool(_flags(c) & (_U | _L | _N))


def isprint(c: Char) -> bool:
    """True for letters, digits, punctuation and white space."""
    return bool(_flags(c) & (_P | _U | _L | _N | _S))


def iscntrl(c: Char) -> bool:
    return bool(_flags(c) & _C)


def isascii(c: Char) -> bool:
    """True when the code, taken as unsigned, is at most 0x7F."""
    return 0 <= _code(c) <= 0x7F


def toupper(c: Char) -> Char:
    """Shift a lower case letter to upper case; the shift is unconditional."""
    return _like(c, _code(c) - ord("a") + ord("A"))


def tolower(c: Char) -> Char:
    """Shift an upper case letter to lower case; the shift is unconditional."""
    return _like(c, _code(c) - ord("A") + ord("a"))


def toascii(c: Char) -> Char:
    return _like(c, _code(c) & 0x7F)


def iseof(c: Char) -> bool:
    """True for the end-of-file character, control-D."""
    return _code(c) == 0x04