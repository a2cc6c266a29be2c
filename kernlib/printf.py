"""Formatted output with the kernel's small printf dialect.

Supported conversions are %c, %s, %d, %u, %o, %x, %X and %b, with the
flags "-" (left justify) and "0" (zero fill), a minimum width and a
maximum string width, either of which may be "*" to take it from the
arguments. Integers are treated as 32-bit values. The extended dialect
also knows %H and %h, which print a pair of words in hexadecimal.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator

MAXSTR = 80

_MASK = 0xFFFFFFFF
_LOWER_HEX = "0123456789abcdef"
_UPPER_HEX = "0123456789ABCDEF"


def _signed32(value: int) -> int:
    value &= _MASK
    return value - (1 << 32) if value & 0x80000000 else value


def _int_arg(value: Any) -> int:
    if not isinstance(value, int):
        raise TypeError(f"expected an integer argument, got {value!r}")
    return _signed32(value)


def _trim(digits: list[str]) -> str:
    """Join least-significant-first digits and drop leading zeros."""
    return "".join(reversed(digits)).lstrip("0") or "0"


def _decimal(num: int) -> str:
    """Ten decimal digits with truncating division, as a 32-bit machine does."""
    digits = []
    for _ in range(10):
        quotient, remainder = divmod(abs(num), 10)
        if num < 0:
            quotient, remainder = -quotient, -remainder
        digits.append(chr(ord("0") + remainder))
        num = quotient
    return _trim(digits)


def _octal(num: int) -> str:
    digits = []
    for _ in range(11):
        digits.append(chr(ord("0") + (num & 0o7)))
        num >>= 3
    digits[-1] = chr(ord(digits[-1]) & ord("3"))
    return _trim(digits)


def _hex(num: int, alphabet: str) -> str:
    digits = []
    for _ in range(8):
        digits.append(alphabet[num & 0x0F])
        num >>= 4
    return _trim(digits)


def _binary(num: int) -> str:
    digits = []
    for _ in range(32):
        digits.append("1" if num & 1 else "0")
        num >>= 1
    return _trim(digits)


def _unsigned(num: int) -> str:
    carry = 0
    while num < 0:
        num = _signed32(num - 1000000000)
        carry += 1
    text = _decimal(num)
    return chr(ord(text[0]) + carry) + text[1:]


def _word_pair(first: int, second: int, alphabet: str) -> str:
    """Two words laid out eight places apart; the second shows only when
    the first fills all eight places."""
    high = _hex(first, alphabet)
    if len(high) < 8:
        return high
    return high + _hex(second, alphabet)


def _char_text(value: Any) -> str:
    if isinstance(value, (str, bytes)) and len(value) == 1:
        code = ord(value)
    elif isinstance(value, int):
        code = value
    else:
        raise TypeError(f"expected a character argument, got {value!r}")
    code &= 0xFF
    return chr(code) if code else ""


def _string_text(value: Any) -> str:
    if value is None:
        return "(null)"
    if isinstance(value, (bytes, bytearray)):
        value = bytes(value).decode("latin-1")
    if not isinstance(value, str):
        raise TypeError(f"expected a string argument, got {value!r}")
    return value.partition("\0")[0]


class _Cursor:
    """Reads a format string one character at a time."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def peek(self) -> str:
        return self._text[self._pos] if self._pos < len(self._text) else ""

    def next(self) -> str:
        ch = self.peek()
        if ch:
            self._pos += 1
        return ch

    def accept(self, ch: str) -> bool:
        if self.peek() == ch:
            self._pos += 1
            return True
        return False

    def number(self) -> int:
        value = 0
        while "0" <= self.peek() <= "9" and self.peek():
            value = value * 10 + ord(self.next()) - ord("0")
        return value


def doprnt(
    fmt: str,
    args: Iterable[Any],
    emit: Callable[[str], Any],
    extended: bool = True,
) -> None:
    """Format args according to fmt, passing each output character to emit."""
    values: Iterator[Any] = iter(args)

    def take() -> Any:
        try:
            return next(values)
        except StopIteration:
            raise ValueError("not enough arguments for format") from None

    cursor = _Cursor(fmt.partition("\0")[0])
    while True:
        ch = cursor.next()
        if not ch:
            return
        if ch != "%":
            emit(ch)
            continue
        if cursor.peek() == "%":
            emit(cursor.next())
            continue

        leftjust = cursor.accept("-")
        fill = "0" if cursor.accept("0") else " "
        fmin = _int_arg(take()) if cursor.accept("*") else cursor.number()
        fmax = 0
        if cursor.accept("."):
            fmax = _int_arg(take()) if cursor.accept("*") else cursor.number()

        conversion = cursor.next()
        if not conversion:
            emit("%")
            return

        sign = ""
        text = ""
        if conversion == "c":
            text = _char_text(take())
            fmax = 0
            fill = " "
        elif conversion == "s":
            text = _string_text(take())
            fill = " "
        elif conversion == "d":
            num = _int_arg(take())
            if num < 0:
                sign = "-"
                num = _signed32(-num)
            text = _decimal(num)
        elif conversion == "u":
            text = _unsigned(_int_arg(take()))
            fmax = 0
        elif conversion == "o":
            text = _octal(_int_arg(take()))
            fmax = 0
        elif conversion == "X":
            text = _hex(_int_arg(take()), _UPPER_HEX)
            fmax = 0
        elif conversion == "x":
            text = _hex(_int_arg(take()), _LOWER_HEX)
            fmax = 0
        elif extended and conversion in "Hh":
            alphabet = _UPPER_HEX if conversion == "H" else _LOWER_HEX
            first = _int_arg(take())
            second = _int_arg(take())
            text = _word_pair(first, second, alphabet)
            fmax = 0
        elif conversion == "b":
            text = _binary(_int_arg(take()))
            fmax = 0
        else:
            emit(conversion)

        length = len(text)
        if not 0 <= fmin <= MAXSTR:
            fmin = 0
        if not 0 <= fmax <= MAXSTR:
            fmax = 0
        leading = 0
        if fmax or fmin:
            if fmax and length > fmax:
                length = fmax
            if fmin:
                leading = fmin - length
            if sign:
                leading -= 1

        if sign and fill == "0":
            emit(sign)
        if not leftjust:
            for _ in range(leading):
                emit(fill)
        if sign and fill == " ":
            emit(sign)
        for out in text[:length]:
            emit(out)
        if leftjust:
            for _ in range(leading):
                emit(fill)


def cformat(fmt: str, *args: Any) -> str:
    """Format with the extended dialect and return the result."""
    parts: list[str] = []
    doprnt(fmt, args, parts.append, extended=True)
    return "".join(parts)


def sprintf(fmt: str, *args: Any) -> str:
    """Format with the plain dialect and return the result."""
    parts: list[str] = []
    doprnt(fmt, args, parts.append, extended=False)
    return "".join(parts)