"""Formatted input with the kernel's small scanf dialect.

Conversions are %s (a blank-delimited word), %c (characters, one by
default), %[...] and %[^...] (a run of characters in or out of a set) and
the numeric conversions %d, %o, %x and others. The "*" flag suppresses
assignment, a decimal width limits the characters taken, "h" and "l" choose
a short or long result and an upper case conversion letter implies "l".

The numeric scanner's digit test admits only the letters a-f and A-F,
and only in base 16, so %x reads runs such as "ff" while %d and %o take
no digits. A leading minus sign alone still makes a %d conversion store 0.

Only space, tab and newline count as blanks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, FrozenSet, List, Optional, Protocol, Tuple

from kernlib.stdio import fgetc

_BLANKS = frozenset(" \t\n")
_HEX_LETTERS = frozenset("abcdefABCDEF")
_UNBOUNDED = 30000
_DIGITS = "0123456789"


class _Size(Enum):
    SHORT = "h"
    REGULAR = ""
    LONG = "l"


class _Source(Protocol):
    def getch(self) -> Optional[str]:
        ...

    def ungetch(self) -> None:
        ...


@dataclass
class ScanResult:
    """Outcome of a scan.

    count is the number of assigned conversions that stored a value, or -1
    when input ended before any did (or ended while matching a literal).
    values holds one entry per assigned conversion that was attempted, in
    format order; None marks one that stored nothing.
    """

    count: int
    values: List[Any] = field(default_factory=list)


class StringSource:
    """Characters of a string, up to its first NUL, with one-step pushback."""

    def __init__(self, text: str) -> None:
        self._text = text.partition("\0")[0]
        self._pos = 0

    def getch(self) -> Optional[str]:
        """Return the next character, or None at the end of the string."""
        if self._pos >= len(self._text):
            return None
        ch = self._text[self._pos]
        self._pos += 1
        return ch

    def ungetch(self) -> None:
        """Step back over the character last read."""
        if self._pos == 0:
            raise ValueError("nothing to push back")
        self._pos -= 1


class DeviceSource:
    """Characters read from a device, with a one-character pushback buffer."""

    def __init__(self, device) -> None:
        self._device = device
        self._last: Optional[str] = None
        self._pushed = False

    def getch(self) -> Optional[str]:
        """Return the next character, or None at end of input."""
        if self._pushed:
            self._pushed = False
            return self._last
        code = fgetc(self._device)
        self._last = None if code is None else chr(code)
        return self._last

    def ungetch(self) -> None:
        """Deliver the character last read once more."""
        if self._last is None:
            raise ValueError("nothing to push back")
        self._pushed = True


def _wrap(value: int, bits: int) -> int:
    half = 1 << (bits - 1)
    return (value + half) % (1 << bits) - half


def _takes_digit(c: Optional[str], base: int) -> bool:
    """The scanner's digit test: a hexadecimal letter, in base 16 only."""
    return c is not None and base == 16 and c in _HEX_LETTERS


class _Scanner:
    def __init__(self, source: _Source) -> None:
        self._source = source
        # Before any set is read, no character stops a %[ conversion.
        self._class: Tuple[bool, FrozenSet[str]] = (True, frozenset())

    def run(self, fmt: str) -> ScanResult:
        text = fmt.partition("\0")[0]

        def at(i: int) -> str:
            return text[i] if i < len(text) else ""

        source = self._source
        pos = 0
        nmatch = 0
        values: List[Any] = []
        while True:
            if pos >= len(text):
                return ScanResult(nmatch, values)
            ch = text[pos]
            pos += 1

            if ch == "%":
                ch = at(pos)
                pos += 1
                if ch != "%":
                    assign = True
                    if ch == "*":
                        assign = False
                        ch = at(pos)
                        pos += 1
                    width = 0
                    while ch and ch in _DIGITS:
                        width = width * 10 + int(ch)
                        ch = at(pos)
                        pos += 1
                    if width == 0:
                        width = _UNBOUNDED
                    size = _Size.REGULAR
                    if ch == "l":
                        ch = at(pos)
                        pos += 1
                        size = _Size.LONG
                    elif ch == "h":
                        size = _Size.SHORT
                        ch = at(pos)
                        pos += 1
                    elif ch == "[":
                        pos = self._read_class(text, pos)
                    if "A" <= ch <= "Z":
                        ch = ch.lower()
                        size = _Size.LONG
                    if not ch:
                        raise ValueError("format ends inside a conversion")

                    value, ended = self._convert(ch, width, size)
                    if assign:
                        values.append(value)
                        if value is not None:
                            nmatch += 1
                    if ended:
                        return ScanResult(nmatch if nmatch else -1, values)
                    continue
            elif ch in _BLANKS:
                ch1 = source.getch()
                while ch1 is not None and ch1 in _BLANKS:
                    ch1 = source.getch()
                if ch1 is not None:
                    source.ungetch()
                continue

            ch1 = source.getch()
            if ch1 != ch:
                if ch1 is None:
                    return ScanResult(-1, values)
                source.ungetch()
                return ScanResult(nmatch, values)

    def _read_class(self, text: str, pos: int) -> int:
        negated = pos < len(text) and text[pos] == "^"
        if negated:
            pos += 1
        listed = set()
        while pos < len(text):
            c = text[pos]
            pos += 1
            if ord(c) & 0x7F == ord("]"):
                break
            listed.add(c)
        self._class = (negated, frozenset(listed))
        return pos

    def _class_stops(self, ch: str) -> bool:
        if ord(ch) >= 128:
            return False
        negated, listed = self._class
        return (ch in listed) if negated else (ch not in listed)

    def _stops(self, kind: str, ch: str) -> bool:
        """Whether ch ends a string conversion of the given kind."""
        if kind == "[":
            return self._class_stops(ch)
        if kind == "s":
            return ch in _BLANKS
        return False

    def _convert(self, kind: str, width: int, size: _Size) -> Tuple[Any, bool]:
        if kind in "cs[":
            return self._string(kind, width)
        return self._number(kind, width, size)

    def _number(self, kind: str, width: int, size: _Size) -> Tuple[Optional[int], bool]:
        source = self._source
        base = 8 if kind == "o" else 16 if kind == "x" else 10
        c = source.getch()
        while c is not None and c in _BLANKS:
            c = source.getch()

        seen = False
        negative = False
        if c == "-":
            negative = True
            seen = True
            c = source.getch()
            width -= 1
        elif c == "+":
            width -= 1
            c = source.getch()

        value = 0
        while True:
            width -= 1
            if width < 0 or not _takes_digit(c, base):
                break
            value = value * base + int(c, 16)
            seen = True
            c = source.getch()

        if negative:
            value = -value
        ended = c is None
        if not ended:
            source.ungetch()
        if not seen:
            return None, ended
        bits = 16 if size is _Size.SHORT else 32
        return _wrap(value, bits), ended

    def _string(self, kind: str, width: int) -> Tuple[Optional[str], bool]:
        source = self._source
        if kind == "c" and width == _UNBOUNDED:
            width = 1
        ch = source.getch()
        if kind == "s":
            while ch is not None and ch in _BLANKS:
                ch = source.getch()

        chars: List[str] = []
        while ch is not None and not self._stops(kind, ch):
            chars.append(ch)
            width -= 1
            if width <= 0:
                break
            ch = source.getch()

        ended = ch is None
        if not ended and width > 0:
            source.ungetch()
        return ("".join(chars) or None), ended


def doscan(fmt: str, source: _Source) -> ScanResult:
    """Scan characters from source according to fmt."""
    return _Scanner(source).run(fmt)


def sscanf(text: str, fmt: str) -> ScanResult:
    """Scan a string according to fmt."""
    return doscan(fmt, StringSource(text))


def fscanf(device, fmt: str) -> ScanResult:
    """Scan characters read from device according to fmt."""
    return doscan(fmt, DeviceSource(device))