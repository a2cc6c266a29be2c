"""Integer parsing, absolute values, a linear congruential generator and quicksort."""

from __future__ import annotations

import re
from typing import Any, Callable, MutableSequence

INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1

_NUMBER = re.compile(r"[ \t]*([+-]?)([0-9]*)")


def _wrap32(value: int) -> int:
    return (value - INT_MIN) % 2 ** 32 + INT_MIN


def atoi(text: str) -> int:
    """Parse a leading decimal integer; blanks and tabs may precede the sign.

    Parsing stops at the first non-digit; the result wraps to 32 bits.
    """
    match = _NUMBER.match(text)
    sign, digits = match.group(1), match.group(2)
    value = int(digits) if digits else 0
    return _wrap32(-value if sign == "-" else value)


def atol(text: str) -> int:
    """Parse a leading decimal long integer (32 bits wide)."""
    return atoi(text)


def iabs(value: int) -> int:
    """Absolute value of a 32-bit integer; the most negative value maps to itself."""
    if not INT_MIN <= value <= INT_MAX:
        raise OverflowError(f"{value} does not fit in 32 bits")
    return _wrap32(-value) if value < 0 else value


def labs(value: int) -> int:
    """Absolute value of a 32-bit long integer."""
    return iabs(value)


class LinearCongruential:
    """The classic generator: 32-bit state, 15-bit results."""

    def __init__(self, seed: int = 1) -> None:
        self._state = seed & 0xFFFFFFFF

    def seed(self, x: int) -> None:
        self._state = x & 0xFFFFFFFF

    def next(self) -> int:
        self._state = (self._state * 1103515245 + 12345) & 0xFFFFFFFF
        return (self._state >> 16) & 0x7FFF


_default = LinearCongruential()


def srand(seed: int) -> None:
    """Seed the shared generator."""
    _default.seed(seed)


def rand() -> int:
    """Next value, 0 to 32767, from the shared generator."""
    return _default.next()


Compare = Callable[[Any, Any], int]


def qsort(items: MutableSequence, compare: Compare) -> None:
    """Sort items in place; compare returns a negative, zero or positive int."""
    _qs1(items, compare, 0, len(items))


def _swap(items: MutableSequence, i: int, j: int) -> None:
    items[i], items[j] = items[j], items[i]


def _rotate(items: MutableSequence, i: int, j: int, k: int) -> None:
    items[i], items[k], items[j] = items[k], items[j], items[i]


def _qs1(items: MutableSequence, compare: Compare, a: int, l: int) -> None:
    while l - a > 1:
        lp = hp = a + (l - a) // 2
        i = a
        j = l - 1
        while True:
            if i < lp:
                c = compare(items[i], items[lp])
                if c == 0:
                    lp -= 1
                    _swap(items, i, lp)
                    continue
                if c < 0:
                    i += 1
                    continue

            exchanged = False
            while j > hp:
                c = compare(items[hp], items[j])
                if c == 0:
                    hp += 1
                    _swap(items, hp, j)
                elif c > 0:
                    if i == lp:
                        hp += 1
                        _rotate(items, i, hp, j)
                        lp += 1
                        i = lp
                    else:
                        _swap(items, i, j)
                        j -= 1
                        i += 1
                        exchanged = True
                        break
                else:
                    j -= 1
            if exchanged:
                continue

            if i == lp:
                if lp - a >= l - hp:
                    _qs1(items, compare, hp + 1, l)
                    l = lp
                else:
                    _qs1(items, compare, a, lp)
                    a = hp + 1
                break

            lp -= 1
            _rotate(items, j, lp, i)
            hp -= 1
            j = hp