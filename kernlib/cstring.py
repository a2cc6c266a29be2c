"""Operations on NUL-terminated byte strings.

Strings are bytes-like objects; a string ends at its first zero byte or at
the end of the object. Search functions return an index or None. Copying
functions write into a mutable buffer and raise ValueError if it is too small.
Bytes compare as signed characters.
"""

from __future__ import annotations

from itertools import islice, zip_longest
from typing import Optional, Union

CharLike = Union[int, str, bytes]


def _cstr(s) -> bytes:
    return bytes(s).partition(b"\0")[0]


def _char(c: CharLike) -> int:
    if isinstance(c, int):
        return c & 0xFF
    if isinstance(c, (str, bytes)) and len(c) == 1:
        return ord(c) & 0xFF
    raise TypeError(f"expected an int or a single character, got {c!r}")


def _signed(b: int) -> int:
    return b - 256 if b > 127 else b


def _store(target: bytearray, offset: int, data: bytes) -> bytearray:
    if offset + len(data) > len(target):
        raise ValueError("destination buffer too small")
    target[offset:offset + len(data)] = data
    return target


def strchr(s, c: CharLike) -> Optional[int]:
    """Index of the first occurrence of c; searching for 0 finds the terminator."""
    text = _cstr(s)
    code = _char(c)
    if code == 0:
        return len(text)
    index = text.find(bytes([code]))
    return None if index < 0 else index


def strrchr(s, c: CharLike) -> Optional[int]:
    """Index of the last occurrence of c; searching for 0 finds the terminator."""
    text = _cstr(s)
    code = _char(c)
    if code == 0:
        return len(text)
    index = text.rfind(bytes([code]))
    return None if index < 0 else index


def strstr(haystack, needle) -> Optional[int]:
    """Index of the first occurrence of needle; an empty needle is never found."""
    text = _cstr(haystack)
    pattern = _cstr(needle)
    if not pattern:
        return None
    index = text.find(pattern)
    return None if index < 0 else index


def strcmp(s1, s2) -> int:
    """Return -1, 0 or 1 as s1 sorts before, equal to or after s2."""
    for x, y in zip_longest(_cstr(s1), _cstr(s2), fillvalue=0):
        if x != y:
            return -1 if _signed(x) < _signed(y) else 1
    return 0


def strncmp(s1, s2, n: int) -> int:
    """Compare at most n characters; return the difference at the first mismatch."""
    pairs = zip_longest(_cstr(s1), _cstr(s2), fillvalue=0)
    for x, y in islice(pairs, max(n, 0)):
        if x != y:
            return _signed(x) - _signed(y)
    return 0


def strlen(s) -> int:
    return len(_cstr(s))


def strnlen(s, n: int) -> int:
    if n < 0:
        raise ValueError("length limit must not be negative")
    return min(len(_cstr(s)), n)


def strcpy(target: bytearray, source) -> bytearray:
    """Copy source and its terminator to the start of target."""
    return _store(target, 0, _cstr(source) + b"\0")


def strncpy(target: bytearray, source, n: int) -> bytearray:
    """Copy exactly n bytes: source truncated, or padded with zero bytes."""
    if n <= 0:
        return target
    data = _cstr(source)[:n]
    return _store(target, 0, data.ljust(n, b"\0"))


def strncat(s1: bytearray, s2, n: int) -> bytearray:
    """Append at most n characters of s2 to s1, then a terminator."""
    start = len(_cstr(s1))
    return _store(s1, start, _cstr(s2)[:max(n, 0)] + b"\0")