"""Operations on raw byte buffers."""

from __future__ import annotations

from typing import Optional


def _require(buf, n: int) -> None:
    if n > len(buf):
        raise ValueError(f"buffer of {len(buf)} bytes is shorter than {n}")


def memchr(buf, c: int, n: int) -> Optional[int]:
    """Index of the first byte equal to c.

    The scan ends at the first zero byte regardless of n, and bytes with the
    high bit set compare as negative characters, so they never match.
    """
    target = c & 0xFF
    for index, byte in enumerate(bytes(buf)):
        if byte == 0:
            break
        if byte < 0x80 and byte == target:
            return index
    return None


def memcmp(a, b, n: int) -> int:
    """Compare n bytes as unsigned values; return the first difference."""
    if n <= 0:
        return 0
    _require(a, n)
    _require(b, n)
    for x, y in zip(bytes(a[:n]), bytes(b[:n])):
        if x != y:
            return x - y
    return 0


def memcpy(dst: bytearray, src, n: int) -> bytearray:
    """Copy n bytes of src to the start of dst."""
    if n <= 0:
        return dst
    _require(dst, n)
    _require(src, n)
    dst[:n] = bytes(src[:n])
    return dst


def memset(buf: bytearray, c: int, n: int) -> bytearray:
    """Fill the first n bytes of buf with c."""
    if n <= 0:
        return buf
    _require(buf, n)
    buf[:n] = bytes([c & 0xFF]) * n
    return buf


def bzero(buf: bytearray, n: int) -> None:
    """Zero the first n bytes of buf."""
    memset(buf, 0, n)