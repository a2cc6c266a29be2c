"""Character and line input and output on devices.

A device is any object with getc(), returning a character code or None at
end of input, and putc(ch), raising DeviceError when it cannot write.
The standard device reads sys.stdin and writes sys.stdout.
"""

from __future__ import annotations

import sys
from typing import Any, Optional, TextIO, Union

from kernlib.printf import doprnt


class DeviceError(OSError):
    """A device could not carry out a read or a write."""


class StreamDevice:
    """A device over text streams; None selects the process's standard stream."""

    def __init__(
        self, source: Optional[TextIO] = None, sink: Optional[TextIO] = None
    ) -> None:
        self._source = source
        self._sink = sink

    @property
    def source(self) -> TextIO:
        return self._source if self._source is not None else sys.stdin

    @property
    def sink(self) -> TextIO:
        return self._sink if self._sink is not None else sys.stdout

    def getc(self) -> Optional[int]:
        """Return the next character code, or None at end of input."""
        try:
            ch = self.source.read(1)
        except (OSError, ValueError) as exc:
            raise DeviceError(f"read failed: {exc}") from exc
        if not ch:
            return None
        return ch[0] if isinstance(ch, bytes) else ord(ch)

    def putc(self, ch: Union[int, str]) -> None:
        """Write one character."""
        if isinstance(ch, int):
            text = chr(ch & 0xFF)
        elif isinstance(ch, str) and len(ch) == 1:
            text = ch
        else:
            raise TypeError(f"expected a single character, got {ch!r}")
        try:
            self.sink.write(text)
        except (OSError, ValueError) as exc:
            raise DeviceError(f"write failed: {exc}") from exc


_console = StreamDevice()


def fgetc(device) -> Optional[int]:
    """Read one character code from device; None at end of input."""
    result = device.getc()
    if result is None or result < 0:
        return None
    return result


def fgets(device, n: int) -> Optional[str]:
    """Read at most n - 1 characters, stopping after a newline or return.

    Returns None when end of input comes before any character.
    """
    chars: list[str] = []
    ended = False
    remaining = n
    while remaining > 1:
        code = fgetc(device)
        if code is None:
            ended = True
            break
        ch = chr(code)
        chars.append(ch)
        remaining -= 1
        if ch in "\n\r":
            break
    if ended and not chars:
        return None
    return "".join(chars)


def fputc(c: Union[int, str], device) -> Union[int, str]:
    """Write one character to device and return it."""
    device.putc(c)
    return c


def fputs(s: str, device) -> None:
    """Write a string to device, up to any NUL character."""
    for ch in s.partition("\0")[0]:
        device.putc(ch)


def fprintf(device, fmt: str, *args: Any) -> None:
    """Write formatted output to device."""
    doprnt(fmt, args, device.putc, False)


def printf(fmt: str, *args: Any) -> None:
    """Write formatted output to the standard device."""
    fprintf(_console, fmt, *args)


def putchar(c: Union[int, str]) -> Union[int, str]:
    """Write one character to the standard device and return it."""
    return fputc(c, _console)


def getchar() -> Optional[int]:
    """Read one character code from the standard device."""
    return fgetc(_console)