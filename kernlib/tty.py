"""The upper half of a serial tty line: buffers, modes and device calls.

The line runs without threads, so an operation that would have to wait for
input or for space in the output buffer raises WouldBlock instead, leaving
the line unchanged.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Optional, Union

from kernlib.uart import (
    FCR_EFIFO,
    FCR_RRESET,
    FCR_TRESET,
    FCR_TRIG2,
    FIFO_SIZE,
    IER_ETBEI,
    LCR_8N1,
    LCR_DLAB,
    MCR_DTR,
    MCR_OUT2,
    MCR_RTS,
    Register,
    Uart,
    kick_out,
)

OBMINSP = 20  # minimum space in buffer before writers are awakened
EBUFLEN = 20  # size of the echo queue
IBUFLEN = 128  # characters in the input queue
OBUFLEN = 64  # characters in the output queue

BACKSP = 0x08
BELL = 0x07
EOFCH = 0x04  # control-D
BLANK = 0x20
NEWLINE = 0x0A
RETURN = 0x0D
STOPCH = 0x13  # control-S
STRTCH = 0x11  # control-Q
KILLCH = 0x15  # control-U
UPARROW = ord("^")
FULLCH = BELL


class InputMode(Enum):
    RAW = "R"
    COOKED = "C"
    CBREAK = "K"


class ControlFunction(IntEnum):
    NEXTC = 3
    MODER = 4
    MODEC = 5
    MODEK = 6
    ICHARS = 8
    ECHO = 9
    NOECHO = 10


class WouldBlock(Exception):
    """The operation would have to wait for the device."""


class Semaphore:
    """A counting semaphore that refuses to block."""

    def __init__(self, count: int = 0) -> None:
        if count < 0:
            raise ValueError("initial count must not be negative")
        self._count = count

    def wait(self) -> None:
        if self._count <= 0:
            raise WouldBlock("semaphore count is zero")
        self._count -= 1

    def signal(self) -> None:
        self._count += 1

    def signaln(self, n: int) -> None:
        if n <= 0:
            raise ValueError("signal count must be positive")
        self._count += n

    def count(self) -> int:
        return self._count


def _code(ch: Union[int, str, bytes]) -> int:
    if isinstance(ch, int):
        return ch & 0xFF
    if isinstance(ch, (str, bytes)) and len(ch) == 1:
        return ord(ch) & 0xFF
    raise TypeError(f"expected an int or a single character, got {ch!r}")


class Tty:
    """A tty line over a UART, initialised in cooked mode with echo."""

    def __init__(self, uart: Optional[Uart] = None) -> None:
        self.uart = uart if uart is not None else Uart()

        self.input_buffer = bytearray(IBUFLEN)
        self.input_head = 0
        self.input_tail = 0
        self.input_sem = Semaphore(0)
        self.output_buffer = bytearray(OBUFLEN)
        self.output_head = 0
        self.output_tail = 0
        self.output_sem = Semaphore(OBUFLEN)
        self.echo_buffer = bytearray(EBUFLEN)
        self.echo_head = 0
        self.echo_tail = 0

        self.input_mode = InputMode.COOKED
        self.echo = True
        self.erase_backspace = True
        self.visual_control = True
        self.echo_crlf = True
        self.map_cr = True
        self.erase = True
        self.erase_char = BACKSP
        self.honor_eof = True
        self.eof_char = EOFCH
        self.kill = True
        self.kill_char = KILLCH
        self.cursor = 0
        self.flow_control = True
        self.output_held = False
        self.stop_char = STOPCH
        self.start_char = STRTCH
        self.output_crlf = True
        self.full_char = FULLCH

        self._init_uart()

    def _init_uart(self) -> None:
        uart = self.uart
        uart.outb(Register.LCR, LCR_DLAB)
        uart.outb(Register.DLM, 0x00)
        uart.outb(Register.DLL, 0x01)
        uart.outb(Register.LCR, LCR_8N1)
        uart.outb(Register.FCR, 0x00)
        uart.outb(Register.MCR, MCR_DTR | MCR_RTS | MCR_OUT2)
        uart.outb(Register.FCR, FCR_EFIFO | FCR_RRESET | FCR_TRESET | FCR_TRIG2)
        kick_out(uart)
        for reg in (Register.IIR, Register.LSR, Register.MSR, Register.BUFFER):
            uart.inb(reg)

    def _take(self) -> int:
        self.input_sem.wait()
        ch = self.input_buffer[self.input_head]
        self.input_head = (self.input_head + 1) % IBUFLEN
        return ch

    def getc(self) -> Optional[int]:
        """Read one character; None for the end-of-file character in cooked mode."""
        ch = self._take()
        if (
            self.input_mode is InputMode.COOKED
            and self.honor_eof
            and ch == self.eof_char
        ):
            return None
        return ch

    def putc(self, ch: Union[int, str, bytes]) -> None:
        """Queue one character for output, sending CR before LF if enabled."""
        code = _code(ch)
        crlf = code == NEWLINE and self.output_crlf
        if self.output_sem.count() < (2 if crlf else 1):
            raise WouldBlock("output buffer is full")
        if crlf:
            self.putc(RETURN)
        self.output_sem.wait()
        self.output_buffer[self.output_tail] = code
        self.output_tail = (self.output_tail + 1) % OBUFLEN
        kick_out(self.uart)

    def read(self, count: int) -> Optional[bytes]:
        """Read characters.

        In raw and cbreak modes exactly count characters are read, or all
        that are available when count is zero. In cooked mode at most one
        line is read, and None is returned at end of file.
        """
        if count < 0:
            raise ValueError("count must not be negative")
        if self.input_mode is not InputMode.COOKED:
            available = self.input_sem.count()
            if count == 0:
                count = available
            if count > available:
                raise WouldBlock("not enough input")
            return bytes(self._take() for _ in range(count))

        first = self.getc()
        if first is None:
            return None
        line = bytearray([first])
        ch = first
        while len(line) < count and ch not in (NEWLINE, RETURN):
            ch = self._take()
            line.append(ch)
        return bytes(line)

    def write(self, data: Union[bytes, bytearray, str]) -> None:
        """Queue every character of data for output."""
        if isinstance(data, str):
            data = data.encode("latin-1")
        data = bytes(data)
        if not data:
            return
        needed = len(data)
        if self.output_crlf:
            needed += data.count(NEWLINE)
        if needed > self.output_sem.count():
            raise WouldBlock("output buffer is too full")
        for ch in data:
            self.putc(ch)

    def control(
        self, func: Union[ControlFunction, int], arg1: int = 0, arg2: int = 0
    ) -> Optional[int]:
        """Carry out a control function; unknown functions raise ValueError.

        NEXTC returns the character in the input tail slot and ICHARS the
        number of characters available; the mode switches return None.
        """
        function = ControlFunction(func)
        if function is ControlFunction.NEXTC:
            self.input_sem.wait()
            ch = self.input_buffer[self.input_tail]
            self.input_sem.signal()
            return ch
        if function is ControlFunction.MODER:
            self.input_mode = InputMode.RAW
        elif function is ControlFunction.MODEC:
            self.input_mode = InputMode.COOKED
        elif function is ControlFunction.MODEK:
            self.input_mode = InputMode.CBREAK
        elif function is ControlFunction.ICHARS:
            return self.input_sem.count()
        elif function is ControlFunction.ECHO:
            self.echo = True
        else:
            self.echo = False
        return None

    def output_interrupt(self) -> None:
        """Move echo characters, then output characters, into the UART FIFO."""
        uart = self.uart
        if self.output_held:
            uart.inb(Register.LSR)
            return

        if self.echo_head == self.echo_tail and self.output_sem.count() >= OBUFLEN:
            ier = uart.inb(Register.IER)
            uart.outb(Register.IER, ier & ~IER_ETBEI & 0xFF)
            return

        space = FIFO_SIZE
        while space > 0 and self.echo_head != self.echo_tail:
            uart.outb(Register.THR, self.echo_buffer[self.echo_head])
            self.echo_head = (self.echo_head + 1) % EBUFLEN
            space -= 1

        sent = 0
        available = OBUFLEN - self.output_sem.count()
        while space > 0 and available > 0:
            uart.outb(Register.THR, self.output_buffer[self.output_head])
            self.output_head = (self.output_head + 1) % OBUFLEN
            available -= 1
            space -= 1
            sent += 1
        if sent > 0:
            self.output_sem.signaln(sent)