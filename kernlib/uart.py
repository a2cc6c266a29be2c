"""A simulated NS16550 serial UART and the register layout it presents.

The simulation transmits instantly: a byte written to the transmit holding
register is appended to an output log (or looped back into the receive
FIFO when loopback mode is on), so the transmitter is always empty.
"""

from __future__ import annotations

from collections import deque
from enum import IntEnum
from typing import Deque, Union

BAUD = 115200  # default console baud rate
OUT_IDLE = 0x0016
FIFO_SIZE = 16  # characters in the onboard output FIFO

# Line control bits
LCR_DLAB = 0x80  # divisor latch access bit
LCR_8N1 = 0x03  # 8 bits, no parity, 1 stop

# Interrupt enable bits
IER_ERBFI = 0x01  # received data interrupt
IER_ETBEI = 0x02  # transmitter buffer empty interrupt
IER_ELSI = 0x04  # receiver line status interrupt
IER_EMSI = 0x08  # modem status interrupt

# Interrupt identification
IIR_IRQ = 0x01  # set when no interrupt is pending
IIR_IDMASK = 0x0E
IIR_MSC = 0x00
IIR_THRE = 0x02
IIR_RDA = 0x04
IIR_RLSI = 0x06
IIR_RTO = 0x0C

# FIFO control bits
FCR_EFIFO = 0x01
FCR_RRESET = 0x02
FCR_TRESET = 0x04
FCR_TRIG0 = 0x00
FCR_TRIG1 = 0x40
FCR_TRIG2 = 0x80
FCR_TRIG3 = 0xC0

# Modem control bits
MCR_OUT2 = 0x08
MCR_RTS = 0x02
MCR_DTR = 0x01
MCR_LOOP = 0x10

# Line status bits
LSR_DR = 0x01  # data ready
LSR_BI = 0x10  # break interrupt
LSR_THRE = 0x20  # transmit holding register empty
LSR_TEMT = 0x40  # transmitter empty

_FIFO_ID_BITS = 0xC0


class Register(IntEnum):
    """Register offsets from the UART's base address."""

    BUFFER = 0
    IER = 1
    IIR = 2
    LCR = 3
    MCR = 4
    LSR = 5
    MSR = 6
    SCR = 7
    # Alternative names for the same offsets
    RBR = 0
    THR = 0
    DLL = 0
    FCR = 2
    DLM = 1


class Uart:
    """A 16550 UART held in memory, driven through inb and outb."""

    def __init__(self) -> None:
        self._rx: Deque[int] = deque()
        self._tx = bytearray()
        self._ier = 0
        self._lcr = 0
        self._mcr = 0
        self._fcr = 0
        self._msr = 0
        self._scr = 0
        self._dll = 0
        self._dlm = 0
        self._thre_pending = False

    @property
    def ier(self) -> int:
        return self._ier

    @property
    def lcr(self) -> int:
        return self._lcr

    @property
    def mcr(self) -> int:
        return self._mcr

    @property
    def fcr(self) -> int:
        return self._fcr

    @property
    def divisor(self) -> int:
        """The baud rate divisor latch, high byte and low byte together."""
        return (self._dlm << 8) | self._dll

    @property
    def pending_input(self) -> int:
        """Number of received bytes waiting in the receive FIFO."""
        return len(self._rx)

    @property
    def _dlab(self) -> bool:
        return bool(self._lcr & LCR_DLAB)

    def _line_status(self) -> int:
        status = LSR_THRE | LSR_TEMT
        if self._rx:
            status |= LSR_DR
        return status

    def _identify(self) -> int:
        fifo = _FIFO_ID_BITS if self._fcr & FCR_EFIFO else 0
        if self._rx and self._ier & IER_ERBFI:
            return fifo | IIR_RDA
        if self._thre_pending and self._ier & IER_ETBEI:
            self._thre_pending = False
            return fifo | IIR_THRE
        return fifo | IIR_IRQ

    def inb(self, register: Union[Register, int]) -> int:
        """Read one register."""
        reg = Register(register)
        if reg is Register.BUFFER:
            if self._dlab:
                return self._dll
            return self._rx.popleft() if self._rx else 0
        if reg is Register.IER:
            return self._dlm if self._dlab else self._ier
        if reg is Register.IIR:
            return self._identify()
        if reg is Register.LCR:
            return self._lcr
        if reg is Register.MCR:
            return self._mcr
        if reg is Register.LSR:
            return self._line_status()
        if reg is Register.MSR:
            return self._msr
        return self._scr

    def outb(self, register: Union[Register, int], value: int) -> None:
        """Write one register; writes to the status registers are ignored."""
        reg = Register(register)
        if not 0 <= value <= 0xFF:
            raise ValueError(f"register value {value} is not a byte")
        if reg is Register.BUFFER:
            if self._dlab:
                self._dll = value
            else:
                self._transmit(value)
        elif reg is Register.IER:
            if self._dlab:
                self._dlm = value
            else:
                self._ier = value & 0x0F
                if value & IER_ETBEI:
                    self._thre_pending = True
        elif reg is Register.IIR:
            if value & FCR_RRESET:
                self._rx.clear()
            self._fcr = value & ~(FCR_RRESET | FCR_TRESET)
        elif reg is Register.LCR:
            self._lcr = value
        elif reg is Register.MCR:
            self._mcr = value
        elif reg is Register.SCR:
            self._scr = value

    def _transmit(self, value: int) -> None:
        if self._mcr & MCR_LOOP:
            self._rx.append(value)
        else:
            self._tx.append(value)
        self._thre_pending = True

    def feed(self, data: Union[bytes, bytearray, str]) -> None:
        """Deliver bytes to the receive FIFO as if they arrived on the line."""
        if isinstance(data, str):
            data = data.encode("latin-1")
        self._rx.extend(bytes(data))

    def take_output(self) -> bytes:
        """Return and clear everything transmitted so far."""
        out = bytes(self._tx)
        self._tx.clear()
        return out


def kick_out(uart: Uart) -> None:
    """Enable output interrupts so the device asks for more output."""
    uart.outb(Register.IER, IER_ERBFI | IER_ETBEI | IER_ELSI)