"""The device switch table and the interrupt dispatcher for the console line."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Optional, Sequence

from kernlib.tty import Tty
from kernlib.ttyinput import handle_input
from kernlib.uart import (
    IIR_IDMASK,
    IIR_IRQ,
    IIR_MSC,
    IIR_RDA,
    IIR_RLSI,
    IIR_RTO,
    IIR_THRE,
    LSR_DR,
    Register,
)

CONSOLE = 0
NOTADEV = 1
NDEVS = 2
DEVNAMLEN = 16
DEVMAXNAME = 24

CONSOLE_CSR = 0x3F8
CONSOLE_IRQ = 36


@dataclass
class DeviceEntry:
    """One entry of the device switch table."""

    number: int
    minor: int
    name: str
    csr: int = 0
    irq: int = 0
    device: Optional[Any] = None

    def __post_init__(self) -> None:
        if not self.name or len(self.name) > DEVMAXNAME:
            raise ValueError(f"bad device name {self.name!r}")
        if not 0 <= self.irq <= 0xFF:
            raise ValueError(f"irq {self.irq} is not a byte")


class DeviceTable:
    """Devices indexed by number, with lookup by name."""

    def __init__(self, entries: Sequence[DeviceEntry]) -> None:
        for index, entry in enumerate(entries):
            if entry.number != index:
                raise ValueError(
                    f"device {entry.name!r} has number {entry.number}, expected {index}"
                )
        names = [entry.name for entry in entries]
        if len(set(names)) != len(names):
            raise ValueError("device names must be unique")
        self._entries = list(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[DeviceEntry]:
        return iter(self._entries)

    def __getitem__(self, devnum: int) -> DeviceEntry:
        if self.is_bad_device(devnum):
            raise IndexError(f"no device number {devnum}")
        return self._entries[devnum]

    def lookup(self, name: str) -> DeviceEntry:
        """Return the entry with this name; KeyError if there is none."""
        for entry in self._entries:
            if entry.name == name:
                return entry
        raise KeyError(name)

    def is_bad_device(self, devnum: int) -> bool:
        return devnum < 0 or devnum >= len(self._entries)


def tty_interrupt(tty: Tty) -> None:
    """Decode and service one interrupt from the tty's UART."""
    uart = tty.uart
    iir = uart.inb(Register.IIR)
    if iir & IIR_IRQ:
        return
    cause = iir & IIR_IDMASK
    if cause == IIR_RLSI:
        uart.inb(Register.LSR)
    elif cause in (IIR_RDA, IIR_RTO):
        while uart.inb(Register.LSR) & LSR_DR:
            handle_input(tty)
    elif cause == IIR_THRE:
        uart.inb(Register.LSR)
        tty.output_interrupt()
    elif cause == IIR_MSC:
        return


def default_table() -> DeviceTable:
    """The configured devices: a console tty and a null device."""
    return DeviceTable(
        [
            DeviceEntry(CONSOLE, 0, "CONSOLE", CONSOLE_CSR, CONSOLE_IRQ, Tty()),
            DeviceEntry(NOTADEV, 0, "NOTADEV", 0, 0, None),
        ]
    )