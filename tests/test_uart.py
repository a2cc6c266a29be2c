import pytest

from kernlib.uart import (
    FCR_EFIFO,
    FCR_RRESET,
    FCR_TRIG2,
    IER_ELSI,
    IER_ERBFI,
    IER_ETBEI,
    IIR_IDMASK,
    IIR_IRQ,
    IIR_RDA,
    IIR_THRE,
    LCR_8N1,
    LCR_DLAB,
    LSR_DR,
    LSR_THRE,
    MCR_LOOP,
    Register,
    Uart,
    kick_out,
)


def test_register_aliases_share_offsets():
    assert Register.THR is Register.BUFFER
    assert Register.FCR is Register.IIR
    assert Register.DLM is Register.IER
    uart = Uart()
    uart.outb(Register.THR, ord("a"))
    assert uart.take_output() == b"a"
    uart.outb(Register.IER, IER_ERBFI)
    assert uart.inb(Register.DLM) == IER_ERBFI


def test_fed_bytes_are_read_in_order():
    uart = Uart()
    uart.feed(b"ab")
    assert uart.inb(Register.LSR) & LSR_DR
    assert uart.inb(Register.BUFFER) == ord("a")
    assert uart.inb(Register.BUFFER) == ord("b")
    assert not uart.inb(Register.LSR) & LSR_DR
    assert uart.inb(Register.LSR) & LSR_THRE


def test_transmitted_bytes_are_collected_once():
    uart = Uart()
    for ch in b"hi":
        uart.outb(Register.THR, ch)
    assert uart.take_output() == b"hi"
    assert uart.take_output() == b""


def test_divisor_latch_does_not_transmit():
    uart = Uart()
    uart.outb(Register.LCR, LCR_DLAB)
    uart.outb(Register.DLM, 0)
    uart.outb(Register.DLL, 1)
    uart.outb(Register.LCR, LCR_8N1)
    assert uart.divisor == 1
    assert uart.take_output() == b""
    assert uart.lcr == LCR_8N1


def test_kick_out_sets_interrupt_enables():
    uart = Uart()
    kick_out(uart)
    assert uart.ier == IER_ERBFI | IER_ETBEI | IER_ELSI
    assert uart.inb(Register.IIR) & IIR_IDMASK == IIR_THRE
    assert uart.inb(Register.IIR) & IIR_IRQ


def test_receive_interrupt_identified():
    uart = Uart()
    uart.outb(Register.IER, IER_ERBFI)
    uart.feed("x")
    assert uart.inb(Register.IIR) & IIR_IDMASK == IIR_RDA
    uart.inb(Register.BUFFER)
    assert uart.inb(Register.IIR) & IIR_IRQ


def test_fifo_reset_discards_input():
    uart = Uart()
    uart.feed(b"abc")
    uart.outb(Register.FCR, FCR_EFIFO | FCR_RRESET | FCR_TRIG2)
    assert uart.pending_input == 0
    assert uart.fcr == FCR_EFIFO | FCR_TRIG2


def test_loopback_returns_output_as_input():
    uart = Uart()
    uart.outb(Register.MCR, MCR_LOOP)
    uart.outb(Register.THR, ord("q"))
    assert uart.take_output() == b""
    assert uart.inb(Register.RBR) == ord("q")


def test_rejects_non_byte_value():
    with pytest.raises(ValueError):
        Uart().outb(Register.THR, 256)


def test_rejects_unknown_register():
    with pytest.raises(ValueError):
        Uart().inb(8)