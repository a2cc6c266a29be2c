"""Input side of the tty interrupt handler: one arriving character at a time."""

from __future__ import annotations

from kernlib.tty import (
    BACKSP,
    BLANK,
    IBUFLEN,
    EBUFLEN,
    NEWLINE,
    RETURN,
    UPARROW,
    InputMode,
    Tty,
)
from kernlib.uart import Register, kick_out

_DELETE = 0x7F


def _nonprintable(ch: int) -> bool:
    """Below blank, DEL, or a byte that is negative as a signed character."""
    return ch < BLANK or ch == _DELETE or ch >= 0x80


def _eputc(tty: Tty, ch: int) -> None:
    """Put one character in the echo queue and start output."""
    tty.echo_buffer[tty.echo_tail] = ch & 0xFF
    tty.echo_tail = (tty.echo_tail + 1) % EBUFLEN
    kick_out(tty.uart)


def _echoch(tty: Tty, ch: int) -> None:
    """Echo a character honouring the visual and CR-LF options."""
    if ch in (NEWLINE, RETURN) and tty.echo_crlf:
        _eputc(tty, RETURN)
        _eputc(tty, NEWLINE)
    elif _nonprintable(ch) and tty.visual_control:
        _eputc(tty, UPARROW)
        _eputc(tty, ch + 0x40)
    else:
        _eputc(tty, ch)


def _erase_echo(tty: Tty) -> None:
    _eputc(tty, BACKSP)
    if tty.erase_backspace:
        _eputc(tty, BLANK)
        _eputc(tty, BACKSP)


def _erase1(tty: Tty) -> None:
    """Remove the last character of the line and erase it on the screen."""
    tty.input_tail = (tty.input_tail - 1) % IBUFLEN
    ch = tty.input_buffer[tty.input_tail]
    if not tty.echo:
        return
    if _nonprintable(ch) and tty.visual_control:
        _erase_echo(tty)  # the up arrow
    _erase_echo(tty)


def _store(tty: Tty, ch: int) -> None:
    tty.input_buffer[tty.input_tail] = ch
    tty.input_tail = (tty.input_tail + 1) % IBUFLEN


def _available(tty: Tty) -> int:
    return max(tty.input_sem.count(), 0)


def handle_input(tty: Tty) -> None:
    """Take one character from the UART and process it for the line's mode."""
    ch = tty.uart.inb(Register.BUFFER)
    avail = _available(tty)

    if tty.input_mode is InputMode.RAW:
        if avail >= IBUFLEN:
            return
        _store(tty, ch)
        tty.input_sem.signal()
        return

    if ch == RETURN and tty.map_cr:
        ch = NEWLINE

    if tty.flow_control:
        if ch == tty.start_char:
            tty.output_held = False
            kick_out(tty.uart)
            return
        if ch == tty.stop_char:
            tty.output_held = True
            return

    tty.output_held = False

    if tty.input_mode is InputMode.CBREAK:
        if avail >= IBUFLEN:
            _eputc(tty, tty.full_char)
        else:
            _store(tty, ch)
            if tty.echo:
                _echoch(tty, ch)
        return

    if ch == tty.kill_char and tty.kill:
        tty.input_tail = (tty.input_tail - tty.cursor) % IBUFLEN
        tty.cursor = 0
        _eputc(tty, RETURN)
        _eputc(tty, NEWLINE)
        return

    if ch == tty.erase_char and tty.erase:
        if tty.cursor > 0:
            tty.cursor -= 1
            _erase1(tty)
        return

    if ch in (NEWLINE, RETURN):
        if tty.echo:
            _echoch(tty, ch)
        _store(tty, ch)
        tty.input_sem.signaln(tty.cursor + 1)
        tty.cursor = 0
        return

    if _available(tty) + tty.cursor >= IBUFLEN - 1:
        _eputc(tty, tty.full_char)
        return

    if ch == tty.eof_char and tty.honor_eof:
        if tty.echo:
            _echoch(tty, ch)
        if tty.cursor != 0:
            return
        _store(tty, ch)
        tty.input_sem.signal()
        return

    if tty.echo:
        _echoch(tty, ch)
    tty.cursor += 1
    _store(tty, ch)