# kernlib

A small, self-contained library modelled on the runtime of a teaching
operating-system kernel: C-style character classification, string and
memory helpers, a minimal `printf`/`scanf` family, and a simulated
16550 UART with the tty line discipline that drives it.

It is useful for exercising kernel-level code paths (cooked-mode line
editing, echo, flow control, output buffering) in plain Python, and for
reproducing the exact formatting and parsing behaviour of a minimal libc,
quirks included.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `kernlib.ctype` – `isalpha`, `isupper`, `islower`, `isdigit`, `isxdigit`,
  `isspace`, `ispunct`, `isalnum`, `isprint`, `iscntrl`, `isascii`, `toupper`,
  `tolower`, `toascii`, `iseof`, driven by a 7-bit classification table. They
  accept an int or a one-character `str`/`bytes`; `toupper` and `tolower`
  shift unconditionally.
- `kernlib.cstring` – `strchr`, `strrchr`, `strstr`, `strcmp`, `strncmp`,
  `strlen`, `strnlen`, `strcpy`, `strncpy`, `strncat` on NUL-terminated
  byte strings. Searches return an index or `None`; copies write into a
  `bytearray` and raise `ValueError` if it is too small.
- `kernlib.memops` – `memchr`, `memcmp`, `memcpy`, `memset`, `bzero` on
  byte buffers.
- `kernlib.stdlib` – `atoi`, `atol`, `iabs`, `labs` (32-bit wrapping),
  `qsort` (in place, with a three-way compare function), and the classic
  linear congruential generator `LinearCongruential` behind `srand`/`rand`.
- `kernlib.printf` – `doprnt`, `cformat` and `sprintf`, supporting
  `%c %s %d %u %o %x %X %b` with a minimum width, a maximum string width,
  the `-` and `0` flags and `*`. `cformat` also knows `%H` and `%h`, which
  print a pair of words in hexadecimal; `sprintf` does not.
- `kernlib.stdio` – device-level I/O: `fgetc`, `fgets`, `fputc`, `fputs`,
  `fprintf`, `printf`, `putchar`, `getchar`. A device is any object with
  `getc()` and `putc(ch)`; `StreamDevice` wraps text streams (standard
  input and output by default) and raises `DeviceError` when a read or
  write fails.
- `kernlib.scan` – `doscan`, `sscanf` and `fscanf`, returning a
  `ScanResult` with a `count` and the scanned `values`. `StringSource` and
  `DeviceSource` supply characters with one-step pushback. The numeric
  scanner reproduces the original digit test: only `%x` reads digits, and
  only the letters `a`–`f`/`A`–`F`.
- `kernlib.uart` – a simulated 16550 UART (`Uart`, `Register`) driven by
  `inb`/`outb`, with `feed` to deliver received bytes and `take_output` to
  collect transmitted ones, plus `kick_out`.
- `kernlib.tty` – the tty driver: `Tty`, `Semaphore`, `InputMode`,
  `ControlFunction`. Operations that would have to wait raise `WouldBlock`.
- `kernlib.ttyinput` – `handle_input`, the receive-side line discipline
  (raw, cbreak and cooked modes, echo, erase, line kill, end of file,
  flow control).
- `kernlib.devices` – the device switch table (`DeviceTable`,
  `DeviceEntry`, `default_table`) and `tty_interrupt`, which decodes and
  services one UART interrupt.

## Examples

Formatting:

```python
from kernlib.printf import sprintf

sprintf("%05d|%-4s|%x", -42, "ab", 255)   # '-0042|ab  |ff'
```

Scanning:

```python
from kernlib.scan import sscanf

result = sscanf("ff zz", "%x %s")
result.count    # 2
result.values   # [255, 'zz']
```

Driving a tty:

```python
from kernlib.uart import Uart
from kernlib.tty import Tty
from kernlib.devices import tty_interrupt

uart = Uart()
tty = Tty(uart)
uart.feed(b"hi\r")
tty_interrupt(tty)       # the line is edited, echoed and made readable
tty.read(10)             # b'hi\n'
```

## What it does not do

- It does not talk to real serial hardware: the UART lives in memory and
  transmits instantly.
- There are no threads or processes; a tty operation that would block
  raises `WouldBlock` instead of waiting.
- It provides no command-line program; it is used as a library.