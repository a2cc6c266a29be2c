import io
import sys

import pytest

from kernlib.stdio import (
    DeviceError,
    StreamDevice,
    fgetc,
    fgets,
    fprintf,
    fputc,
    fputs,
    getchar,
    printf,
    putchar,
)


def reader(text):
    return StreamDevice(source=io.StringIO(text))


def test_fgetc_reads_then_ends():
    dev = reader("ab")
    assert fgetc(dev) == ord("a")
    assert fgetc(dev) == ord("b")
    assert fgetc(dev) is None


def test_fgets_reads_lines():
    dev = reader("line1\nline2")
    assert fgets(dev, 20) == "line1\n"
    assert fgets(dev, 20) == "line2"
    assert fgets(dev, 20) is None


def test_fgets_stops_after_return():
    dev = reader("ab\rcd")
    assert fgets(dev, 20) == "ab\r"
    assert fgets(dev, 20) == "cd"


def test_fgets_limits_length():
    dev = reader("abcdef")
    assert fgets(dev, 3) == "ab"
    assert fgets(dev, 3) == "cd"


def test_fgets_with_no_room_returns_empty():
    dev = reader("abc")
    assert fgets(dev, 1) == ""
    assert fgetc(dev) == ord("a")


def test_fputc_writes_and_returns():
    sink = io.StringIO()
    dev = StreamDevice(sink=sink)
    assert fputc("x", dev) == "x"
    assert fputc(ord("y"), dev) == ord("y")
    assert sink.getvalue() == "xy"


def test_fputc_on_closed_sink_raises():
    sink = io.StringIO()
    sink.close()
    with pytest.raises(DeviceError):
        fputc("x", StreamDevice(sink=sink))


def test_getc_on_closed_source_raises():
    source = io.StringIO("abc")
    source.close()
    with pytest.raises(DeviceError):
        fgetc(StreamDevice(source=source))


def test_fputs_writes_string():
    sink = io.StringIO()
    fputs("hello", StreamDevice(sink=sink))
    assert sink.getvalue() == "hello"


def test_fputs_stops_at_nul():
    sink = io.StringIO()
    fputs("ab\0cd", StreamDevice(sink=sink))
    assert sink.getvalue() == "ab"


def test_fprintf_formats_to_device():
    sink = io.StringIO()
    fprintf(StreamDevice(sink=sink), "%s=%d", "n", 12)
    assert sink.getvalue() == "n=12"


def test_putc_rejects_long_string():
    with pytest.raises(TypeError):
        StreamDevice(sink=io.StringIO()).putc("ab")


def test_printf_writes_standard_output(capsys):
    printf("%d-%s", 7, "x")
    assert capsys.readouterr().out == "7-x"


def test_putchar_writes_standard_output(capsys):
    assert putchar("k") == "k"
    assert capsys.readouterr().out == "k"


def test_getchar_reads_standard_input(monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO("q"))
    assert getchar() == ord("q")
    assert getchar() is None


def test_round_trip_through_devices():
    sink = io.StringIO()
    fputs("first\nsecond\n", StreamDevice(sink=sink))
    dev = reader(sink.getvalue())
    assert fgets(dev, 80) == "first\n"
    assert fgets(dev, 80) == "second\n"
    assert fgets(dev, 80) is None