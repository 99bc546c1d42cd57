"""
Tests for the serialized output sink.
"""

from __future__ import annotations

import io
import threading

import pytest
from rich.text import Text

from spacer.errors import OutputWriteError
from spacer.utils.ui import OutputSink, RenderedSpacer, make_console


def _sink():
    buffer = io.StringIO()
    return OutputSink(make_console(buffer, color="never")), buffer


def _spacer(text: str = "== spacer ==", padding: int = 0, cr: bool = False):
    return RenderedSpacer(text=Text(text, style="dim"), padding=padding, carriage_return=cr)


class _BrokenStream(io.StringIO):
    def write(self, s: str) -> int:
        raise BrokenPipeError("reader went away")


def test_lines_are_written_verbatim() -> None:
    """Verify relayed lines keep their exact terminators."""
    sink, buffer = _sink()
    sink.write_line("foo\r\n")
    sink.write_line("bar\n")
    sink.write_line("")
    sink.write_line("tail")

    assert buffer.getvalue() == "foo\r\nbar\ntail"


def test_spacer_is_newline_terminated() -> None:
    """Verify a spacer is a complete line after a complete line."""
    sink, buffer = _sink()
    sink.write_line("foo\n")
    sink.write_spacer(_spacer())

    assert buffer.getvalue() == "foo\n== spacer ==\n"


def test_spacer_never_lands_mid_line() -> None:
    """Verify an unterminated line is closed before the spacer."""
    sink, buffer = _sink()
    sink.write_line("partial")
    sink.write_spacer(_spacer())

    assert buffer.getvalue() == "partial\n== spacer ==\n"


def test_padding_surrounds_spacer() -> None:
    """Verify padding lines are written before and after the spacer."""
    sink, buffer = _sink()
    sink.write_spacer(_spacer(padding=2))

    assert buffer.getvalue() == "\n\n== spacer ==\n\n\n"


def test_right_aligned_spacer_gets_carriage_return() -> None:
    """Verify a carriage return precedes spacers that request it."""
    sink, buffer = _sink()
    sink.write_spacer(_spacer(cr=True))

    assert buffer.getvalue() == "\r== spacer ==\n"


def test_no_color_output_has_no_escape_codes() -> None:
    """Verify styled spacers render as plain text when color is disabled."""
    sink, buffer = _sink()
    sink.write_spacer(RenderedSpacer(text=Text("x", style="bold green")))

    assert "\x1b" not in buffer.getvalue()


def test_forced_color_output_has_escape_codes(monkeypatch) -> None:
    """Verify styled spacers keep ANSI styling when color is forced."""
    monkeypatch.setenv("TERM", "xterm-256color")
    monkeypatch.delenv("NO_COLOR", raising=False)
    buffer = io.StringIO()
    sink = OutputSink(make_console(buffer, color="always"))
    sink.write_spacer(RenderedSpacer(text=Text("x", style="green")))

    assert "\x1b[" in buffer.getvalue()


def test_open_spacer_is_redrawn_and_sealed_by_next_line() -> None:
    """Verify a live spacer redraws in place and ends before the next line."""
    sink, buffer = _sink()
    sink.write_line("foo\n")
    sink.open_spacer(_spacer("one", padding=1))
    assert sink.is_open
    assert sink.redraw_spacer(_spacer("two"))
    sink.write_line("bar\n")

    assert not sink.is_open
    assert not sink.redraw_spacer(_spacer("three"))
    assert buffer.getvalue() == "foo\n\n\rone\rtwo\n\nbar\n"


def test_seal_without_open_spacer_is_a_no_op() -> None:
    """Verify sealing twice writes nothing extra."""
    sink, buffer = _sink()
    sink.open_spacer(_spacer("one"))
    sink.seal()
    sink.seal()

    assert buffer.getvalue() == "\rone\n"


def test_write_failures_raise_output_write_error() -> None:
    """Verify stream errors surface as OutputWriteError with the cause kept."""
    sink = OutputSink(make_console(_BrokenStream(), color="never"))

    with pytest.raises(OutputWriteError) as excinfo:
        sink.write_line("foo\n")
    assert isinstance(excinfo.value.__cause__, BrokenPipeError)

    with pytest.raises(OutputWriteError):
        sink.write_spacer(_spacer())


def test_concurrent_writers_never_interleave() -> None:
    """Verify lines and spacers from two threads stay whole."""
    sink, buffer = _sink()

    def relay() -> None:
        for i in range(200):
            sink.write_line(f"line-{i:03d}-" + "x" * 50 + "\n")

    def clock() -> None:
        for _ in range(200):
            sink.write_spacer(_spacer("-" * 60))

    threads = [threading.Thread(target=relay), threading.Thread(target=clock)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    lines = buffer.getvalue().split("\n")[:-1]
    assert len(lines) == 400
    for line in lines:
        assert line == "-" * 60 or (line.startswith("line-") and line.endswith("x" * 50))


def test_broken_pipe_on_spacer_raises_instead_of_exiting() -> None:
    """Verify a closed pipe during a styled write is reported, not turned into SystemExit."""
    sink = OutputSink(make_console(_BrokenStream(), color="never"))

    with pytest.raises(OutputWriteError) as excinfo:
        sink.write_spacer(_spacer())
    assert isinstance(excinfo.value.__cause__, BrokenPipeError)

    with pytest.raises(OutputWriteError):
        sink.open_spacer(_spacer())
