"""
Serialized output for relayed lines and spacers.

Both the relay thread and the clock thread write through a single OutputSink,
so a spacer can never land in the middle of a relayed line.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import IO, Iterator, Optional

from rich.console import Console

from ...errors import OutputWriteError
from .renderers.spacer import RenderedSpacer


class SinkConsole(Console):
    """Console that reports a closed pipe to its caller instead of exiting."""

    def on_broken_pipe(self) -> None:
        raise BrokenPipeError("output pipe was closed")


def make_console(file: Optional[IO[str]] = None, color: str = "auto") -> Console:
    """
    Build the Console that spacer output is written through.

    Args:
        file: Destination stream (stdout when None)
        color: auto detects terminal support, never disables all styling,
            always forces styled output even when not writing to a TTY
    """
    options = dict(
        file=file,
        markup=False,
        emoji=False,
        highlight=False,
        soft_wrap=True,
    )
    if color == "never":
        return SinkConsole(color_system=None, no_color=True, **options)
    if color == "always":
        return SinkConsole(force_terminal=True, **options)
    return SinkConsole(**options)


class OutputSink:
    """Exclusive writer wrapping the process output."""

    def __init__(self, console: Console) -> None:
        self._console = console
        self._lock = threading.RLock()
        self._at_line_start = True
        self._open_padding: Optional[int] = None

    @property
    def console(self) -> Console:
        return self._console

    @property
    def is_open(self) -> bool:
        """True while a live spacer is drawn but not yet terminated."""
        with self._lock:
            return self._open_padding is not None

    @contextmanager
    def exclusive(self) -> Iterator["OutputSink"]:
        """Hold the output lock across several operations."""
        with self._lock:
            yield self

    def write_line(self, line: str) -> None:
        """Write one relayed line verbatim, terminator included."""
        if not line:
            return
        with self._lock:
            try:
                self._seal_locked()
                self._console.file.write(line)
                self._console.file.flush()
            except (OSError, ValueError) as e:
                raise OutputWriteError(f"failed to write line: {e}") from e
            self._at_line_start = line.endswith(("\n", "\r"))

    def write_spacer(self, spacer: RenderedSpacer) -> None:
        """Write a complete, newline-terminated spacer with its padding."""
        with self._lock:
            try:
                self._seal_locked()
                self._start_spacer_locked(spacer, spacer.carriage_return)
                self._console.file.write("\n" * (spacer.padding + 1))
                self._console.file.flush()
            except (OSError, ValueError) as e:
                raise OutputWriteError(f"failed to write spacer: {e}") from e
            self._at_line_start = True

    def open_spacer(self, spacer: RenderedSpacer) -> None:
        """Draw a live spacer and leave the line open for redraws."""
        with self._lock:
            try:
                self._seal_locked()
                self._start_spacer_locked(spacer, True)
                self._console.file.flush()
            except (OSError, ValueError) as e:
                raise OutputWriteError(f"failed to write spacer: {e}") from e
            self._open_padding = spacer.padding
            self._at_line_start = False

    def redraw_spacer(self, spacer: RenderedSpacer) -> bool:
        """
        Redraw the open live spacer in place.

        Returns:
            False if the spacer was already terminated by a relayed line
        """
        with self._lock:
            if self._open_padding is None:
                return False
            try:
                self._console.file.write("\r")
                self._console.print(spacer.text, end="")
                self._console.file.flush()
            except (OSError, ValueError) as e:
                raise OutputWriteError(f"failed to redraw spacer: {e}") from e
            return True

    def seal(self) -> None:
        """Terminate an open live spacer, if any."""
        with self._lock:
            try:
                self._seal_locked()
                self._console.file.flush()
            except (OSError, ValueError) as e:
                raise OutputWriteError(f"failed to finish spacer: {e}") from e

    def _start_spacer_locked(self, spacer: RenderedSpacer, carriage_return: bool) -> None:
        if not self._at_line_start:
            self._console.file.write("\n")
        if spacer.padding:
            self._console.file.write("\n" * spacer.padding)
        if carriage_return:
            self._console.file.write("\r")
        self._console.print(spacer.text, end="")

    def _seal_locked(self) -> None:
        if self._open_padding is None:
            return
        padding = self._open_padding
        self._open_padding = None
        self._console.file.write("\n" * (padding + 1))
        self._at_line_start = True
