"""
Foreground line relay.

Copies input lines to the output sink, recording each arrival in the shared
clock state before the line is written.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from ..errors import InputReadError
from ..utils.ui import OutputSink
from .state import ClockState

logger = logging.getLogger(__name__)


class LineRelay:
    """Relay lines from an input stream and signal the clock at end of input."""

    def __init__(
        self,
        state: ClockState,
        sink: OutputSink,
        health_check: Optional[Callable[[], None]] = None,
    ) -> None:
        self._state = state
        self._sink = sink
        self._health_check = health_check
        self.lines = 0

    def run(self, stream: Iterable[str]) -> int:
        """
        Relay every line of ``stream`` until it is exhausted.

        The finish signal is sent even when reading or writing fails, so the
        clock thread always exits.

        Returns:
            Number of lines relayed

        Raises:
            InputReadError: If reading from ``stream`` fails
            OutputWriteError: If writing a line fails
        """
        lines = iter(stream)
        try:
            while True:
                try:
                    line = next(lines)
                except StopIteration:
                    break
                except (OSError, ValueError) as e:
                    raise InputReadError(f"failed to read line: {e}") from e

                self._state.set_line_time(self._state.now())
                self._sink.write_line(line)
                self.lines += 1

                if self._health_check is not None:
                    self._health_check()
        finally:
            logger.debug("signalling clock to finish after %d lines", self.lines)
            self._state.mark_finished()

        return self.lines
