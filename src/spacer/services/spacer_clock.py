"""
Background spacer clock.

One long-lived thread watches the shared clock state and prints a spacer once
input has been idle for the configured threshold. Each pass through the loop
is in one of three states:

- idle: no line since the last spacer, wait a full threshold
- counting: a line arrived, wait until the threshold would elapse
- due: the threshold elapsed, render and write a spacer
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from ..config import SpacerConfig
from ..utils.ui import OutputSink, SpacerRenderer
from ..utils.ui.renderers import RenderedSpacer
from .state import ClockSnapshot, ClockState

logger = logging.getLogger(__name__)


@dataclass
class ClockStats:
    """Counters describing what the clock did during a run."""

    wakeups: int = 0
    spacers: int = 0
    redraws: int = 0
    suppressed: int = 0


class SpacerClock:
    """Decide when a spacer is due and publish it through the sink."""

    def __init__(
        self,
        state: ClockState,
        sink: OutputSink,
        renderer: SpacerRenderer,
        config: SpacerConfig,
    ) -> None:
        self._state = state
        self._sink = sink
        self._renderer = renderer
        self._config = config

        self.stats = ClockStats()
        self._thread: Optional[threading.Thread] = None
        self._error: Optional[BaseException] = None

        # Live mode: the open spacer and when it was first drawn
        self._open: Optional[RenderedSpacer] = None
        self._open_since: float = 0.0
        self._open_previous: float = 0.0

    @property
    def error(self) -> Optional[BaseException]:
        return self._error

    def start(self) -> None:
        """Run the clock loop on a background thread."""
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._run_safely, name="spacer-clock", daemon=False
        )
        self._thread.start()

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for the clock thread to observe the finish signal and exit."""
        if self._thread is not None:
            self._thread.join(timeout)

    def raise_if_failed(self) -> None:
        """Re-raise a render or write failure from the clock thread."""
        if self._error is not None:
            raise self._error

    def _run_safely(self) -> None:
        try:
            self.run()
        except BaseException as e:
            logger.debug("clock stopped after error: %s", e)
            self._error = e

    def run(self) -> None:
        """Clock loop; returns once the state is marked finished."""
        threshold = self._config.idle_threshold

        while True:
            self.stats.wakeups += 1

            snapshot = self._state.snapshot()
            if snapshot.finished:
                logger.debug("clock received finish signal, exiting")
                break

            if snapshot.idle:
                if self._open is not None and self._sink.is_open:
                    self._redraw()
                    self._state.wait(self._config.live_refresh, snapshot)
                    continue

                logger.debug("last spacer is newer than last line, sleeping")
                self._state.wait(threshold, snapshot)
                continue

            elapsed = self._state.now() - snapshot.last_line
            if elapsed >= threshold:
                logger.debug("last line is older than %.2fs, printing spacer", threshold)
                self._emit(snapshot)
                if self._open is not None:
                    self._state.wait(self._config.live_refresh, snapshot)
                else:
                    self._state.wait(threshold, snapshot)
                continue

            sleep_for = max(self._config.min_sleep, threshold - elapsed)
            logger.debug("last line is newer than threshold, sleeping for %.2fs", sleep_for)
            self._state.wait(sleep_for)

        self._sink.seal()
        self._open = None

    def _emit(self, snapshot: ClockSnapshot) -> None:
        """
        Write a spacer unless a line arrived since ``snapshot``.

        The sink lock is held across the check, render and write, so a line
        recorded before the check suppresses the spacer and a line recorded
        after it is written below the spacer.
        """
        with self._sink.exclusive():
            if self._state.line_arrived_since(snapshot):
                logger.debug("line arrived while spacer was due, suppressing")
                self.stats.suppressed += 1
                return

            now = self._state.now()
            previous = snapshot.last_spacer
            if self._config.live:
                spacer = self._renderer.render(now, previous, waiting=0.0)
                self._sink.open_spacer(spacer)
                self._open = spacer
                self._open_since = now
                self._open_previous = previous
            else:
                spacer = self._renderer.render(now, previous)
                self._sink.write_spacer(spacer)

            self._state.set_spacer_time(self._state.now(), line_seq=snapshot.line_seq)
            self.stats.spacers += 1

    def _redraw(self) -> None:
        """Refresh the waiting time on the open live spacer."""
        spacer = self._open
        if spacer is None:
            return
        with self._sink.exclusive():
            now = self._state.now()
            updated = self._renderer.render(
                self._open_since,
                self._open_previous,
                waiting=now - self._open_since,
                stamp=spacer.stamp,
            )
            if self._sink.redraw_spacer(updated):
                self.stats.redraws += 1
            else:
                self._open = None
