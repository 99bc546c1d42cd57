"""
Shared timing state for the line relay and the spacer clock.

Single source of truth for when the last input line arrived, when the last
spacer was printed, and whether input has ended.
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional


@dataclass(frozen=True)
class ClockSnapshot:
    """Immutable snapshot of clock state at a point in time."""

    last_line: float
    last_spacer: float
    finished: bool
    line_seq: int
    idle: bool


class ClockState:
    """
    Thread-safe record of the two monotonic instants the clock reasons about.

    Every accessor holds the internal lock only long enough to copy or assign
    a value. A line sequence counter decides whether a line arrived since the
    last spacer, so two readings of a coarse monotonic clock that happen to be
    equal cannot hide a line from the clock.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        self._clock = clock or time.monotonic
        self._cond = threading.Condition(threading.Lock())

        now = self._clock()
        self._last_line: float = now
        self._last_spacer: float = now
        self._finished: bool = False
        self._line_seq: int = 0
        self._spacer_seq: int = 0

    def now(self) -> float:
        """Read the monotonic clock this state was built with."""
        return self._clock()

    def read_line_time(self) -> float:
        with self._cond:
            return self._last_line

    def read_spacer_time(self) -> float:
        with self._cond:
            return self._last_spacer

    def set_line_time(self, now: float) -> None:
        """Record a line arrival and wake the clock if it was idle."""
        with self._cond:
            was_idle = self._spacer_seq == self._line_seq
            self._last_line = max(self._last_line, now)
            self._line_seq += 1
            if was_idle:
                self._cond.notify_all()

    def set_spacer_time(self, now: float, line_seq: Optional[int] = None) -> None:
        """
        Record a printed spacer.

        Args:
            now: Monotonic time of the spacer
            line_seq: Line sequence the spacer covers; lines counted after it
                are still pending. Defaults to every line seen so far.
        """
        with self._cond:
            self._last_spacer = max(self._last_spacer, now)
            if line_seq is None:
                line_seq = self._line_seq
            self._spacer_seq = max(self._spacer_seq, min(line_seq, self._line_seq))

    def mark_finished(self) -> None:
        with self._cond:
            self._finished = True
            self._cond.notify_all()

    def is_finished(self) -> bool:
        with self._cond:
            return self._finished

    def snapshot(self) -> ClockSnapshot:
        """Copy every field atomically."""
        with self._cond:
            return ClockSnapshot(
                last_line=self._last_line,
                last_spacer=self._last_spacer,
                finished=self._finished,
                line_seq=self._line_seq,
                idle=self._spacer_seq == self._line_seq,
            )

    def line_arrived_since(self, snapshot: ClockSnapshot) -> bool:
        """Return True if a line was recorded after ``snapshot`` was taken."""
        with self._cond:
            return self._line_seq != snapshot.line_seq

    def wait(self, timeout: float, snapshot: Optional[ClockSnapshot] = None) -> None:
        """
        Sleep up to ``timeout`` seconds, waking early on input or finish.

        Only a line arriving while idle or the finish signal wakes a waiter,
        so a steady stream of lines does not multiply clock wakeups. When
        ``snapshot`` is given and a line arrived after it was taken, returns
        immediately instead of missing that wakeup.
        """
        with self._cond:
            if self._finished:
                return
            if snapshot is not None and snapshot.line_seq != self._line_seq:
                return
            self._cond.wait(timeout=min(max(0.0, timeout), threading.TIMEOUT_MAX))
