"""
Spacer line renderer.

Builds the styled text of one spacer line: a date/time prefix, an optional
humanized delta since the previous spacer, and a fill run sized to the
target width.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Callable, List, Optional, Tuple

from rich.text import Text

from ....config import SpacerConfig
from ..core import get_terminal_width
from ..formatters import format_elapsed
from ..theme import THEME


@dataclass(frozen=True)
class RenderedSpacer:
    """One rendered spacer, ready for the output sink."""

    text: Text
    padding: int = 0
    carriage_return: bool = False
    stamp: Tuple[str, str] = ("", "")

    @property
    def plain(self) -> str:
        """The spacer line without styling or control characters."""
        return self.text.plain


class SpacerRenderer:
    """Format spacer lines from the current time and configuration."""

    def __init__(
        self,
        config: SpacerConfig,
        tz: Optional[tzinfo] = None,
        width_provider: Optional[Callable[[], int]] = None,
        wall_clock: Optional[Callable[[Optional[tzinfo]], datetime]] = None,
    ) -> None:
        self._config = config
        self._tz = tz
        self._width_provider = width_provider or (
            lambda: get_terminal_width(config.fallback_width)
        )
        self._wall_clock = wall_clock or datetime.now

    def target_width(self) -> int:
        """Fixed width if configured, else the terminal width right now."""
        if self._config.fixed_width is not None:
            return self._config.fixed_width
        return self._width_provider()

    def timestamp(self) -> Tuple[str, str]:
        """
        Return the (date, time) strings for the current wall-clock time.

        The time carries the zone abbreviation when a zone was configured.
        """
        if self._tz is None:
            now = self._wall_clock(None)
            return now.strftime("%Y-%m-%d"), now.strftime("%H:%M:%S")
        now = self._wall_clock(self._tz)
        return now.strftime("%Y-%m-%d"), now.strftime("%H:%M:%S %Z")

    def prefix_segments(
        self,
        now: float,
        previous: Optional[float],
        waiting: Optional[float] = None,
        stamp: Optional[Tuple[str, str]] = None,
    ) -> List[Tuple[str, str]]:
        """Build the prefix as (text, style) pairs, each followed by a space."""
        date_str, time_str = stamp or self.timestamp()
        segments = [(date_str, THEME["date"]), (time_str, THEME["time"])]

        if previous is not None:
            elapsed = now - previous
            if elapsed > self._config.elapsed_display_min:
                segments.append((format_elapsed(elapsed), THEME["elapsed"]))

        if waiting is not None:
            segments.append((format_elapsed(max(0.0, waiting)), THEME["waiting"]))

        return segments

    def render(
        self,
        now: float,
        previous: Optional[float] = None,
        waiting: Optional[float] = None,
        stamp: Optional[Tuple[str, str]] = None,
    ) -> RenderedSpacer:
        """
        Render one spacer line.

        Args:
            now: Current monotonic time
            previous: Monotonic time of the previous spacer, if any
            waiting: Seconds an open live spacer has been shown, if any
            stamp: Reuse a previously rendered (date, time) pair

        Returns:
            RenderedSpacer with the styled line and its layout flags
        """
        segments = self.prefix_segments(now, previous, waiting, stamp)
        prefix_len = sum(len(text) + 1 for text, _ in segments)
        fill_width = max(0, self.target_width() - prefix_len)
        fill = self._config.fill_char * fill_width

        line = Text()
        if self._config.align_right:
            line.append(fill, style=THEME["fill"])
            for text, style in segments:
                line.append(" ")
                line.append(text, style=style)
        else:
            for text, style in segments:
                line.append(text, style=style)
                line.append(" ")
            line.append(fill, style=THEME["fill"])

        return RenderedSpacer(
            text=line,
            padding=self._config.padding_lines,
            carriage_return=self._config.align_right,
            stamp=(segments[0][0], segments[1][0]),
        )
