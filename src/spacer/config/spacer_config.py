"""
Spacer configuration.

All timing values are in seconds unless otherwise specified.
The configuration is resolved once at startup and never mutated afterwards;
both the relay thread and the clock thread read it concurrently.
"""

from dataclasses import dataclass, replace
from typing import Optional

from ..errors import ConfigurationConflict

COLOR_MODES = ("auto", "never", "always")


@dataclass(frozen=True)
class SpacerConfig:
    """
    Immutable settings shared by the spacer clock and renderer.

    Prevents option values from being threaded through every call separately.
    """

    idle_threshold: float = 1.0
    """Seconds of input silence before a spacer becomes due"""

    fill_char: str = "━"
    """Single character repeated to fill the spacer line"""

    padding_lines: int = 0
    """Blank lines printed before and after every spacer"""

    fixed_width: Optional[int] = None
    """Total spacer width; None means use the terminal width"""

    align_right: bool = False
    """Put the timestamp on the right side of the fill"""

    timezone: Optional[str] = None
    """IANA zone name for the timestamp; None means local time"""

    color: str = "auto"
    """One of auto, never, always"""

    live: bool = False
    """Keep the spacer open and redraw the waiting time in place"""

    live_refresh: float = 0.25
    """Seconds between redraws of an open live spacer"""

    # Rendering constants
    fallback_width: int = 80
    """Width used when the terminal size cannot be determined"""

    elapsed_display_min: float = 0.1
    """Deltas at or below this many seconds are omitted from the spacer"""

    min_sleep: float = 0.01
    """Shortest wait between clock checks while counting down"""


# Global instance
DEFAULT_CONFIG = SpacerConfig()


def get_spacer_config() -> SpacerConfig:
    """
    Get the default spacer configuration instance.
    """
    return DEFAULT_CONFIG


def create_config(
    after: Optional[float] = None,
    dash: Optional[str] = None,
    padding: Optional[int] = None,
    width: Optional[int] = None,
    right: bool = False,
    timezone: Optional[str] = None,
    color: str = "auto",
    live: bool = False,
) -> SpacerConfig:
    """
    Create a validated spacer configuration.

    Args:
        after: Override the idle threshold in seconds
        dash: Override the fill character
        padding: Override the number of blank padding lines
        width: Fixed total spacer width
        right: Right-align the timestamp
        timezone: IANA timezone name
        color: Color mode (auto, never, always)
        live: Enable the live countdown

    Returns:
        SpacerConfig with custom values

    Raises:
        ConfigurationConflict: If a value is out of range
    """
    config = DEFAULT_CONFIG

    if after is not None:
        if not after > 0:
            raise ConfigurationConflict(f"--after must be positive, got {after}")
        config = replace(config, idle_threshold=float(after))
    if dash is not None:
        if len(dash) != 1:
            raise ConfigurationConflict(
                f"--dash must be a single character, got {dash!r}"
            )
        config = replace(config, fill_char=dash)
    if padding is not None:
        if padding < 0:
            raise ConfigurationConflict(f"--padding must not be negative, got {padding}")
        config = replace(config, padding_lines=padding)
    if width is not None:
        if width <= 0:
            raise ConfigurationConflict(f"--width must be positive, got {width}")
        config = replace(config, fixed_width=width)
    if color not in COLOR_MODES:
        raise ConfigurationConflict(f"Unknown color mode: {color}")

    return replace(
        config,
        align_right=right,
        timezone=timezone,
        color=color,
        live=live,
    )
