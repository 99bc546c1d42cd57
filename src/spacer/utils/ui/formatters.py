"""
Data formatting utilities for spacer lines.
"""

from typing import Tuple

_MINUTE = 60.0
_HOUR = 60.0 * _MINUTE
_DAY = 24.0 * _HOUR

# Largest unit first; the first unit with a value of at least 1.0 wins.
_UNITS: Tuple[Tuple[float, str], ...] = (
    (365.0 * _DAY, "y"),
    (30.0 * _DAY, "mo"),
    (7.0 * _DAY, "w"),
    (_DAY, "d"),
    (_HOUR, "h"),
    (_MINUTE, "m"),
)


def format_elapsed(seconds: float) -> str:
    """
    Format an elapsed duration in its largest whole unit.

    Args:
        seconds: Duration in seconds

    Returns:
        One-decimal duration with a unit suffix, e.g. ``1.5m`` or ``2.0h``
    """
    for unit_seconds, suffix in _UNITS:
        value = seconds / unit_seconds
        if value >= 1.0:
            return f"{value:.1f}{suffix}"
    return f"{seconds:.1f}s"
