"""
Concurrent services: the background spacer clock and the foreground relay.
"""

from .line_relay import LineRelay
from .spacer_clock import ClockStats, SpacerClock
from .state import ClockSnapshot, ClockState

__all__ = [
    "ClockSnapshot",
    "ClockState",
    "ClockStats",
    "LineRelay",
    "SpacerClock",
]
