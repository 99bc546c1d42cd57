"""
Shared state for the relay and clock threads.
"""

from .clock_state import ClockSnapshot, ClockState

__all__ = ["ClockSnapshot", "ClockState"]
