"""
UI Theme configuration: spacer segment styles and default glyphs.
"""

from typing import Dict

THEME: Dict[str, str] = {
    # Timestamp prefix
    "date": "green",
    "time": "yellow",
    # Deltas
    "elapsed": "blue",  # Since the previous spacer
    "waiting": "magenta",  # Live countdown on an open spacer
    # Fill run
    "fill": "dim",
    # Diagnostics
    "error": "bold red",
}

DEFAULT_DASH = "━"
