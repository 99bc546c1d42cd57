"""
Terminal output for spacer: rendering, formatting, and the shared sink.
"""

from .formatters import format_elapsed
from .output_sink import OutputSink, make_console
from .renderers import RenderedSpacer, SpacerRenderer
from .theme import DEFAULT_DASH, THEME

__all__ = [
    "DEFAULT_DASH",
    "OutputSink",
    "RenderedSpacer",
    "SpacerRenderer",
    "THEME",
    "format_elapsed",
    "make_console",
]
