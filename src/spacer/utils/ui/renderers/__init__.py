"""
Renderers for spacer output.
"""

from .spacer import RenderedSpacer, SpacerRenderer

__all__ = ["RenderedSpacer", "SpacerRenderer"]
