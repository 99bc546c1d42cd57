"""
Core terminal infrastructure.

Terminal size queries live here so renderers never touch the OS directly.
"""

from .resize_handler import get_terminal_size, get_terminal_width, query_terminal_size

__all__ = ["get_terminal_size", "get_terminal_width", "query_terminal_size"]
