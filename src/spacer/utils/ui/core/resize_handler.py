"""
Terminal size helpers.

The spacer width is recomputed on every render, so the size is queried on
demand instead of being tracked through a resize signal handler.
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Tuple

from ....errors import TerminalSizeUnavailable

logger = logging.getLogger(__name__)

DEFAULT_SIZE: Tuple[int, int] = (80, 24)


def query_terminal_size(fd: Optional[int] = None) -> Tuple[int, int]:
    """
    Query the size of the terminal attached to ``fd`` (stdout by default).

    Raises:
        TerminalSizeUnavailable: If ``fd`` is not a terminal
    """
    try:
        size = os.get_terminal_size() if fd is None else os.get_terminal_size(fd)
    except (OSError, ValueError) as e:
        raise TerminalSizeUnavailable(str(e)) from e
    if size.columns <= 0:
        raise TerminalSizeUnavailable("terminal reported zero columns")
    return (size.columns, size.lines)


def get_terminal_size(fallback: Tuple[int, int] = DEFAULT_SIZE) -> Tuple[int, int]:
    """
    Get the current terminal size.

    Args:
        fallback: Returned if the terminal size cannot be determined

    Returns:
        Tuple of (columns, rows)
    """
    try:
        return query_terminal_size()
    except TerminalSizeUnavailable:
        return fallback


def get_terminal_width(fallback: int = DEFAULT_SIZE[0]) -> int:
    """Return the current terminal width in columns."""
    cols, _ = get_terminal_size((fallback, DEFAULT_SIZE[1]))
    logger.debug("terminal width: %d", cols)
    return cols
