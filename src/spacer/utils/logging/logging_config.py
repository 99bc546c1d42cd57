"""
Centralized logging configuration.

Diagnostics always go to stderr so they never mix with the relayed stream on
stdout.
"""

import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_ENV = "SPACER_LOG"

_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "off": logging.CRITICAL + 1,
}

_handler: Optional[RichHandler] = None


def level_from_env(default: int = logging.WARNING) -> int:
    """Read the log level named by SPACER_LOG, if set and recognised."""
    value = os.environ.get(LOG_LEVEL_ENV, "").strip().lower()
    return _LEVELS.get(value, default)


def make_error_console(color: str = "auto") -> Console:
    """Console bound to stderr for diagnostics."""
    if color == "never":
        return Console(stderr=True, color_system=None, no_color=True)
    if color == "always":
        return Console(stderr=True, force_terminal=True)
    return Console(stderr=True)


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """
    Configure the spacer logger to write through Rich on stderr.

    Args:
        verbose: If True, log debug records. Otherwise the level comes from
            SPACER_LOG and defaults to warnings only.
        console: Stderr console to log through
    """
    global _handler

    level = logging.DEBUG if verbose else level_from_env()

    logger = logging.getLogger("spacer")
    if _handler is not None:
        logger.removeHandler(_handler)

    _handler = RichHandler(
        console=console or make_error_console(),
        show_path=verbose,
        show_time=verbose,
        markup=False,
        rich_tracebacks=True,
    )
    _handler.setLevel(level)
    logger.addHandler(_handler)
    logger.setLevel(level)
    logger.propagate = False
