"""
Main entry point for spacer.

Relays stdin to stdout and prints a spacer line whenever the input goes quiet.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import IO, Iterable, List, Optional

from rich.markup import escape

from . import __version__
from .config import DEFAULT_CONFIG, SpacerConfig, create_config, resolve_timezone
from .errors import ConfigurationConflict, OutputWriteError, SpacerError
from .services import ClockState, ClockStats, LineRelay, SpacerClock
from .utils.logging.logging_config import make_error_console, setup_logging
from .utils.ui import DEFAULT_DASH, THEME, OutputSink, SpacerRenderer, make_console

logger = logging.getLogger(__name__)


def run(
    input_stream: Iterable[str],
    output_stream: Optional[IO[str]] = None,
    config: SpacerConfig = DEFAULT_CONFIG,
) -> ClockStats:
    """
    Relay ``input_stream`` to ``output_stream`` with spacers on idle gaps.

    Args:
        input_stream: Iterable of lines, terminators included
        output_stream: Destination text stream (stdout when None)
        config: Resolved spacer configuration

    Returns:
        Counters from the spacer clock

    Raises:
        SpacerError: If reading, writing, or rendering fails
    """
    console = make_console(output_stream, config.color)
    renderer = SpacerRenderer(config, tz=resolve_timezone(config.timezone))

    state = ClockState()
    sink = OutputSink(console)
    clock = SpacerClock(state, sink, renderer, config)
    relay = LineRelay(state, sink, health_check=clock.raise_if_failed)

    clock.start()
    try:
        relay.run(input_stream)
    finally:
        state.mark_finished()
        clock.join()

    clock.raise_if_failed()
    return clock.stats


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spacer",
        description="Insert a spacer line into piped output whenever it goes quiet",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-a",
        "--after",
        type=float,
        default=DEFAULT_CONFIG.idle_threshold,
        help="Minimum number of seconds that have to pass before a spacer is printed",
    )
    parser.add_argument(
        "-d",
        "--dash",
        type=str,
        default=DEFAULT_DASH,
        help="Which character to use as a spacer",
    )
    parser.add_argument(
        "-p",
        "--padding",
        type=int,
        default=DEFAULT_CONFIG.padding_lines,
        help="Number of newlines to print before and after spacer lines",
    )
    parser.add_argument(
        "-w",
        "--width",
        type=int,
        default=None,
        help="Number of characters to print on a spacer line",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Force the output to not be colorized",
    )
    parser.add_argument(
        "--force-color",
        action="store_true",
        help="Force the output to be colorized, even if the output is not a TTY",
    )
    parser.add_argument(
        "--right",
        action="store_true",
        help="Put the timestamp on the right side of the spacer",
    )
    parser.add_argument(
        "--timezone",
        type=str,
        default=None,
        help="Print timestamp in an arbitrary timezone (IANA format, e.g. Europe/London)",
    )
    parser.add_argument(
        "--live",
        action="store_true",
        help="Keep the spacer open and count up the time spent waiting",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log clock decisions to stderr",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def build_config(args: argparse.Namespace) -> SpacerConfig:
    """
    Map parsed arguments onto a SpacerConfig.

    Raises:
        ConfigurationConflict: If options contradict each other or are invalid
    """
    if args.no_color and args.force_color:
        raise ConfigurationConflict("Cannot use both --no-color and --force-color")

    if args.no_color:
        color = "never"
    elif args.force_color:
        color = "always"
    else:
        color = "auto"

    return create_config(
        after=args.after,
        dash=args.dash,
        padding=args.padding,
        width=args.width,
        right=args.right,
        timezone=args.timezone,
        color=color,
        live=args.live,
    )


def _prepare_streams() -> None:
    """Pass undecodable bytes and line endings through unchanged."""
    for stream in (sys.stdin, sys.stdout):
        if hasattr(stream, "reconfigure"):
            stream.reconfigure(errors="surrogateescape", newline="")


def _silence_stdout() -> None:
    """Point stdout at devnull so the interpreter's final flush cannot fail."""
    devnull = os.open(os.devnull, os.O_WRONLY)
    try:
        os.dup2(devnull, sys.stdout.fileno())
    except (OSError, ValueError):
        pass
    finally:
        os.close(devnull)


def cli(argv: Optional[List[str]] = None) -> None:
    """CLI entry point with argument parsing."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = build_config(args)
    except ConfigurationConflict as e:
        parser.error(str(e))

    err_console = make_error_console(config.color)
    setup_logging(verbose=args.verbose, console=err_console)
    logger.debug("config: %s", config)

    _prepare_streams()

    try:
        run(sys.stdin, sys.stdout, config)
    except KeyboardInterrupt:
        sys.exit(130)
    except OutputWriteError as e:
        if isinstance(e.__cause__, BrokenPipeError):
            _silence_stdout()
            sys.exit(1)
        err_console.print(f"[{THEME['error']}]Error: {escape(str(e))}[/]")
        sys.exit(1)
    except SpacerError as e:
        err_console.print(f"[{THEME['error']}]Error: {escape(str(e))}[/]")
        sys.exit(1)
    except Exception as e:
        err_console.print(
            f"[{THEME['error']}]spacer crashed: {escape(type(e).__name__)}: "
            f"{escape(str(e))}[/]"
        )
        if args.verbose:
            err_console.print_exception()
        else:
            err_console.print("Run with --verbose for a traceback.")
        sys.exit(1)


if __name__ == "__main__":
    cli()
