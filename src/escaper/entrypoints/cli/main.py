"""ESCAPER CLI entry point.

Defines the top-level ``escaper`` command (via Click-Extra) and registers the
escaping subcommands.

Currently available commands
- ``escaper html|attr|js|css|url``: escape TEXT (or stdin) for one output context.
- ``escaper encodings``: list the supported source encodings.

Notes
- The CLI version is sourced from `escaper.__version__` and displayed
  automatically by Click-Extra (``--version``).
- Escaped text goes to stdout; logs and notices go to stderr.

Examples
    $ escaper attr 'x" onmouseover="alert(1)'
    $ printf 'Caf\\xe9' | escaper url -e iso-8859-1
"""

from __future__ import annotations

import functools
import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from platformdirs import user_log_dir

from escaper import __version__
from escaper.logging import (
    LoggingSettings,
    configure_logging,
    console_level,
    log_startup,
)

from .escape_cmds import ESCAPE_COMMANDS
from .helpers import parse_log_level

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

DEFAULT_LOG_PATH = Path(user_log_dir("escaper", appauthor=False)) / "latest.log"

HELP = """ESCAPER command-line interface.

    Escape untrusted text for embedding in HTML body text, HTML attribute values,
    JavaScript string literals, CSS token values, or URL components, following the
    OWASP contextual-escaping recommendations. Pick the subcommand matching the
    place the output will be written to.
    """

EPILOG = "\b\n" + "\n".join(
    [
        f"{click.style('Examples:', fg='blue', bold=True, underline=True)}",
        "  escaper html '<b>Tom & Jerry</b>'",
        "  escaper attr --encoding iso-8859-1 < name.txt",
        "  escaper url 'a b+c'",
    ]
)

# Applied top to bottom, so --help lists them in this order.
LOGGING_OPTIONS = (
    click.option(
        "--verbose",
        "-v",
        "verbose",
        count=True,
        help="Show one more level of log detail per repetition (default: WARNING).",
    ),
    click.option(
        "--quiet",
        "-q",
        "quiet",
        count=True,
        help="Show one less level of log detail per repetition.",
    ),
    click.option(
        "--debug/--no-debug",
        default=False,
        help="Developer mode: DEBUG console output with timestamps and sources.",
    ),
    click.option(
        "--log-path",
        type=click.Path(dir_okay=False, path_type=Path),
        default=DEFAULT_LOG_PATH,
        envvar="ESCAPER_LOG_PATH",
        show_default=True,
        show_envvar=True,
        help="File the flight recorder writes to.",
    ),
    click.option(
        "--flight-recorder-capacity",
        "capacity",
        type=click.IntRange(min=1),
        default=2000,
        hidden=True,
        envvar="ESCAPER_FLIGHT_RECORDER_CAPACITY",
        help="Number of log records the flight recorder keeps.",
    ),
    click.option(
        "--flight-recorder/--no-flight-recorder",
        default=True,
        envvar="ESCAPER_FLIGHT_RECORDER",
        show_envvar=True,
        help=(
            "Keep recent log records in memory at DEBUG granularity and write "
            "them to --log-path as soon as a WARNING is logged."
        ),
    ),
    click.option(
        "--force-flush/--no-force-flush",
        "force_flush",
        default=False,
        envvar="ESCAPER_FORCE_FLUSH_FLIGHT_RECORDER",
        show_default=True,
        show_envvar=True,
        help="Also write the flight recorder buffer when the program exits.",
    ),
    click.option(
        "-L",
        "--logger-level",
        "logger_levels",
        multiple=True,
        callback=parse_log_level,
        default=("click_extra=WARNING",),
        envvar="ESCAPER_LOGGER_LEVEL",
        show_default=True,
        show_envvar=True,
        help=(
            "Minimum level for a named logger, as NAME=LEVEL. Repeat the option "
            "or give a comma/space separated list in ESCAPER_LOGGER_LEVEL."
        ),
    ),
)


def logging_options(func: Callable) -> Callable:
    """Attach every option in `LOGGING_OPTIONS` to a command."""
    return functools.reduce(
        lambda f, option: option(f), reversed(LOGGING_OPTIONS), func
    )


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
    epilog=EPILOG,
)
@logging_options
@clickx.pass_context
def escaper(  # pylint: disable=too-many-arguments
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    debug: bool,
    log_path: Path,
    capacity: int,
    flight_recorder: bool,
    force_flush: bool,
    logger_levels: dict[str, int],
) -> None:
    """ESCAPER command-line interface."""
    settings = LoggingSettings(
        level=console_level(verbose, quiet),
        debug=debug,
        color=ctx.color is not False,
        log_path=log_path,
        flight_recorder=flight_recorder,
        capacity=capacity,
        force_flush=force_flush,
        logger_levels=logger_levels,
    )
    handlers = configure_logging(settings)
    log_startup(logger, settings, handlers, __version__)
    ctx.call_on_close(logging.shutdown)


for command in ESCAPE_COMMANDS:
    escaper.add_command(command)
