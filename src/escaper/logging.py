"""Logging setup for the ESCAPER command line.

Library modules only create module-level loggers; routing is decided here,
once per CLI invocation, from a `LoggingSettings` value:

- a Rich console handler on stderr, whose threshold follows ``-v``/``-q``;
- an optional "flight recorder": a memory buffer of recent records at DEBUG
  granularity that is written to a file once a WARNING arrives (or on exit
  when forced);
- per-logger minimum levels, e.g. to quiet a chatty dependency.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from dataclasses import dataclass, field
from importlib import metadata
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

from rich.console import Console
from rich.logging import RichHandler

from escaper import config

if TYPE_CHECKING:
    from logging import Handler, Logger

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "escaper"
BASE_LEVEL = logging.WARNING
LEVEL_STEP = 10

CONSOLE_FORMAT = "%(prefix)s %(message)s"  # pragma: no mutate
DEBUG_CONSOLE_FORMAT = "%(asctime)s %(name)s: %(message)s"  # pragma: no mutate
FLIGHT_RECORDER_FORMAT = (
    "[%(asctime)s] [%(process)d:%(threadName)s] "
    "%(levelname)s %(name)s:%(lineno)d: %(message)s"
)  # pragma: no mutate

ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]


def console_level(verbose: int = 0, quiet: int = 0) -> int:
    """Return the console threshold for the given ``-v``/``-q`` counts.

    Each repetition moves one level away from WARNING; the result is clamped
    to the DEBUG..CRITICAL range.
    """
    level = BASE_LEVEL + LEVEL_STEP * (quiet - verbose)
    return max(logging.DEBUG, min(logging.CRITICAL, level))


@dataclass(frozen=True)
class LoggingSettings:
    """Everything the CLI decides about logging for one invocation.

    Attributes:
        level: Console threshold (see `console_level`).
        debug: Developer mode: console shows DEBUG with timestamps and sources.
        color: Whether the console may use ANSI colors.
        log_path: File the flight recorder writes to.
        flight_recorder: Whether the flight recorder is attached at all.
        capacity: Number of records the flight recorder buffers.
        force_flush: Write the buffer on exit even without a WARNING.
        logger_levels: Minimum level per logger name.
    """

    level: int = BASE_LEVEL
    debug: bool = False
    color: bool = True
    log_path: Path | None = None
    flight_recorder: bool = True
    capacity: int = 2000
    force_flush: bool = False
    logger_levels: dict[str, int] = field(default_factory=dict)

    @property
    def records_to_file(self) -> bool:
        return self.flight_recorder and self.log_path is not None


class ThirdPartyPrefixFilter(logging.Filter):
    """Tag records from loggers outside the project with their top-level package.

    ``click_extra.commands`` becomes ``[click_extra]``; escaper's own records
    get an empty prefix. Records are never dropped.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith(PROJECT_PREFIX):
            record.prefix = ""
        else:
            record.prefix = f"[{record.name.split('.')[0]}]"
        return True


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Build the stderr console handler.

    Args:
        level: Minimum level shown on the console. Ignored in debug mode,
            which always shows DEBUG.
        debug_mode: Show timestamps, logger names and source locations.
        color: Allow colored output (mirrors Click-Extra's ``--color/--no-color``).
    """
    color_system: ColorSystem | None = "auto" if color else None
    handler = RichHandler(
        level=logging.DEBUG if debug_mode else level,
        console=Console(color_system=color_system, stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )
    if debug_mode:
        handler.setFormatter(logging.Formatter(fmt=DEBUG_CONSOLE_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT))
        handler.addFilter(ThirdPartyPrefixFilter())
    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Build a memory-buffered handler that writes to ``path`` on demand.

    The file is truncated when the handler is built. Missing parent
    directories are created.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FLIGHT_RECORDER_FORMAT))
    return MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=file_handler,
        flushOnClose=flush_on_close,
    )


def build_handlers(settings: LoggingSettings) -> list[Handler]:
    """Create the console handler and, if enabled, the flight recorder."""
    handlers: list[Handler] = [
        config_console_handler(
            level=settings.level, debug_mode=settings.debug, color=settings.color
        )
    ]
    if settings.flight_recorder and settings.log_path is not None:
        handlers.append(
            config_flight_recorder(
                settings.log_path,
                capacity=settings.capacity,
                flush_on_close=settings.force_flush,
            )
        )
    return handlers


def configure_logging(settings: LoggingSettings) -> list[Handler]:
    """Install handlers on the root logger and apply per-logger levels.

    The root logger passes everything; each handler applies its own
    threshold. Previously installed root handlers are closed and replaced.

    Returns:
        The handlers now attached to the root logger.
    """
    handlers = build_handlers(settings)
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    for name, level in settings.logger_levels.items():
        logging.getLogger(name).setLevel(level)
    return handlers


def log_startup(
    logger: Logger,
    settings: LoggingSettings,
    handlers: list[Handler],
    app_version: str,
) -> None:
    """Log a one-line summary at INFO, then environment diagnostics at DEBUG."""
    logger.info(
        "ESCAPER %s - console=%s, flight-recorder=%s",
        app_version,
        logging.getLevelName(settings.level),
        "ON" if settings.records_to_file else "OFF",
    )

    diagnostics: list[tuple[str, tuple[object, ...]]] = [
        ("Python: %s", (sys.version.split()[0],)),
        ("Platform: %s %s", (platform.system(), platform.release())),
        ("PID: %s", (os.getpid(),)),
        ("CWD: %s", (Path.cwd(),)),
        ("Click: %s", (_distribution_version("click"),)),
        ("Rich: %s", (_distribution_version("rich"),)),
        (
            "Default encoding: %s (%d supported)",
            (config.get_default_encoding(), len(config.SUPPORTED_ENCODINGS)),
        ),
        ("Handlers: %s", ([type(h).__name__ for h in handlers],)),
    ]
    if settings.records_to_file:
        diagnostics.append(
            (
                "Flight recorder: path=%s, capacity=%s, flush_on_close=%s",
                (settings.log_path, settings.capacity, settings.force_flush),
            )
        )
    diagnostics.append(
        (
            "Per-logger overrides: %s",
            (
                {
                    name: logging.getLevelName(level)
                    for name, level in settings.logger_levels.items()
                }
                or "<none>",
            ),
        )
    )
    for message, args in diagnostics:
        logger.debug(message, *args)


def _distribution_version(name: str) -> str:
    try:
        return metadata.version(name)
    except metadata.PackageNotFoundError:  # pragma: no cover
        return "<unknown>"
