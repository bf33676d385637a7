"""Parsing of ``-L/--logger-level NAME=LEVEL`` options.

Values may come from repeated flags or from a single environment variable
holding a comma/space separated list. LEVEL is a standard logging level name
(case-insensitive) or its numeric value.
"""

import logging
import re
from collections.abc import Iterator

import click

DEFAULT_LIB_LEVELS = {"click_extra": logging.WARNING}

_SEPARATORS = re.compile(r"[,\s]+")


def _split_items(value: str | list[str] | tuple[str, ...]) -> Iterator[str]:
    """Yield non-empty NAME=LEVEL fragments from a string or sequence of strings."""
    chunks = [value] if isinstance(value, str) else value
    for chunk in chunks:
        yield from (item for item in _SEPARATORS.split(chunk) if item)


def _parse_level(level_str: str) -> int:
    level_str = level_str.strip()
    if level_str.isdigit():
        return int(level_str)
    level = logging.getLevelName(level_str.upper())
    if not isinstance(level, int):
        raise click.BadParameter(f"Invalid log level: {level_str}")
    return level


def parse_log_level(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: str | list[str] | tuple[str, ...],
) -> dict[str, int]:
    """Click callback turning NAME=LEVEL pairs into a ``{name: level}`` dict.

    Starts from `DEFAULT_LIB_LEVELS`; later items override earlier ones.

    Raises:
        click.BadParameter: If an item is not NAME=LEVEL or LEVEL is unknown.
    """
    levels = dict(DEFAULT_LIB_LEVELS)
    for item in _split_items(value):
        name, sep, level_str = item.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"Expected NAME=LEVEL, got {item!r}")
        levels[name.strip()] = _parse_level(level_str)
    return levels
