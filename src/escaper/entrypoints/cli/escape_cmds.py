"""ESCAPER escaping commands.

One command per output context. Each reads TEXT from its argument or, when
omitted, raw bytes from stdin (so legacy-encoded files can be piped in with
``--encoding``), and writes the escaped result to **stdout**.

Failure modes
- Unsupported ``--encoding`` / ``ESCAPER_ENCODING`` → usage error (exit code 2).
- Malformed input sequences → warning on stderr; escaping still completes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from escaper import config
from escaper.domain.errors import InvalidConfigurationError
from escaper.domain.value_objects import EscapeContext
from escaper.engine import Escaper

from .helpers import warn

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

MALFORMED_INPUT_MSG = (
    "Input contained {count} malformed byte sequence(s) for encoding "
    "'{encoding}'."
)


def _encoding_option(func: Callable) -> Callable:
    return click.option(
        "--encoding",
        "-e",
        "encoding",
        default=config.DEFAULT_ENCODING,
        envvar=config.ENCODING_ENVVAR,
        show_default=True,
        show_envvar=True,
        help="Source encoding of the input (see 'escaper encodings').",
    )(func)


def _newline_option(func: Callable) -> Callable:
    return click.option(
        "--strip-newline/--keep-newline",
        "strip_newline",
        default=True,
        show_default=True,
        help="Drop one trailing line break from stdin input before escaping.",
    )(func)


def _build_escaper(encoding: str) -> Escaper:
    try:
        return Escaper(encoding)
    except InvalidConfigurationError as e:
        raise click.BadParameter(str(e), param_hint="'--encoding'") from e


def _read_input(text: str | None, strip_newline: bool) -> str | bytes:
    if text is not None:
        return text
    data = click.get_binary_stream("stdin").read()
    if strip_newline:
        data = data.removesuffix(b"\n").removesuffix(b"\r")
    return data


def _run(
    context: EscapeContext, text: str | None, encoding: str, strip_newline: bool
) -> None:
    esc = _build_escaper(encoding)
    data = _read_input(text, strip_newline)
    logger.debug(
        "Escaping %d %s for %s context",
        len(data),
        "character(s)" if isinstance(data, str) else "byte(s)",
        context.value,
    )
    if malformed := sum(unit.is_malformed for unit in esc.decode(data)):
        warn(MALFORMED_INPUT_MSG.format(count=malformed, encoding=esc.encoding))
    click.echo(esc.escape(data, context))


@click.command()
@click.argument("text", required=False)
@_encoding_option
@_newline_option
def html(text: str | None, encoding: str, strip_newline: bool) -> None:
    """Escape TEXT for HTML body content."""
    _run(EscapeContext.HTML, text, encoding, strip_newline)


@click.command()
@click.argument("text", required=False)
@_encoding_option
@_newline_option
def attr(text: str | None, encoding: str, strip_newline: bool) -> None:
    """Escape TEXT for an HTML attribute value."""
    _run(EscapeContext.HTML_ATTRIBUTE, text, encoding, strip_newline)


@click.command()
@click.argument("text", required=False)
@_encoding_option
@_newline_option
def js(text: str | None, encoding: str, strip_newline: bool) -> None:
    """Escape TEXT for a JavaScript string literal."""
    _run(EscapeContext.JS, text, encoding, strip_newline)


@click.command()
@click.argument("text", required=False)
@_encoding_option
@_newline_option
def css(text: str | None, encoding: str, strip_newline: bool) -> None:
    """Escape TEXT for a CSS token value."""
    _run(EscapeContext.CSS, text, encoding, strip_newline)


@click.command()
@click.argument("text", required=False)
@_encoding_option
@_newline_option
def url(text: str | None, encoding: str, strip_newline: bool) -> None:
    """Percent-encode TEXT for a URL component."""
    _run(EscapeContext.URL, text, encoding, strip_newline)


@click.command()
def encodings() -> None:
    """List supported source encodings and the Python codec each maps to."""
    width = max(map(len, config.SUPPORTED_ENCODINGS))
    for label, codec in config.SUPPORTED_ENCODINGS.items():
        click.echo(f"{label:<{width}}  {codec}")


ESCAPE_COMMANDS = (html, attr, js, css, url, encodings)
