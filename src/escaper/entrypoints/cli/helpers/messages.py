"""Terminal message helpers for the ESCAPER CLI.

Escaped output goes to stdout so it can be piped; human-oriented notices are
written to stderr through these helpers, with an ASCII fallback for terminals
that cannot encode the emoji glyph.
"""

import click


def _supports_character(character: str) -> bool:
    """Return True if *character* can be encoded on stderr.

    The stream is looked up on every call because Click may swap it (e.g.,
    under ``CliRunner``).
    """
    stream = click.get_text_stream("stderr")  # pragma: no mutate
    encoding = getattr(stream, "encoding", None) or "ascii"
    try:
        character.encode(encoding)
    except (UnicodeEncodeError, LookupError):
        return False
    return True


def caution_glyph() -> str:
    """Warning marker: "⚠️" when stderr can encode it, "[!]" otherwise."""
    emoji, fallback = ("⚠️", "[!]")  # pragma: no mutate
    if _supports_character(emoji):
        return emoji
    return fallback


def warn(msg: str) -> None:
    """Emit a yellow, bold warning line to **stderr** with a caution glyph.

    Args:
        msg: The message to display.

    Example:
        ``⚠️  Input contained 1 malformed byte sequence(s).``
    """
    g = caution_glyph()
    click.secho(f"{g}  {msg}", fg="yellow", bold=True, err=True)
