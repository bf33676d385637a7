"""Context-aware output escaping.

`Escaper` is the public entry point of the package. It is configured once with
a source encoding and then escapes strings for one of five output contexts:
HTML body text, HTML attribute values, JavaScript string literals, CSS token
values, and URL components.

Instances hold no mutable state, so a single escaper can be shared freely
between threads.

Example:
    ```py
    >>> from escaper import Escaper
    >>> Escaper().escape_html_attribute("a b")
    'a&#x20;b'
    >>> Escaper("iso-8859-1").escape_url(b"Caf\\xe9")
    'Caf%C3%A9'
    ```
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypeAlias

from escaper import config
from escaper.adapters.transcoder import CodecsTranscoder
from escaper.domain import codepoints, rules
from escaper.domain.errors import InvalidConfigurationError
from escaper.domain.value_objects import DecodedUnit, EscapeContext

if TYPE_CHECKING:
    from escaper.interfaces.transcoder import Transcoder

logger = logging.getLogger(__name__)

Text: TypeAlias = str | bytes | bytearray | memoryview


def _is_ascii_digits(data: Text) -> bool:
    if isinstance(data, str):
        return data.isascii() and data.isdigit()
    return bytes(data).isdigit()


class Escaper:
    """Escape untrusted text for a specific output context.

    Args:
        encoding: Source encoding of byte input, matched case-insensitively
            against `escaper.config.SUPPORTED_ENCODINGS`. ``str`` input is
            already Unicode and ignores it.
        transcoder: Converter for non-UTF-8 byte input; defaults to a
            `CodecsTranscoder`.

    Raises:
        InvalidConfigurationError: If ``encoding`` is empty or unsupported, or
            the transcoder cannot convert from it.
    """

    __slots__ = ("_encoding", "_transcoder")

    def __init__(
        self,
        encoding: str = config.DEFAULT_ENCODING,
        transcoder: Transcoder | None = None,
    ) -> None:
        label = config.normalize_encoding(encoding)
        transcoder = transcoder or CodecsTranscoder()
        if label != codepoints.UTF8 and not transcoder.supports(label):
            raise InvalidConfigurationError(encoding)
        self._encoding = label
        self._transcoder = transcoder
        logger.debug(
            "Escaper configured: encoding=%s, transcoder=%s",
            label,
            type(transcoder).__name__,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(encoding={self._encoding!r})"

    @property
    def encoding(self) -> str:
        """Return the canonical (lower-cased) source encoding."""
        return self._encoding

    def get_encoding(self) -> str:
        """Return the canonical (lower-cased) source encoding."""
        return self._encoding

    def escape(self, text: Text, context: EscapeContext) -> str:
        """Escape ``text`` for the given output context.

        Args:
            text: Untrusted input, as ``str`` or as bytes in the configured encoding.
            context: Destination the result will be embedded in.

        Returns:
            The escaped string.
        """
        if context is EscapeContext.URL:
            return rules.escape_url_bytes(self._to_utf8(text))
        context_rules = rules.CODEPOINT_RULES[context]
        units = self.decode(text)
        if malformed := sum(unit.is_malformed for unit in units):
            logger.debug(
                "Input for %s context contained %d malformed sequence(s)",
                context.value,
                malformed,
            )
        return context_rules.escape_units(units)

    def decode(self, text: Text) -> list[DecodedUnit]:
        """Decode ``text`` into the codepoint units the escapers operate on.

        Malformed sequences appear as units without a codepoint.
        """
        return list(codepoints.iter_utf8(self._to_utf8(text)))

    def escape_html(self, text: Text) -> str:
        """Escape text for HTML body content.

        Only ``& < > " '`` are replaced; everything else is left as is.
        """
        return self.escape(text, EscapeContext.HTML)

    def escape_html_attribute(self, text: Text) -> str:
        """Escape text for an HTML attribute value.

        Every character other than ASCII letters, digits and ``, . - _`` is
        replaced by a character reference, so the result is also safe inside
        unquoted attributes. NUL, undefined control characters and malformed
        input become ``&#xFFFD;``.
        """
        return self.escape(text, EscapeContext.HTML_ATTRIBUTE)

    def escape_js(self, text: Text) -> str:
        """Escape text for a JavaScript string literal.

        Every character other than ASCII letters, digits and ``, . _`` is
        replaced by a ``\\xHH`` or ``\\uHHHH`` escape.
        """
        if not text or _is_ascii_digits(text):
            return self._as_str(text)
        return self.escape(text, EscapeContext.JS)

    def escape_css(self, text: Text) -> str:
        """Escape text for a CSS token value.

        Every character other than ASCII letters and digits is replaced by a
        ``\\HH `` escape, including its terminating space.
        """
        if not text or _is_ascii_digits(text):
            return self._as_str(text)
        return self.escape(text, EscapeContext.CSS)

    def escape_url(self, text: Text) -> str:
        """Percent-encode text for use as a URL component (path segment or query value)."""
        return self.escape(text, EscapeContext.URL)

    def _to_utf8(self, text: Text) -> bytes:
        return codepoints.to_utf8(text, self._encoding, self._transcoder)

    @staticmethod
    def _as_str(text: Text) -> str:
        return text if isinstance(text, str) else bytes(text).decode("ascii")
