"""Interfaces for converting legacy-encoded bytes to UTF-8.

This module defines the Transcoder interface used by the codepoint converter
when the configured source encoding is not UTF-8. Implementations answer a
capability query (``supports``) and perform whole-string conversion
(``to_utf8``) using the standard mapping table of the named encoding.
"""

import abc

# pylint: disable=too-few-public-methods


class Transcoder(abc.ABC):
    """Interface for converting a byte string from a source encoding to UTF-8."""

    @abc.abstractmethod
    def supports(self, encoding: str) -> bool:
        """Return True if ``encoding`` can be converted by this transcoder.

        Args:
            encoding: Canonical encoding label (e.g. ``"iso-8859-1"``).
        """

    @abc.abstractmethod
    def to_utf8(self, data: bytes, encoding: str) -> bytes:
        """Convert ``data`` from ``encoding`` to UTF-8.

        Bytes with no mapping in the source encoding are replaced with
        U+FFFD rather than aborting the conversion.

        Args:
            data: Raw bytes in the source encoding.
            encoding: Canonical encoding label.

        Returns:
            The UTF-8 encoded byte string.

        Raises:
            UnsupportedEncodingError: If ``supports(encoding)`` is False.
        """
