"""Codec-backed transcoder for legacy source encodings.

This module provides a Transcoder implementation that delegates the actual
byte mapping to Python's ``codecs`` registry. Encoding labels are resolved
through the supported-encoding registry in `escaper.config`, so only labels
from that fixed set are accepted.
"""

import codecs
import logging

from escaper import config
from escaper.domain.errors import UnsupportedEncodingError
from escaper.interfaces import transcoder

# pylint: disable=too-few-public-methods

logger = logging.getLogger(__name__)

REPLACEMENT_ERROR_HANDLER = "replace"  # pragma: no mutate


class CodecsTranscoder(transcoder.Transcoder):
    """Transcoder implementation using the standard library codec registry."""

    def supports(self, encoding: str) -> bool:
        codec = config.SUPPORTED_ENCODINGS.get(encoding)
        if codec is None:
            return False
        try:
            codecs.lookup(codec)
        except LookupError:
            return False
        return True

    def to_utf8(self, data: bytes, encoding: str) -> bytes:
        if not self.supports(encoding):
            raise UnsupportedEncodingError(encoding)
        codec = config.SUPPORTED_ENCODINGS[encoding]
        text = codecs.decode(data, codec, REPLACEMENT_ERROR_HANDLER)
        logger.debug("Transcoded %d byte(s) from %s (%s)", len(data), encoding, codec)
        return text.encode("utf-8")
