"""Conversion between source byte strings and Unicode codepoints.

The converter has no knowledge of escaping rules. It turns caller input into
UTF-8 (delegating legacy encodings to a `Transcoder`), walks the UTF-8 bytes
one sequence at a time, and re-encodes single codepoints to UTF-8.

Malformed sequences never raise: each one is reported as a `DecodedUnit`
without a codepoint, covering the longest prefix that could have started a
valid sequence (at least one byte), and decoding resumes right after it.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from escaper.domain.errors import InvalidCodepointError, UnsupportedEncodingError
from escaper.domain.value_objects import DecodedUnit

if TYPE_CHECKING:
    from escaper.interfaces.transcoder import Transcoder

UTF8 = "utf-8"
MAX_CODEPOINT = 0x10FFFF
REPLACEMENT_CHARACTER = 0xFFFD

# Lone surrogates in a ``str`` are kept as (invalid) three-byte sequences so the
# walker reports them as malformed instead of the encoder raising.
SURROGATE_ERROR_HANDLER = "surrogatepass"  # pragma: no mutate

_CONTINUATION_MIN = 0x80
_CONTINUATION_MAX = 0xBF


def _lead_byte_entry(lead: int) -> tuple[int, int, int, int] | None:
    """Describe the sequence a lead byte starts.

    Returns ``(length, payload_bits, second_min, second_max)`` or ``None`` if the
    byte can never start a well-formed sequence. The narrowed range for the second
    byte rejects overlong forms, surrogates, and values above U+10FFFF.
    """
    if lead < 0x80:
        return (1, lead, 0, 0)
    if 0xC2 <= lead <= 0xDF:
        return (2, lead & 0x1F, _CONTINUATION_MIN, _CONTINUATION_MAX)
    if 0xE0 <= lead <= 0xEF:
        second_min = 0xA0 if lead == 0xE0 else _CONTINUATION_MIN
        second_max = 0x9F if lead == 0xED else _CONTINUATION_MAX
        return (3, lead & 0x0F, second_min, second_max)
    if 0xF0 <= lead <= 0xF4:
        second_min = 0x90 if lead == 0xF0 else _CONTINUATION_MIN
        second_max = 0x8F if lead == 0xF4 else _CONTINUATION_MAX
        return (4, lead & 0x07, second_min, second_max)
    return None


LEAD_BYTES = tuple(_lead_byte_entry(byte) for byte in range(0x100))


def to_utf8(
    data: str | bytes | bytearray | memoryview,
    encoding: str = UTF8,
    transcoder: Transcoder | None = None,
) -> bytes:
    """Return ``data`` as a UTF-8 byte string.

    ``str`` input is already Unicode, so ``encoding`` does not apply to it.
    Byte input is returned unchanged for UTF-8 and converted by ``transcoder``
    for every other encoding.

    Args:
        data: Text or raw bytes in ``encoding``.
        encoding: Canonical source encoding label.
        transcoder: Converter used for non-UTF-8 byte input.

    Raises:
        UnsupportedEncodingError: If byte input needs transcoding and no
            transcoder is given.
    """
    if isinstance(data, str):
        return data.encode(UTF8, SURROGATE_ERROR_HANDLER)
    if encoding == UTF8:
        return bytes(data)
    if transcoder is None:
        raise UnsupportedEncodingError(encoding)
    return transcoder.to_utf8(bytes(data), encoding)


def _decode_at(data: bytes, position: int) -> DecodedUnit:
    entry = LEAD_BYTES[data[position]]
    if entry is None:
        return DecodedUnit(None, 1)
    length, codepoint, lower, upper = entry
    for offset in range(1, length):
        index = position + offset
        if index >= len(data) or not lower <= data[index] <= upper:
            return DecodedUnit(None, offset)
        codepoint = (codepoint << 6) | (data[index] & 0x3F)
        lower, upper = _CONTINUATION_MIN, _CONTINUATION_MAX
    return DecodedUnit(codepoint, length)


def iter_utf8(data: bytes) -> Iterator[DecodedUnit]:
    """Yield one `DecodedUnit` per UTF-8 sequence in ``data``."""
    position = 0
    while position < len(data):
        unit = _decode_at(data, position)
        yield unit
        position += unit.length


def decode(
    data: str | bytes | bytearray | memoryview,
    encoding: str = UTF8,
    transcoder: Transcoder | None = None,
) -> Iterator[DecodedUnit]:
    """Decode caller input into a sequence of codepoint units.

    Args:
        data: Text or raw bytes in ``encoding``.
        encoding: Canonical source encoding label.
        transcoder: Converter used for non-UTF-8 byte input.

    Returns:
        An iterator of `DecodedUnit`; ``length`` counts UTF-8 bytes.
    """
    return iter_utf8(to_utf8(data, encoding, transcoder))


def encode_codepoint(codepoint: int) -> bytes:
    """Encode a single codepoint as UTF-8.

    Args:
        codepoint: Integer in ``[0, 0x10FFFF]``.

    Returns:
        The 1 to 4 byte UTF-8 sequence.

    Raises:
        InvalidCodepointError: If ``codepoint`` is outside the Unicode range.
    """
    if codepoint < 0:
        raise InvalidCodepointError(codepoint)
    if codepoint < 0x80:
        return bytes((codepoint,))
    if codepoint < 0x800:
        return bytes((codepoint >> 6 & 0x1F | 0xC0, codepoint & 0x3F | 0x80))
    if codepoint < 0x10000:
        return bytes(
            (
                codepoint >> 12 & 0x0F | 0xE0,
                codepoint >> 6 & 0x3F | 0x80,
                codepoint & 0x3F | 0x80,
            )
        )
    if codepoint <= MAX_CODEPOINT:
        return bytes(
            (
                codepoint >> 18 & 0x07 | 0xF0,
                codepoint >> 12 & 0x3F | 0x80,
                codepoint >> 6 & 0x3F | 0x80,
                codepoint & 0x3F | 0x80,
            )
        )
    raise InvalidCodepointError(codepoint)
