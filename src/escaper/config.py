"""Configuration utilities for ESCAPER.

This module centralizes the supported-encoding registry and small helpers
related to escaper configuration. Encoding labels are matched
case-insensitively and map onto the Python codec that implements them.
"""

import os
from types import MappingProxyType

from escaper.domain.errors import InvalidConfigurationError

ENCODING_ENVVAR = "ESCAPER_ENCODING"  # pragma: no mutate
DEFAULT_ENCODING = "utf-8"  # pragma: no mutate

# Supported labels and the Python codec each resolves to. Python has no
# dedicated KOI8-RU or eucJP-win codecs; the closest supersets are used.
SUPPORTED_ENCODINGS = MappingProxyType(
    {
        "iso-8859-1": "latin_1",
        "iso8859-1": "latin_1",
        "iso-8859-5": "iso8859_5",
        "iso8859-5": "iso8859_5",
        "iso-8859-15": "iso8859_15",
        "iso8859-15": "iso8859_15",
        "utf-8": "utf_8",
        "cp866": "cp866",
        "ibm866": "cp866",
        "866": "cp866",
        "cp1251": "cp1251",
        "windows-1251": "cp1251",
        "win-1251": "cp1251",
        "1251": "cp1251",
        "cp1252": "cp1252",
        "windows-1252": "cp1252",
        "1252": "cp1252",
        "koi8-r": "koi8_r",
        "koi8-ru": "koi8_u",
        "koi8r": "koi8_r",
        "big5": "big5",
        "950": "cp950",
        "gb2312": "gb2312",
        "936": "gbk",
        "big5-hkscs": "big5hkscs",
        "shift_jis": "shift_jis",
        "sjis": "shift_jis",
        "sjis-win": "cp932",
        "cp932": "cp932",
        "932": "cp932",
        "euc-jp": "euc_jp",
        "eucjp": "euc_jp",
        "eucjp-win": "euc_jp",
        "macroman": "mac_roman",
    }
)


def normalize_encoding(encoding: str) -> str:
    """Validate an encoding label and return its canonical (lower-cased) form.

    Args:
        encoding: Encoding label as supplied by the caller, e.g. ``"UTF-8"``.

    Returns:
        The lower-cased label, guaranteed to be a key of `SUPPORTED_ENCODINGS`.

    Raises:
        InvalidConfigurationError: If the label is empty or not supported.
    """
    label = encoding.strip().lower() if isinstance(encoding, str) else ""
    if label not in SUPPORTED_ENCODINGS:
        raise InvalidConfigurationError(encoding)
    return label


def get_codec_name(encoding: str) -> str:
    """Return the Python codec name for a supported encoding label.

    Raises:
        InvalidConfigurationError: If the label is empty or not supported.
    """
    return SUPPORTED_ENCODINGS[normalize_encoding(encoding)]


def get_default_encoding() -> str:
    """Get the default source encoding from the environment.

    Returns:
        The value of the `ESCAPER_ENCODING` environment variable, or
        ``"utf-8"`` when it is unset or empty.
    """
    return os.environ.get(ENCODING_ENVVAR) or DEFAULT_ENCODING
