"""Unit tests for the codec-backed transcoder adapter."""

import logging

import pytest

from escaper.adapters.transcoder import CodecsTranscoder
from escaper.domain.errors import UnsupportedEncodingError
from escaper.interfaces.transcoder import Transcoder


@pytest.fixture(name="transcoder")
def _transcoder():
    return CodecsTranscoder()


def test_is_a_transcoder(transcoder):
    assert isinstance(transcoder, Transcoder)


@pytest.mark.parametrize("label", ["iso-8859-1", "cp1251", "koi8-ru", "eucjp-win"])
def test_supports_registered_labels(transcoder, label):
    assert transcoder.supports(label)


@pytest.mark.parametrize("label", ["latin1", "ISO-8859-1", "", "klingon-8"])
def test_rejects_unregistered_labels(transcoder, label):
    """Labels must already be normalized and registered."""
    assert not transcoder.supports(label)


@pytest.mark.parametrize(
    ("data", "label", "expected"),
    [
        (b"Caf\xe9", "iso-8859-1", "Café"),
        (b"\xa4", "iso-8859-15", "€"),
        (b"\x80", "cp1252", "€"),
        (b"\xcf\xf0\xe8", "cp1251", "При"),
        (b"\xf0\xd2\xc9", "koi8-r", "При"),
        (b"\x82\xa0", "sjis", "あ"),
        (b"\x8e", "macroman", "é"),
    ],
)
def test_to_utf8(transcoder, data, label, expected):
    """Legacy bytes come back as their UTF-8 form."""
    assert transcoder.to_utf8(data, label) == expected.encode("utf-8")


def test_undecodable_bytes_become_replacement_character(transcoder):
    """Bytes the codec cannot map are replaced rather than raising."""
    assert transcoder.to_utf8(b"\x82", "sjis") == "�".encode("utf-8")


def test_to_utf8_rejects_unsupported(transcoder):
    with pytest.raises(UnsupportedEncodingError) as excinfo:
        transcoder.to_utf8(b"abc", "ebcdic")
    assert excinfo.value.encoding == "ebcdic"


def test_to_utf8_logs_at_debug(transcoder, caplog):
    caplog.set_level(logging.DEBUG, logger="escaper.adapters.transcoder")
    transcoder.to_utf8(b"abc", "cp1252")
    assert "Transcoded 3 byte(s) from cp1252 (cp1252)" in caplog.text
