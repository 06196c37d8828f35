"""
Tests for utility functions.
"""
import base64

import pytest

from vsc_client.exceptions import DecodeError
from vsc_client.utils import base64url_to_bytes, bytes_to_base64url, hex_to_bytes


def test_bytes_to_base64url_uses_url_alphabet():
    """'+' and '/' become '-' and '_'"""
    data = bytes([0xfb, 0xff, 0xbf])
    assert base64.b64encode(data) == b"+/+/"
    assert bytes_to_base64url(data) == "-_-_"


def test_bytes_to_base64url_strips_padding():
    assert bytes_to_base64url(b"a") == "YQ"
    assert bytes_to_base64url(b"ab") == "YWI"
    assert bytes_to_base64url(b"abc") == "YWJj"


@pytest.mark.parametrize("data", [b"", b"\x00", b"ab", bytes(range(256))])
def test_base64url_round_trip(data):
    """Zero-length and padded forms decode back to the same bytes"""
    assert base64url_to_bytes(bytes_to_base64url(data)) == data


def test_base64url_accepts_padded_input():
    assert base64url_to_bytes("YQ==") == b"a"


@pytest.mark.parametrize("text", ["abc$", "a", "YW*j", "!!!!"])
def test_base64url_rejects_malformed_input(text):
    with pytest.raises(DecodeError):
        base64url_to_bytes(text)


def test_base64url_rejects_non_string():
    with pytest.raises(DecodeError):
        base64url_to_bytes(b"YQ")


def test_hex_to_bytes():
    assert hex_to_bytes("deadbeef") == b"\xde\xad\xbe\xef"
    assert hex_to_bytes("0xDEADBEEF") == b"\xde\xad\xbe\xef"
    assert hex_to_bytes("") == b""


def test_hex_to_bytes_odd_length():
    with pytest.raises(ValueError, match="even length"):
        hex_to_bytes("abc")
