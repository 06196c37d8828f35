"""
Utility functions for the VSC client.
"""
import base64
import binascii

from .exceptions import DecodeError


def bytes_to_base64url(data: bytes) -> str:
    """
    Encode bytes as URL-safe base64 without padding.

    Args:
        data: Raw bytes

    Returns:
        base64url text ('+' -> '-', '/' -> '_', '=' stripped)
    """
    return base64.b64encode(bytes(data)).decode("ascii").replace("+", "-").replace("/", "_").rstrip("=")


def base64url_to_bytes(text: str) -> bytes:
    """
    Decode URL-safe base64 text (padding optional) to bytes.

    Args:
        text: base64url text

    Returns:
        Decoded bytes

    Raises:
        DecodeError: If the text is not valid base64 after restoring the standard alphabet
    """
    if not isinstance(text, str):
        raise DecodeError(f"base64url input must be str, got {type(text).__name__}")

    standard = text.replace("-", "+").replace("_", "/")
    standard += "=" * (-len(standard) % 4)
    try:
        return base64.b64decode(standard, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Invalid base64url data: {e}") from e


def hex_to_bytes(hex_string: str) -> bytes:
    """
    Convert a hex string (optionally 0x-prefixed) to bytes.

    Raises:
        ValueError: If the hex string length is not even or contains non-hex characters
    """
    if hex_string.startswith(("0x", "0X")):
        hex_string = hex_string[2:]
    if len(hex_string) % 2 != 0:
        raise ValueError("Hex string must have an even length")
    return bytes.fromhex(hex_string)
