"""
Canonical binary codec (DAG-CBOR) and content identifiers.

Maps are written with keys sorted length-first then bytewise, integers in
their shortest form and floats as 64-bit doubles, so the same value always
produces the same bytes.
"""
import base64
import hashlib
import logging
import math
from dataclasses import dataclass
from typing import Any

import cbor2

from .exceptions import DecodeError

logger = logging.getLogger(__name__)

# multicodec / multihash codes
CID_VERSION = 0x01
DAG_CBOR_CODE = 0x71
SHA2_256_CODE = 0x12
SHA2_256_LENGTH = 0x20


@dataclass(frozen=True)
class ContentId:
    """CIDv1 over a DAG-CBOR block hashed with sha2-256."""
    digest: bytes

    @property
    def bytes(self) -> bytes:
        return bytes([CID_VERSION, DAG_CBOR_CODE, SHA2_256_CODE, SHA2_256_LENGTH]) + self.digest

    def __str__(self) -> str:
        # multibase 'b' = lowercase base32, no padding
        return "b" + base64.b32encode(self.bytes).decode("ascii").lower().rstrip("=")


def _sort_key(key: str) -> tuple:
    encoded = key.encode("utf-8")
    return (len(encoded), encoded)


def _canonicalize(value: Any) -> Any:
    if isinstance(value, dict):
        for key in value:
            if not isinstance(key, str):
                raise TypeError(f"map keys must be strings, got {type(key).__name__}")
        return {key: _canonicalize(value[key]) for key in sorted(value, key=_sort_key)}
    if isinstance(value, (list, tuple)):
        return [_canonicalize(item) for item in value]
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise ValueError("NaN and Infinity cannot be encoded")
        # numbers without a fractional part are integers on the wire
        if value.is_integer():
            return int(value)
        return value
    if isinstance(value, bytearray):
        return bytes(value)
    if value is None or isinstance(value, (bool, int, str, bytes, cbor2.CBORTag)):
        return value
    raise TypeError(f"cannot encode value of type {type(value).__name__}")


def encode(value: Any) -> bytes:
    """
    Encode a JSON-like value as canonical DAG-CBOR bytes.

    Raises:
        TypeError: If the value holds a type with no DAG-CBOR representation
        ValueError: If the value holds NaN or Infinity
    """
    return cbor2.dumps(_canonicalize(value))


def decode(data: bytes) -> Any:
    """
    Decode DAG-CBOR bytes.

    Raises:
        DecodeError: If the bytes are not valid CBOR
    """
    try:
        return cbor2.loads(bytes(data))
    except (cbor2.CBORDecodeError, ValueError, TypeError) as e:
        raise DecodeError(f"Invalid binary payload: {e}") from e


def hash_bytes(data: bytes) -> bytes:
    """sha2-256 digest of the given bytes."""
    return hashlib.sha256(bytes(data)).digest()


def block_cid(block: bytes) -> ContentId:
    """Content identifier of an already encoded block."""
    return ContentId(hash_bytes(block))


def create_cid(value: Any) -> ContentId:
    """Content identifier of a value: CIDv1(dag-cbor, sha2-256(encode(value)))."""
    return block_cid(encode(value))
