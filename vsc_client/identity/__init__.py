"""
Identity module for the VSC client.

This module provides DID handles for offchain login and the detached JWS
structures they produce.
"""
from .did import DidSigner, Ed25519KeyDid, derive_did_from_pubkey
from .jws import (
    DagJWSResult, GeneralJWS, JWSSignature,
    convert_tx_jws, decode_protected_header
)

__all__ = [
    'DidSigner',
    'Ed25519KeyDid',
    'derive_did_from_pubkey',
    'DagJWSResult',
    'GeneralJWS',
    'JWSSignature',
    'convert_tx_jws',
    'decode_protected_header',
]
