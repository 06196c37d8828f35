"""
Decentralized identities able to sign transaction containers.
"""
import logging
from typing import Any, Protocol, runtime_checkable

import base58
import jwt
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey, Ed25519PublicKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from .. import codec
from .jws import DagJWSResult, GeneralJWS, JWSSignature

logger = logging.getLogger(__name__)

# multicodec prefix for an Ed25519 public key
ED25519_MULTICODEC = b"\xed\x01"


@runtime_checkable
class DidSigner(Protocol):
    """Protocol for DID handles used by offchain login"""
    id: str
    authenticated: bool

    def create_dag_jws(self, payload: Any) -> DagJWSResult:
        """Encode payload as DAG-CBOR and sign its CID as a detached JWS"""
        ...


def derive_did_from_pubkey(public_key: bytes) -> str:
    """
    Derive a did:key from an Ed25519 public key.

    Args:
        public_key: Raw Ed25519 public key bytes

    Returns:
        did:key identifier
    """
    multicodec_key = ED25519_MULTICODEC + public_key
    # 'z' is the multibase prefix for base58btc
    encoded = base58.b58encode(multicodec_key).decode("ascii")
    return f"did:key:z{encoded}"


class Ed25519KeyDid:
    """
    did:key identity backed by an Ed25519 private key.

    Signs with EdDSA; the JWS key id is ``did:key:z...#z...``.
    """

    authenticated = True

    def __init__(self, private_key: Ed25519PrivateKey):
        self._private_key = private_key
        self._public_key_bytes = private_key.public_key().public_bytes(
            Encoding.Raw, PublicFormat.Raw
        )
        self.id = derive_did_from_pubkey(self._public_key_bytes)
        logger.debug("Loaded DID %s…", self.id[:12])

    @classmethod
    def from_seed(cls, seed: bytes) -> "Ed25519KeyDid":
        """Create an identity from a 32-byte seed."""
        if len(seed) != 32:
            raise ValueError(f"seed must be 32 bytes, got {len(seed)}")
        return cls(Ed25519PrivateKey.from_private_bytes(bytes(seed)))

    @classmethod
    def generate(cls) -> "Ed25519KeyDid":
        """Create an identity with a freshly generated key."""
        return cls(Ed25519PrivateKey.generate())

    @property
    def public_key(self) -> Ed25519PublicKey:
        return self._private_key.public_key()

    @property
    def kid(self) -> str:
        return f"{self.id}#{self.id.split(':')[2]}"

    def create_dag_jws(self, payload: Any) -> DagJWSResult:
        """
        Sign a payload as a detached DAG-JWS.

        The payload is encoded as DAG-CBOR; the JWS payload is the CID of that
        block and the signature covers ``protected.payload``.

        Args:
            payload: JSON-like value to sign

        Returns:
            DagJWSResult with the general JWS and the encoded block
        """
        block = codec.encode(payload)
        cid = codec.block_cid(block)

        token = jwt.PyJWS().encode(
            cid.bytes,
            self._private_key,
            algorithm="EdDSA",
            headers={"kid": self.kid, "typ": None},
        )
        protected, encoded_payload, signature = token.split(".")

        jws = GeneralJWS(
            payload=encoded_payload,
            signatures=[JWSSignature(protected=protected, signature=signature)],
            link=cid,
        )
        return DagJWSResult(jws=jws, linked_block=block)
