"""
Detached DAG-JWS structures and conversion helpers.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .. import codec
from ..exceptions import DecodeError
from ..utils import base64url_to_bytes, bytes_to_base64url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JWSSignature:
    """One entry of a general JWS signatures list."""
    protected: str
    signature: str


@dataclass(frozen=True)
class GeneralJWS:
    """General-serialization JWS whose payload is the CID of the linked block."""
    payload: str
    signatures: List[JWSSignature]
    link: Optional[codec.ContentId] = None


@dataclass(frozen=True)
class DagJWSResult:
    """A signed JWS together with the DAG-CBOR block it commits to."""
    jws: GeneralJWS
    linked_block: bytes


def decode_protected_header(protected: str) -> Dict[str, Any]:
    """
    Decode a JWS protected header (base64url -> UTF-8 -> JSON).

    Raises:
        DecodeError: If the header is not valid base64url JSON
    """
    raw = base64url_to_bytes(protected)
    try:
        header = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise DecodeError(f"Invalid JWS protected header: {e}") from e
    if not isinstance(header, dict):
        raise DecodeError("JWS protected header is not a JSON object")
    return header


def convert_tx_jws(tx: str, sig: str) -> List[Dict[str, Any]]:
    """
    Rebuild detached JWS objects from submitted ``tx`` and ``sig`` parameters.

    Only DID signature records (alg/kid/sig) are converted; EVM records carry
    no JWS form and are skipped. Nothing is verified.

    Args:
        tx: base64url DAG-CBOR transaction container
        sig: base64url DAG-CBOR signature container

    Returns:
        List of ``{"jws": {...}, "linked_block": bytes}`` dicts, one per signature
    """
    block = base64url_to_bytes(tx)
    sig_container = codec.decode(base64url_to_bytes(sig))
    if not isinstance(sig_container, dict) or not isinstance(sig_container.get("sigs"), list):
        raise DecodeError("Signature container has no sigs list")

    cid = codec.block_cid(block)
    output = []
    for record in sig_container["sigs"]:
        if not isinstance(record, dict) or "kid" not in record:
            continue
        kid = record["kid"]
        fragment = kid.split(":")[2] if kid.count(":") >= 2 else kid
        protected = json.dumps(
            {"alg": record["alg"], "kid": f"{kid}#{fragment}"},
            separators=(",", ":")
        )
        output.append({
            "jws": {
                "payload": bytes_to_base64url(cid.bytes),
                "signatures": [{
                    "protected": bytes_to_base64url(protected.encode("utf-8")),
                    "signature": record["sig"],
                }],
                "link": cid,
            },
            "linked_block": block,
        })
    return output
