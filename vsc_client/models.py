"""
Data models for the VSC client.

Field names on the wire are fixed; the server re-encodes these structures to
verify signatures, so to_wire() must produce exactly the shapes below.
"""
from enum import IntEnum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

TX_CONTAINER_VERSION = "0.2"
TX_CONTAINER_KIND = "vsc-tx"
SIG_CONTAINER_KIND = "vsc-sig"


class TransactionDbType(IntEnum):
    """Transaction kind carried in headers.type."""
    NULL = 0
    INPUT = 1
    OUTPUT = 2
    VIRTUAL = 3
    CORE = 4


class CallContractTx(BaseModel):
    """A contract call intent"""
    model_config = ConfigDict(frozen=True)

    op: Literal["call_contract"] = "call_contract"
    action: str
    contract_id: str
    payload: Any = None


class TransactionHeaders(BaseModel):
    """Headers of a transaction container"""
    model_config = ConfigDict(frozen=True)

    type: TransactionDbType = TransactionDbType.INPUT
    nonce: Optional[int] = None
    required_auths: List[str]

    @field_validator("required_auths")
    @classmethod
    def validate_required_auths(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("required_auths must name at least one authority")
        return v

    @field_validator("nonce")
    @classmethod
    def validate_nonce(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError("nonce must be >= 0")
        return v

    def to_wire(self) -> Dict[str, Any]:
        headers: Dict[str, Any] = {"type": int(self.type)}
        if self.nonce is not None:
            headers["nonce"] = self.nonce
        headers["required_auths"] = list(self.required_auths)
        return headers


class TransactionContainer(BaseModel):
    """Versioned transaction envelope (TransactionContainerV2)"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    version: str = Field(TX_CONTAINER_VERSION, alias="__v")
    kind: str = Field(TX_CONTAINER_KIND, alias="__t")
    headers: TransactionHeaders
    tx: CallContractTx

    def to_wire(self) -> Dict[str, Any]:
        """Plain dictionary placed on the wire."""
        return {
            "__v": self.version,
            "__t": self.kind,
            "headers": self.headers.to_wire(),
            "tx": self.tx.model_dump(),
        }


class DidSignature(BaseModel):
    """Signature record produced by a DID (one per JWS signature)"""
    alg: str
    kid: str
    sig: str


class EvmSignature(BaseModel):
    """EIP-191 signature over the EIP-712 digest of the container"""
    t: Literal["eip191"] = "eip191"
    s: str


class SignatureContainer(BaseModel):
    """Signature bundle sent alongside an encoded transaction"""
    model_config = ConfigDict(populate_by_name=True)

    kind: str = Field(SIG_CONTAINER_KIND, alias="__t")
    sigs: List[Union[DidSignature, EvmSignature]]

    def to_wire(self) -> Dict[str, Any]:
        return {
            "__t": self.kind,
            "sigs": [sig.model_dump() for sig in self.sigs],
        }


class SubmitResult(BaseModel):
    """Result of a broadcast"""
    id: Optional[str] = None
