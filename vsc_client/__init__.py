"""
VSC client SDK

Builds, signs and submits VSC network transactions for Hive, DID and
Ethereum logins.
"""
from .client import LoginType, VscClient, VscTransaction
from .config import ClientConfig
from .exceptions import (
    BroadcastError, DecodeError, LoginError, MalformedResponseError,
    MissingIntentError, NoIntentSetError, SessionNotInitializedError,
    SigningFailedError, SubmissionRejectedError, TransportError,
    TypedDataError, VscError
)
from .identity import Ed25519KeyDid, convert_tx_jws
from .models import CallContractTx, SubmitResult, TransactionContainer
from .signer import DelegatedSigner, HiveProvider, KeyType, LoginOptions, SignerResult
from .utils import hex_to_bytes
from .version import __version__

__all__ = [
    "VscClient",
    "VscTransaction",
    "LoginType",
    "ClientConfig",
    "CallContractTx",
    "SubmitResult",
    "TransactionContainer",
    "Ed25519KeyDid",
    "convert_tx_jws",
    "DelegatedSigner",
    "HiveProvider",
    "KeyType",
    "LoginOptions",
    "SignerResult",
    "hex_to_bytes",
    "VscError",
    "NoIntentSetError",
    "MissingIntentError",
    "SessionNotInitializedError",
    "LoginError",
    "SigningFailedError",
    "TransportError",
    "MalformedResponseError",
    "SubmissionRejectedError",
    "DecodeError",
    "TypedDataError",
    "BroadcastError",
    "__version__",
]
