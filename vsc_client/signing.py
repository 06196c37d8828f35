"""
Signing strategies, one per login mode.

- hive: the delegated signer signs and broadcasts a custom_json in one call.
- offchain: the DID signs the container as a detached DAG-JWS.
- evm: the account signs the EIP-712 digest of the container (EIP-191).

Offchain and EVM produce a (tx, sig) pair of base64url DAG-CBOR blocks that
the API client submits. Their order of work is fixed: nonce fetch (when not
cached), sign, bump the cached nonce, submit.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from eth_account.messages import encode_defunct
from web3 import Web3

from . import codec
from .api.client import ApiClient
from .envelope import HeaderShape, build_envelope
from .exceptions import DecodeError, SessionNotInitializedError, SigningFailedError
from .identity.jws import decode_protected_header
from .models import (
    CallContractTx, DidSignature, EvmSignature, SignatureContainer,
    SubmitResult, TransactionContainer
)
from .session import EvmLogin, HiveLogin, LoginMode, OffchainLogin, Session
from .signer.delegated import KeyType
from .typed_data import derive_typed_data, hash_typed_data
from .utils import bytes_to_base64url

logger = logging.getLogger(__name__)

# custom_json id used for Hive broadcasts
HIVE_ACTION_ID = "vsc-tx"


@dataclass(frozen=True)
class SignedTransaction:
    """
    Encoded transaction and signature bundle ready for submission.

    Attributes:
        tx: base64url DAG-CBOR transaction container
        sig: base64url DAG-CBOR signature container
        container: The container that was signed
    """
    tx: str
    sig: str
    container: TransactionContainer


def _cached_nonce(session: Session, api: ApiClient, key_group: str) -> int:
    if session.cached_nonce is None:
        session.cached_nonce = api.get_nonce(key_group)
        logger.debug("Fetched nonce %d for %s…", session.cached_nonce, key_group[:16])
    return session.cached_nonce


def _encode_sigs(sigs: List) -> str:
    return bytes_to_base64url(codec.encode(SignatureContainer(sigs=sigs).to_wire()))


class SigningStrategy(ABC):
    """Signs and submits an intent for one login mode."""

    mode: LoginMode

    @abstractmethod
    def broadcast(self, intent: CallContractTx, session: Session, api: ApiClient) -> SubmitResult:
        pass


class DetachedSigningStrategy(SigningStrategy):
    """Strategies that sign locally and submit through the API client."""

    @abstractmethod
    def sign(self, intent: CallContractTx, session: Session, api: ApiClient) -> SignedTransaction:
        pass

    def broadcast(self, intent: CallContractTx, session: Session, api: ApiClient) -> SubmitResult:
        signed = self.sign(intent, session, api)
        return api.submit(signed.tx, signed.sig)


class HiveStrategy(SigningStrategy):
    mode = LoginMode.HIVE

    def broadcast(self, intent: CallContractTx, session: Session, api: ApiClient) -> SubmitResult:
        login = session.login
        if not isinstance(login, HiveLogin) or login.signer is None:
            raise SessionNotInitializedError("Delegated signer not initialized. Please login first.")

        # Hive provides replay protection, so no nonce
        container = build_envelope(intent, HeaderShape(required_auth=login.username))

        logger.debug("Signing custom_json for @%s via delegated signer", login.username)
        result = login.signer.sign_and_submit_json(KeyType.POSTING, HIVE_ACTION_ID, container.to_wire())
        if not result.success:
            raise SigningFailedError(result.error)

        return SubmitResult(id=result.result)


class OffchainStrategy(DetachedSigningStrategy):
    mode = LoginMode.OFFCHAIN

    def sign(self, intent: CallContractTx, session: Session, api: ApiClient) -> SignedTransaction:
        login = session.login
        if not isinstance(login, OffchainLogin) or login.did is None:
            raise SessionNotInitializedError("DID not initialized. Please login first.")
        did = login.did

        nonce = _cached_nonce(session, api, did.id)
        container = build_envelope(intent, HeaderShape(required_auth=did.id, nonce=nonce))

        dag_jws = did.create_dag_jws(container.to_wire())
        session.cached_nonce = nonce + 1

        sigs = []
        for signature in dag_jws.jws.signatures:
            header = decode_protected_header(signature.protected)
            alg, kid = header.get("alg"), header.get("kid")
            if not alg or not kid:
                raise DecodeError(f"JWS protected header lacks alg or kid: {header}")
            sigs.append(DidSignature(
                alg=alg,
                # strip the key fragment: did:key:z...#z... -> did:key:z...
                kid=kid.split("#")[0],
                sig=signature.signature,
            ))

        return SignedTransaction(
            tx=bytes_to_base64url(dag_jws.linked_block),
            sig=_encode_sigs(sigs),
            container=container,
        )


class EvmStrategy(DetachedSigningStrategy):
    """
    Signs the EIP-712 digest of the container with the account key (EIP-191).

    The nonce key group is the same ``did:pkh:eip155:1:<address>`` placed in
    required_auths. Earlier clients queried the nonce under a key group
    missing the colon before the address; the colon form is intentional.
    """
    mode = LoginMode.EVM

    def sign(self, intent: CallContractTx, session: Session, api: ApiClient) -> SignedTransaction:
        login = session.login
        if not isinstance(login, EvmLogin) or login.account is None:
            raise SessionNotInitializedError("EVM account not initialized. Please login first.")

        did = login.identity
        nonce = _cached_nonce(session, api, did)
        container = build_envelope(intent, HeaderShape(required_auth=did, nonce=nonce))
        wire = container.to_wire()

        # type the value the server decodes, not the Python one
        typed_data = derive_typed_data(codec.decode(codec.encode(wire)))
        digest = hash_typed_data(typed_data)
        signed = login.account.sign_message(encode_defunct(primitive=digest))
        session.cached_nonce = nonce + 1
        logger.debug("Signed EIP-712 digest %s for %s…", Web3.to_hex(digest), login.address[:10])

        return SignedTransaction(
            tx=bytes_to_base64url(codec.encode(wire)),
            sig=_encode_sigs([EvmSignature(s=Web3.to_hex(signed.signature))]),
            container=container,
        )


_STRATEGIES = {
    LoginMode.HIVE: HiveStrategy,
    LoginMode.OFFCHAIN: OffchainStrategy,
    LoginMode.EVM: EvmStrategy,
}


def strategy_for(session: Session) -> SigningStrategy:
    """
    Select the signing strategy for the session's login mode.

    Raises:
        SessionNotInitializedError: If the session has no login
    """
    strategy_cls = _STRATEGIES.get(session.mode)
    if strategy_cls is None:
        raise SessionNotInitializedError("Not logged in. Call login(), login_with_hive() or login_with_eth() first.")
    return strategy_cls()
