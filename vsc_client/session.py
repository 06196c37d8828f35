"""
Login session state.

A session holds exactly one login, fixed when the session is created. A new
login produces a new session.
"""
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from eth_account.signers.local import LocalAccount

from .identity.did import DidSigner
from .signer.delegated import DelegatedSigner, HiveProvider

logger = logging.getLogger(__name__)

EVM_DID_PREFIX = "did:pkh:eip155:1:"


class LoginMode(str, Enum):
    HIVE = "hive"
    OFFCHAIN = "offchain"
    EVM = "evm"
    UNSET = "unset"


@dataclass(frozen=True)
class HiveLogin:
    """Hive account signing through a delegated signer."""
    username: str
    signer: Optional[DelegatedSigner]
    provider: Optional[HiveProvider] = None

    @property
    def identity(self) -> str:
        return self.username


@dataclass(frozen=True)
class OffchainLogin:
    """Offchain login with a DID."""
    did: DidSigner

    @property
    def identity(self) -> str:
        return self.did.id


@dataclass(frozen=True)
class EvmLogin:
    """Ethereum account with a local private key."""
    address: str
    account: Optional[LocalAccount]

    @property
    def identity(self) -> str:
        return f"{EVM_DID_PREFIX}{self.address}"


Login = Union[HiveLogin, OffchainLogin, EvmLogin]


class Session:
    """
    Login state plus the cached account nonce.

    ``cached_nonce`` is incremented after each offchain/EVM signing and is not
    rolled back when submission fails; call clear_nonce() after a failed
    broadcast so the next one re-fetches it. ``lock`` serializes broadcasts on
    the session so two calls never sign with the same nonce.
    """

    def __init__(self, login: Optional[Login] = None):
        self._login = login
        self.cached_nonce: Optional[int] = None
        self.lock = threading.Lock()

    @property
    def login(self) -> Optional[Login]:
        return self._login

    @property
    def mode(self) -> LoginMode:
        if isinstance(self._login, HiveLogin):
            return LoginMode.HIVE
        if isinstance(self._login, OffchainLogin):
            return LoginMode.OFFCHAIN
        if isinstance(self._login, EvmLogin):
            return LoginMode.EVM
        return LoginMode.UNSET

    @property
    def identity(self) -> Optional[str]:
        return self._login.identity if self._login is not None else None

    def clear_nonce(self) -> None:
        """Drop the cached nonce so the next broadcast fetches it again."""
        self.cached_nonce = None

    def __repr__(self) -> str:
        return f"Session(mode={self.mode.value}, cached_nonce={self.cached_nonce})"
