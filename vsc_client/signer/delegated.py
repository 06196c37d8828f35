"""
Delegated signer interface.

A delegated signer holds the Hive keys (browser extension, hardware wallet,
HiveAuth relay, HiveSigner...) and signs and broadcasts on the caller's behalf.
The client only drives this interface; provider wire formats stay behind it.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import BaseModel

DEFAULT_APP_ICON = "https://avatars.githubusercontent.com/u/133249767"
DEFAULT_HIVESIGNER_API = "https://hive-api.web3telekom.xyz/"
DEFAULT_LOGIN_MESSAGE = "Sign into VSC Client"


class HiveProvider(str, Enum):
    """Wallet providers a delegated signer can log in through."""
    KEYCHAIN = "keychain"
    HIVESIGNER = "hivesigner"
    HIVEAUTH = "hiveauth"
    LEDGER = "ledger"
    PEAKVAULT = "peakvault"
    CUSTOM = "custom"


class KeyType(str, Enum):
    """Hive key authority levels."""
    POSTING = "posting"
    ACTIVE = "active"


class HiveSignerSettings(BaseModel):
    """HiveSigner application settings"""
    app: str
    callback_url: str
    scope: List[str]
    api_url: str = DEFAULT_HIVESIGNER_API


class DelegatedSignerConfig(BaseModel):
    """Application metadata shown by wallet providers"""
    app_name: str
    app_description: str
    app_icon: str = DEFAULT_APP_ICON
    hivesigner: Optional[HiveSignerSettings] = None


@dataclass
class LoginOptions:
    """
    Options passed to a provider login.

    Attributes:
        msg: Message the user signs to prove account ownership
        key_type: Key authority requested at login
        display_qr: Callback receiving the HiveAuth QR payload
    """
    msg: str = DEFAULT_LOGIN_MESSAGE
    key_type: KeyType = KeyType.POSTING
    display_qr: Optional[Callable[[str], None]] = None


@dataclass
class SignerResult:
    """Outcome reported by a delegated signer."""
    success: bool
    result: Optional[str] = None
    error: Optional[str] = None


class DelegatedSigner(ABC):
    """
    Abstract base class for delegated Hive signers.

    Implementations receive the application metadata they register with
    wallet providers as a DelegatedSignerConfig; it is kept on ``config``.
    """

    def __init__(self, config: Optional[DelegatedSignerConfig] = None):
        self.config = config

    @abstractmethod
    def login(
        self,
        provider: HiveProvider,
        username: str,
        options: Optional[LoginOptions] = None
    ) -> SignerResult:
        """
        Log in through a wallet provider.

        Returns:
            SignerResult; failures are reported, not raised
        """
        pass

    @abstractmethod
    def logout(self) -> None:
        """Log out of the current provider."""
        pass

    @abstractmethod
    def is_logged_in(self) -> bool:
        pass

    @abstractmethod
    def current_user(self) -> Optional[str]:
        pass

    @abstractmethod
    def sign_and_submit_json(
        self,
        key_type: KeyType,
        action_id: str,
        payload: Dict[str, Any]
    ) -> SignerResult:
        """
        Sign a custom JSON operation and broadcast it to Hive.

        Args:
            key_type: Authority the operation is signed with
            action_id: custom_json id
            payload: JSON payload

        Returns:
            SignerResult whose ``result`` is the Hive transaction id on success
        """
        pass

    @abstractmethod
    def set_api(self, api: Union[str, List[str]]) -> None:
        """Point the signer at other Hive API node(s)."""
        pass

    @abstractmethod
    def on_account_changed(self, callback: Callable[[Optional[str]], None]) -> None:
        """Register a callback receiving the new username (or None) on account change."""
        pass
