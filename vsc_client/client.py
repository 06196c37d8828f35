"""
VscClient - Main client for the VSC network.
"""
import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from eth_account import Account
from web3 import Web3

from .api.client import ApiClient
from .config import ClientConfig
from .exceptions import (
    BroadcastError, LoginError, NoIntentSetError, VscError
)
from .identity.did import DidSigner
from .models import CallContractTx, SubmitResult
from .session import EvmLogin, HiveLogin, LoginMode, OffchainLogin, Session
from .signer.delegated import DelegatedSigner, DelegatedSignerConfig, HiveProvider, LoginOptions
from .signing import strategy_for


class LoginType(str, Enum):
    """Whether the client interacts with Hive on chain or with offchain data."""
    HIVE = "hive"
    OFFCHAIN = "offchain"


class VscClient:
    """
    Client for submitting transactions to the VSC network.

    A client holds one Session. Each login call replaces it with a new session
    in the chosen mode:

    - login(did): offchain, signed by a DID
    - login_with_hive(...): Hive account through a delegated signer
    - login_with_eth(...): Ethereum account from a private key
    """

    def __init__(
        self,
        config: ClientConfig,
        login_type: Union[LoginType, str] = LoginType.OFFCHAIN,
        api: Optional[ApiClient] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the VscClient

        Args:
            config: Connection settings for the VSC API node
            login_type: "offchain" permits DID login; "hive" restricts the
                client to Hive and EVM logins
            api: Optional ApiClient (built from config if omitted)
            logger: Optional logger instance to use for debug/info logging
        """
        self.config = config
        self.login_type = LoginType(login_type)
        self.logger = logger or logging.getLogger(__name__)
        self.api = api or ApiClient(config, logger=self.logger)
        self.session = Session()

    @property
    def logged_in(self) -> bool:
        return self.session.mode is not LoginMode.UNSET

    def login(self, did: DidSigner) -> None:
        """
        Log in offchain with a DID.

        Raises:
            LoginError: If the client was configured for Hive, or the DID is not authenticated
        """
        if self.login_type is LoginType.HIVE:
            raise LoginError('login_type must be set to "offchain"')
        if not getattr(did, "authenticated", False):
            raise LoginError("DID not authenticated! Authenticate it before login")

        self.session = Session(OffchainLogin(did=did))
        self.logger.info("Logged in offchain as %s…", did.id[:16])

    def login_with_hive(
        self,
        signer: DelegatedSigner,
        hive_name: str,
        provider: Union[HiveProvider, str] = HiveProvider.KEYCHAIN,
        options: Optional[LoginOptions] = None
    ) -> None:
        """
        Log in with a Hive account through a delegated signer.

        Args:
            signer: Delegated signer implementation
            hive_name: Hive username
            provider: Wallet provider the signer logs in through
            options: Provider login options

        Raises:
            LoginError: If the signer rejects the login
        """
        if signer is None:
            raise LoginError("A delegated signer is required")

        provider = HiveProvider(provider)
        result = signer.login(provider, hive_name, options or LoginOptions())
        if not result.success:
            raise LoginError(f"Delegated signer login failed: {result.error}")

        self.session = Session(HiveLogin(username=hive_name, signer=signer, provider=provider))
        self.logger.info("Logged in as @%s via %s", hive_name, provider.value)

    def login_with_eth(self, address: str, private_key: str) -> None:
        """
        Log in with an Ethereum account.

        Args:
            address: Account address, used verbatim in the did:pkh identity
            private_key: Hex private key controlling the address

        Raises:
            LoginError: If the address is invalid or not controlled by the key
        """
        if not Web3.is_address(address):
            raise LoginError(f"Invalid Ethereum address: {address}")
        try:
            account = Account.from_key(private_key)
        except Exception as e:
            # eth_keys raises its own ValidationError for malformed keys
            raise LoginError(f"Invalid private key: {e}") from e
        if account.address != Web3.to_checksum_address(address):
            raise LoginError("Private key does not control the given address")

        self.session = Session(EvmLogin(address=address, account=account))
        self.logger.info("Logged in with EVM account %s…", address[:10])

    def get_delegated_signer(self) -> Optional[DelegatedSigner]:
        """Get the delegated signer if the session is a Hive login"""
        login = self.session.login
        return login.signer if isinstance(login, HiveLogin) else None

    def get_delegated_config(self) -> Optional[DelegatedSignerConfig]:
        """Get the application settings the delegated signer was created with"""
        signer = self.get_delegated_signer()
        return getattr(signer, "config", None) if signer else None

    def is_delegated_logged_in(self) -> bool:
        """Check whether a delegated signer is available and logged in"""
        signer = self.get_delegated_signer()
        return bool(signer and signer.is_logged_in())

    def get_delegated_user(self) -> Optional[str]:
        """Get the delegated signer's current user"""
        signer = self.get_delegated_signer()
        return signer.current_user() if signer else None

    def set_delegated_api(self, api: Union[str, List[str]]) -> None:
        """Set custom Hive API node(s) for the delegated signer"""
        signer = self.get_delegated_signer()
        if signer:
            signer.set_api(api)

    def on_delegated_account_changed(self, callback: Callable[[Optional[str]], None]) -> None:
        """Listen to delegated signer account changes"""
        signer = self.get_delegated_signer()
        if signer:
            signer.on_account_changed(callback)


class VscTransaction:
    """
    A single contract call to be signed and broadcast.

    Example:
        tx = VscTransaction()
        tx.set_tx({
            "op": "call_contract",
            "action": "testJSON",
            "contract_id": "vs41q9c3yg...",
            "payload": {"hello": "World"},
        })
        result = tx.broadcast(client)
    """

    def __init__(self):
        self.tx_data: Optional[CallContractTx] = None

    def set_tx(self, tx_data: Union[CallContractTx, Dict[str, Any]]) -> None:
        """
        Set the intent to broadcast.

        Raises:
            pydantic.ValidationError: If the intent is malformed
        """
        if not isinstance(tx_data, CallContractTx):
            tx_data = CallContractTx.model_validate(tx_data)
        self.tx_data = tx_data

    def broadcast(self, client: VscClient) -> SubmitResult:
        """
        Sign the intent for the client's login mode and submit it.

        Args:
            client: Logged-in client

        Returns:
            SubmitResult carrying the transaction id

        Raises:
            NoIntentSetError: If set_tx() was not called
            SessionNotInitializedError: If the client is not logged in
            SigningFailedError: If the delegated signer rejects the transaction
            TransportError: On network failure
            SubmissionRejectedError: If the node returns an error payload
            MalformedResponseError: If the node response lacks the expected fields
            BroadcastError: For any other failure
        """
        if self.tx_data is None:
            raise NoIntentSetError("No TX specified!")

        session = client.session
        strategy = strategy_for(session)

        with session.lock:
            try:
                result = strategy.broadcast(self.tx_data, session, client.api)
            except VscError:
                raise
            except Exception as e:
                client.logger.error(f"Unexpected error during broadcast: {e}")
                raise BroadcastError(e) from e

        client.logger.info("Broadcast %s transaction: %s", session.mode.value, result.id)
        return result
