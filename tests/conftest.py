"""
Pytest fixtures for the VSC client tests.
"""
from typing import Any, Callable, Dict, List, Optional, Union

import pytest
from eth_account import Account

from vsc_client import VscClient
from vsc_client.config import ClientConfig
from vsc_client.identity import Ed25519KeyDid
from vsc_client.signer import (
    DelegatedSigner, DelegatedSignerConfig, HiveProvider, KeyType, LoginOptions, SignerResult
)

# Constants for testing
TEST_API_URL = "https://api.vsc.example"
TEST_GRAPHQL_URL = "https://api.vsc.example/api/v1/graphql"
TEST_PRIV_KEY = "0x0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"
TEST_SEED = bytes(range(32))
TEST_NONCE = 7
TEST_TX_ID = "bafyreitesttransactionid"
TEST_INTENT = {
    "op": "call_contract",
    "action": "testJSON",
    "contract_id": "vs41q9c3yg8estwk8q585bm2ww2gfzqgqn6ypvm6cjbcrke4dsqp0ywzd7d5",
    "payload": {"hello": "World"},
}


class FakeDelegatedSigner(DelegatedSigner):
    """In-memory delegated signer recording every call"""

    def __init__(
        self,
        login_result: Optional[SignerResult] = None,
        sign_result: Optional[SignerResult] = None,
        config: Optional[DelegatedSignerConfig] = None
    ):
        super().__init__(config)
        self.login_result = login_result or SignerResult(success=True)
        self.sign_result = sign_result or SignerResult(success=True, result="hive-trx-0001")
        self.user: Optional[str] = None
        self.api: Optional[Union[str, List[str]]] = None
        self.callbacks: List[Callable[[Optional[str]], None]] = []
        self.signed: List[Dict[str, Any]] = []

    def login(self, provider: HiveProvider, username: str, options: Optional[LoginOptions] = None) -> SignerResult:
        if self.login_result.success:
            self.user = username
        return self.login_result

    def logout(self) -> None:
        self.user = None
        for callback in self.callbacks:
            callback(None)

    def is_logged_in(self) -> bool:
        return self.user is not None

    def current_user(self) -> Optional[str]:
        return self.user

    def sign_and_submit_json(self, key_type: KeyType, action_id: str, payload: Dict[str, Any]) -> SignerResult:
        self.signed.append({"key_type": key_type, "action_id": action_id, "payload": payload})
        return self.sign_result

    def set_api(self, api: Union[str, List[str]]) -> None:
        self.api = api

    def on_account_changed(self, callback: Callable[[Optional[str]], None]) -> None:
        self.callbacks.append(callback)


class FakeVscNode:
    """GraphQL endpoint answering the nonce and submission queries"""

    def __init__(self, nonce: int = TEST_NONCE, tx_id: str = TEST_TX_ID):
        self.nonce = nonce
        self.tx_id = tx_id
        self.nonce_requests: List[Any] = []
        self.submissions: List[Dict[str, str]] = []
        self.submit_response: Optional[Dict[str, Any]] = None

    def respond(self, request, context):
        context.headers["Content-Type"] = "application/json"
        body = request.json()
        if "getAccountNonce" in body["query"]:
            self.nonce_requests.append(body["variables"]["keyGroup"])
            return {"data": {"getAccountNonce": {"nonce": self.nonce}}}

        self.submissions.append(body["variables"])
        if self.submit_response is not None:
            return self.submit_response
        return {"data": {"submitTransactionV1": {"id": self.tx_id}}}


@pytest.fixture
def config():
    return ClientConfig(api_url=TEST_API_URL)


@pytest.fixture
def client(config):
    return VscClient(config)


@pytest.fixture
def did():
    """Deterministic did:key identity"""
    return Ed25519KeyDid.from_seed(TEST_SEED)


@pytest.fixture
def eth_account():
    return Account.from_key(TEST_PRIV_KEY)


@pytest.fixture
def fake_signer():
    return FakeDelegatedSigner()


@pytest.fixture
def vsc_node(requests_mock):
    """Mock VSC API node registered on the GraphQL endpoint"""
    node = FakeVscNode()
    node.route = requests_mock.post(TEST_GRAPHQL_URL, json=node.respond)
    return node
