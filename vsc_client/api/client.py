"""
HTTP client for the VSC GraphQL API.

This module issues the two fixed queries the client needs: the account nonce
lookup and the transaction submission.
"""
import logging
from typing import Any, Dict, List, Optional, Union

import requests

from ..config import ClientConfig
from ..exceptions import MalformedResponseError, SubmissionRejectedError, TransportError
from ..models import SubmitResult
from .queries import GET_NONCE_QUERY, SUBMIT_TX_QUERY

logger = logging.getLogger(__name__)


class ApiClient:
    """
    Client for a single VSC API node.

    Requests are sent once; the client performs no retries.
    """

    def __init__(
        self,
        config: ClientConfig,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the API client

        Args:
            config: Connection settings
            session: Optional requests session to reuse
            logger: Optional logger instance to use for debug/info logging
        """
        self.config = config
        self.session = session or requests.Session()
        self.logger = logger or logging.getLogger(__name__)

    @property
    def graphql_url(self) -> str:
        return self.config.graphql_url

    def query(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        """
        Post a GraphQL query and return its ``data`` payload.

        Args:
            query: GraphQL document
            variables: Query variables

        Returns:
            The response's ``data`` object

        Raises:
            TransportError: On network failure or a non-2xx status
            SubmissionRejectedError: If the response carries errors and a null or missing result
            MalformedResponseError: If the body is not JSON or carries neither data nor errors
        """
        try:
            response = self.session.post(
                self.graphql_url,
                json={"query": query, "variables": variables},
                timeout=self.config.timeout
            )
        except requests.RequestException as e:
            self.logger.error(f"VSC API request failed: {e}")
            raise TransportError(f"VSC API request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            self.logger.error(f"VSC API returned HTTP {response.status_code}")
            raise TransportError(
                f"VSC API returned HTTP {response.status_code}: {response.text[:200]}",
                status_code=response.status_code
            )

        try:
            body = response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Invalid JSON response from VSC API: {e}") from e

        if not isinstance(body, dict):
            raise MalformedResponseError(f"Unexpected response body: {body!r}")

        data = body.get("data")
        errors = body.get("errors")
        # resolver rejections come back as {"data": {"field": null}, "errors": [...]}
        if errors and (not isinstance(data, dict) or any(value is None for value in data.values())):
            raise SubmissionRejectedError(self._error_message(errors), errors)
        if not data:
            raise MalformedResponseError(f"Response carries no data payload: {body}")

        return data

    @staticmethod
    def _error_message(errors: Any) -> str:
        if isinstance(errors, list):
            messages = [e.get("message", str(e)) if isinstance(e, dict) else str(e) for e in errors]
            return "; ".join(messages)
        return str(errors)

    def get_nonce(self, key_group: Union[str, List[str]]) -> int:
        """
        Fetch the current nonce of an account.

        Args:
            key_group: Account identifier (DID) or list of identifiers

        Returns:
            The account nonce
        """
        self.logger.debug("Fetching nonce for %s…", str(key_group)[:16])
        data = self.query(GET_NONCE_QUERY, {"keyGroup": key_group})

        result = data.get("getAccountNonce")
        if not isinstance(result, dict) or "nonce" not in result:
            raise MalformedResponseError(f"Missing getAccountNonce.nonce in response: {data}")

        nonce = result["nonce"]
        if isinstance(nonce, bool) or not isinstance(nonce, int):
            raise MalformedResponseError(f"Nonce is not an integer: {nonce!r}")
        return nonce

    def submit(self, tx: str, sig: str) -> SubmitResult:
        """
        Submit an encoded transaction and its signature bundle.

        Args:
            tx: base64url DAG-CBOR transaction container
            sig: base64url DAG-CBOR signature container

        Returns:
            SubmitResult carrying the transaction id
        """
        self.logger.debug("Submitting transaction (%d bytes encoded)", len(tx))
        data = self.query(SUBMIT_TX_QUERY, {"tx": tx, "sig": sig})

        result = data.get("submitTransactionV1")
        if not isinstance(result, dict) or "id" not in result:
            raise MalformedResponseError(f"Missing submitTransactionV1.id in response: {data}")

        return SubmitResult(id=result["id"])
