"""
Exceptions for the VSC client.

Every failure raised out of a broadcast is a subclass of VscError. Errors are
terminal for the call that raised them; the client never retries.
"""
from typing import Any, Dict, List, Optional


class VscError(Exception):
    """Base exception for VSC client errors."""
    pass


class NoIntentSetError(VscError):
    """Raised when a transaction is built or broadcast before set_tx()."""
    pass


# Name used by the envelope builder
MissingIntentError = NoIntentSetError


class SessionNotInitializedError(VscError):
    """Raised when the session has no login, or lacks the handle the active mode needs."""
    pass


class LoginError(VscError):
    """Raised when a login attempt is rejected."""
    pass


class SigningFailedError(VscError):
    """Raised when a delegated signer reports that signing was rejected."""

    def __init__(self, reason: Optional[str] = None):
        self.reason = reason
        super().__init__(f"Delegated signing failed: {reason or 'Unknown error occurred'}")


class TransportError(VscError):
    """Raised on network failure or a non-2xx HTTP status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class MalformedResponseError(VscError):
    """Raised when a response lacks the fields the query is expected to return."""
    pass


class SubmissionRejectedError(VscError):
    """Raised when the server answered with an error payload instead of data."""

    def __init__(self, server_message: str, errors: Optional[List[Dict[str, Any]]] = None):
        self.server_message = server_message
        self.errors = errors or []
        super().__init__(f"Submission rejected: {server_message}")


class DecodeError(VscError, ValueError):
    """Raised on malformed base64url text or binary payloads."""
    pass


class TypedDataError(VscError, ValueError):
    """Raised when a value cannot be expressed as an EIP-712 typed-data schema."""
    pass


class BroadcastError(VscError):
    """Wraps an unexpected exception raised while broadcasting."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Broadcast failed: {cause}")
