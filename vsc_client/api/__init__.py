"""
VSC API module.

Provides the HTTP client for the VSC GraphQL endpoint.
"""
from .client import ApiClient
from .queries import GET_NONCE_QUERY, SUBMIT_TX_QUERY

__all__ = ['ApiClient', 'GET_NONCE_QUERY', 'SUBMIT_TX_QUERY']
