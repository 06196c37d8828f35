"""
Delegated signer interface for Hive logins.
"""
from .delegated import (
    DelegatedSigner, DelegatedSignerConfig, HiveProvider, HiveSignerSettings,
    KeyType, LoginOptions, SignerResult
)

__all__ = [
    'DelegatedSigner',
    'DelegatedSignerConfig',
    'HiveProvider',
    'HiveSignerSettings',
    'KeyType',
    'LoginOptions',
    'SignerResult',
]
