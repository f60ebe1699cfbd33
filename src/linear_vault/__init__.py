"""
linear-vault: credential storage for the linear command-line tool.

Secrets (API key, OAuth token, OAuth client id and secret) are kept in the
operating system keyring, or in memory for tests.
"""

from .auth import TokenInfo
from .config import SERVICE_NAME, VaultConfig, load_config
from .credentials import is_authenticated, load_token_info, logout, resolve_api_key
from .stores import (
    BackendUnavailableError,
    BaseStore,
    DeserializationError,
    KeyringStore,
    MemoryStore,
    NotFoundError,
    PermissionDeniedError,
    SecretKind,
    SerializationError,
    StoreError,
    StoreManager,
    create_store,
)

__version__ = "0.1.0"

__all__ = [
    "SERVICE_NAME",
    "TokenInfo",
    "VaultConfig",
    "load_config",
    "is_authenticated",
    "load_token_info",
    "logout",
    "resolve_api_key",
    "BackendUnavailableError",
    "BaseStore",
    "DeserializationError",
    "KeyringStore",
    "MemoryStore",
    "NotFoundError",
    "PermissionDeniedError",
    "SecretKind",
    "SerializationError",
    "StoreError",
    "StoreManager",
    "create_store",
]
