"""
Storage module for linear-vault.
Provides credential storage backends behind one interface.
"""

from .base import (
    BackendUnavailableError,
    BaseStore,
    DeserializationError,
    NotFoundError,
    PermissionDeniedError,
    SecretKind,
    SerializationError,
    StoreError,
)
from .keyring_store import KeyringStore
from .memory_store import MemoryStore
from .manager import StoreManager, create_store, register_store_type

__all__ = [
    "BackendUnavailableError",
    "BaseStore",
    "DeserializationError",
    "NotFoundError",
    "PermissionDeniedError",
    "SecretKind",
    "SerializationError",
    "StoreError",
    "KeyringStore",
    "MemoryStore",
    "StoreManager",
    "create_store",
    "register_store_type",
]
