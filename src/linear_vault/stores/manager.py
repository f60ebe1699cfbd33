"""
Store manager for linear-vault.
Builds credential stores from configuration and hands out a unified interface.
"""

from typing import Callable, Dict, List, Optional

from .base import BaseStore, StoreError
from .keyring_store import KeyringStore, load_keyring_backend
from .memory_store import MemoryStore
from ..config import VaultConfig
from ..logging_config import get_logger

logger = get_logger(__name__)

StoreFactory = Callable[[VaultConfig], BaseStore]


def _build_keyring_store(config: VaultConfig) -> BaseStore:
    backend = None
    if config.keyring_backend:
        backend = load_keyring_backend(config.keyring_backend)
    return KeyringStore(service_name=config.service_name, backend=backend)


def _build_memory_store(config: VaultConfig) -> BaseStore:
    return MemoryStore(service_name=config.service_name)


_STORE_FACTORIES: Dict[str, StoreFactory] = {
    "keyring": _build_keyring_store,
    "memory": _build_memory_store,
}


def register_store_type(store_type: str, factory: StoreFactory) -> None:
    """
    Register an additional store type.

    Args:
        store_type: Name used in the ``backend`` config field
        factory: Callable building the store from configuration
    """
    _STORE_FACTORIES[store_type] = factory


def available_store_types() -> List[str]:
    """Names of all registered store types."""
    return sorted(_STORE_FACTORIES)


def create_store(config: VaultConfig, store_type: Optional[str] = None) -> BaseStore:
    """
    Create a store.

    Args:
        config: Vault configuration
        store_type: Store type to build, defaults to ``config.backend``

    Returns:
        Store instance

    Raises:
        StoreError: If store type not found
    """
    store_type = store_type or config.backend
    factory = _STORE_FACTORIES.get(store_type)
    if factory is None:
        raise StoreError(f"Store type not found: {store_type}")

    store = factory(config)
    logger.debug("store created", store=store_type, service=config.service_name)
    return store


class StoreManager:
    """Manager for credential storage backends."""

    def __init__(self, config: VaultConfig):
        """
        Initialize store manager.

        Args:
            config: Vault configuration
        """
        self.config = config
        self.stores: Dict[str, BaseStore] = {}

    @property
    def default_store(self) -> BaseStore:
        """Store selected by the ``backend`` config field."""
        return self.get_store()

    def get_store(self, store_type: Optional[str] = None) -> BaseStore:
        """
        Get store by type, building it on first use.

        Args:
            store_type: Store type ("keyring", "memory", ...)

        Returns:
            Store instance

        Raises:
            StoreError: If store type not found
        """
        store_type = store_type or self.config.backend
        if store_type not in self.stores:
            self.stores[store_type] = create_store(self.config, store_type)
        return self.stores[store_type]

    def sync_credentials(self, from_store_type: str, to_store_type: str) -> int:
        """
        Copy every stored secret from one store to another.

        Args:
            from_store_type: Source store type
            to_store_type: Destination store type

        Returns:
            Number of secrets copied

        Raises:
            DeserializationError: If a stored token in the source is corrupt;
                nothing is written to the destination
        """
        from_store = self.get_store(from_store_type)
        to_store = self.get_store(to_store_type)

        # Decode everything before the first write
        values = [(kind, from_store.get(kind)) for kind in from_store.stored_kinds()]

        for kind, value in values:
            to_store.set(kind, value)
        synced_count = len(values)

        logger.info(
            "credentials synced",
            source=from_store_type,
            destination=to_store_type,
            count=synced_count,
        )
        return synced_count

    def shutdown(self) -> None:
        """Drop all cached stores."""
        self.stores.clear()
