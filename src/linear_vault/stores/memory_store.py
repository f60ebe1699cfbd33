"""
In-memory credential storage.
Keeps secrets in a process-local dictionary; nothing survives the process.
"""

from typing import Dict, Mapping, Optional

from .base import BaseStore, SecretKind
from ..config import SERVICE_NAME


class MemoryStore(BaseStore):
    """Dictionary-backed store for tests and sandboxed environments.

    Not safe for concurrent use from several threads; callers sharing an
    instance across threads must serialize access themselves.
    """

    store_type = "memory"

    def __init__(
        self,
        service_name: str = SERVICE_NAME,
        initial: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize memory store.

        Args:
            service_name: Namespace label, kept for parity with other stores
            initial: Raw entries to preload, keyed by kind name
        """
        super().__init__(service_name)
        self._data: Dict[str, str] = {}
        for key, value in (initial or {}).items():
            self._data[SecretKind(key).value] = value

    @property
    def raw(self) -> Dict[str, str]:
        """Underlying mapping of kind name to stored string."""
        return self._data

    def _read(self, kind: SecretKind) -> Optional[str]:
        return self._data.get(kind.value)

    def _write(self, kind: SecretKind, value: str) -> None:
        self._data[kind.value] = value

    def _remove(self, kind: SecretKind) -> None:
        self._data.pop(kind.value, None)
