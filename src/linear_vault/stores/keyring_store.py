"""
OS keyring credential storage.
Stores secrets in the platform credential service (macOS Keychain, Windows
Credential Locker, Secret Service / KWallet on Linux) through ``keyring``.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

import keyring
import keyring.core
from keyring.backend import KeyringBackend
from keyring.errors import (
    InitError,
    KeyringError,
    KeyringLocked,
    NoKeyringError,
    PasswordDeleteError,
)

from .base import (
    BackendUnavailableError,
    BaseStore,
    PermissionDeniedError,
    SecretKind,
    StoreError,
)
from ..config import SERVICE_NAME
from ..logging_config import get_logger

logger = get_logger(__name__)


def load_keyring_backend(name: Optional[str] = None) -> KeyringBackend:
    """
    Resolve the keyring backend to use.

    Args:
        name: Dotted path of a backend class, e.g.
            ``keyring.backends.macOS.Keyring``. None selects the platform
            default chosen by keyring itself.

    Returns:
        Keyring backend instance

    Raises:
        BackendUnavailableError: If the named backend cannot be loaded
    """
    if not name:
        return keyring.get_keyring()
    try:
        return keyring.core.load_keyring(name)
    except (ImportError, AttributeError, ValueError, KeyringError) as e:
        raise BackendUnavailableError(f"Cannot load keyring backend {name}: {e}") from e


class KeyringStore(BaseStore):
    """Credential store backed by the operating system keyring.

    Every kind lives at ``(service_name, kind.value)``. Keyring errors are
    translated into the store error types; nothing is retried.
    """

    store_type = "keyring"

    def __init__(
        self,
        service_name: str = SERVICE_NAME,
        backend: Optional[KeyringBackend] = None,
    ):
        """
        Initialize keyring store.

        Args:
            service_name: Keyring service under which entries are kept
            backend: Keyring backend to use instead of the platform default
        """
        super().__init__(service_name)
        self._backend = backend

    @property
    def backend(self) -> KeyringBackend:
        """Keyring backend in use, resolved on first access."""
        if self._backend is None:
            self._backend = load_keyring_backend()
        return self._backend

    @contextmanager
    def _translate_errors(self, kind: SecretKind, action: str) -> Iterator[None]:
        """Map keyring failures onto store errors."""
        try:
            yield
        except StoreError:
            raise
        except (NoKeyringError, InitError) as e:
            raise BackendUnavailableError(
                f"Keyring unavailable while trying to {action} {kind.value}: {e}",
                kind=kind,
            ) from e
        except (KeyringLocked, PermissionError) as e:
            raise PermissionDeniedError(
                f"Keyring access denied while trying to {action} {kind.value}: {e}",
                kind=kind,
            ) from e
        except KeyringError as e:
            raise StoreError(
                f"Keyring failed to {action} {kind.value}: {e}", kind=kind
            ) from e

    def _read(self, kind: SecretKind) -> Optional[str]:
        with self._translate_errors(kind, "read"):
            return self.backend.get_password(self.service_name, kind.value)

    def _write(self, kind: SecretKind, value: str) -> None:
        with self._translate_errors(kind, "write"):
            self.backend.set_password(self.service_name, kind.value, value)

    def _remove(self, kind: SecretKind) -> None:
        with self._translate_errors(kind, "delete"):
            try:
                self.backend.delete_password(self.service_name, kind.value)
            except PasswordDeleteError:
                # keyring reports a missing entry and a failed delete the
                # same way; only the former counts as success.
                if self.backend.get_password(self.service_name, kind.value) is not None:
                    raise
                logger.debug(
                    "credential already absent",
                    service=self.service_name,
                    kind=kind.value,
                )
