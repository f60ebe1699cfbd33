"""
Base storage interface for credential management.
"""

import abc
from enum import Enum
from typing import Any, List, Mapping, Optional, Union

from pydantic import ValidationError

from ..auth.token import TokenInfo
from ..logging_config import get_logger

logger = get_logger(__name__)


class SecretKind(str, Enum):
    """Kinds of secret kept in a store.

    The values are the key names under which entries are persisted and must
    never change, or existing users lose access to their stored credentials.
    """
    API_KEY = "api_key"
    TOKEN_INFO = "token_info"
    CLIENT_ID = "client_id"
    CLIENT_SECRET = "client_secret"


class StoreError(Exception):
    """Base exception for store errors."""

    def __init__(self, message: str, kind: Optional[SecretKind] = None):
        super().__init__(message)
        self.kind = kind


class NotFoundError(StoreError):
    """No entry exists for the requested kind."""
    pass


class SerializationError(StoreError):
    """Token data could not be encoded for storage."""
    pass


class DeserializationError(StoreError):
    """Stored token data could not be decoded."""
    pass


class BackendUnavailableError(StoreError):
    """The platform credential service could not be reached."""
    pass


class PermissionDeniedError(StoreError):
    """The platform credential service refused access."""
    pass


TokenInput = Union[TokenInfo, Mapping[str, Any]]


class BaseStore(abc.ABC):
    """Base class for credential storage implementations.

    Subclasses provide the raw medium through ``_read``, ``_write`` and
    ``_remove``. Everything callers use (the per-kind accessors, token
    (de)serialization and absence handling) is implemented here once so
    every backend honours the same contract.
    """

    #: Short name used in logs and by the store manager.
    store_type: str = "base"

    def __init__(self, service_name: str):
        """
        Initialize store.

        Args:
            service_name: Namespace under which all entries are kept
        """
        if not service_name:
            raise ValueError("service_name must not be empty")
        self.service_name = service_name

    @abc.abstractmethod
    def _read(self, kind: SecretKind) -> Optional[str]:
        """
        Read the raw value for a kind.

        Returns:
            The stored string, or None if no entry exists
        """
        pass

    @abc.abstractmethod
    def _write(self, kind: SecretKind, value: str) -> None:
        """Create or overwrite the raw value for a kind."""
        pass

    @abc.abstractmethod
    def _remove(self, kind: SecretKind) -> None:
        """
        Remove the raw value for a kind.

        Must return normally when no entry exists.
        """
        pass

    # Generic operations

    def get(self, kind: SecretKind) -> Union[str, TokenInfo]:
        """
        Get a stored secret.

        Args:
            kind: Secret kind to read

        Returns:
            The raw string, or a TokenInfo for SecretKind.TOKEN_INFO

        Raises:
            NotFoundError: If nothing is stored for the kind
            DeserializationError: If stored token data is corrupt
        """
        kind = SecretKind(kind)
        raw = self._read(kind)
        if raw is None:
            raise NotFoundError(
                f"No {kind.value} stored for {self.service_name}", kind=kind
            )

        if kind is SecretKind.TOKEN_INFO:
            return self._deserialize_token(raw)
        return raw

    def set(self, kind: SecretKind, value: Union[str, TokenInput]) -> None:
        """
        Store a secret, replacing any previous value.

        Args:
            kind: Secret kind to write
            value: String secret, or token data for SecretKind.TOKEN_INFO

        Raises:
            SerializationError: If token data cannot be encoded; the store
                is left untouched
        """
        kind = SecretKind(kind)
        if kind is SecretKind.TOKEN_INFO:
            raw = self._serialize_token(value)
        elif isinstance(value, str):
            raw = value
        else:
            raise TypeError(
                f"{kind.value} must be a string, got {type(value).__name__}"
            )

        self._write(kind, raw)
        logger.debug(
            "credential stored",
            store=self.store_type,
            service=self.service_name,
            kind=kind.value,
        )

    def delete(self, kind: SecretKind) -> None:
        """
        Delete a stored secret. Deleting an absent entry is not an error.

        Args:
            kind: Secret kind to remove
        """
        kind = SecretKind(kind)
        self._remove(kind)
        logger.debug(
            "credential deleted",
            store=self.store_type,
            service=self.service_name,
            kind=kind.value,
        )

    def has(self, kind: SecretKind) -> bool:
        """Check whether an entry exists for a kind without decoding it."""
        return self._read(SecretKind(kind)) is not None

    def stored_kinds(self) -> List[SecretKind]:
        """Kinds that currently have an entry, in declaration order."""
        return [kind for kind in SecretKind if self.has(kind)]

    def clear(self) -> None:
        """Delete every stored secret."""
        for kind in SecretKind:
            self.delete(kind)

    # API key

    def get_api_key(self) -> str:
        """Retrieve the stored API key."""
        return self.get(SecretKind.API_KEY)

    def set_api_key(self, key: str) -> None:
        """Store an API key."""
        self.set(SecretKind.API_KEY, key)

    def delete_api_key(self) -> None:
        """Remove the stored API key."""
        self.delete(SecretKind.API_KEY)

    # OAuth token

    def get_token_info(self) -> TokenInfo:
        """Retrieve stored OAuth token info."""
        return self.get(SecretKind.TOKEN_INFO)

    def set_token_info(self, info: TokenInput) -> None:
        """Store OAuth token info."""
        self.set(SecretKind.TOKEN_INFO, info)

    def delete_token_info(self) -> None:
        """Remove stored OAuth token info."""
        self.delete(SecretKind.TOKEN_INFO)

    # OAuth client credentials

    def get_client_id(self) -> str:
        """Retrieve the stored client ID."""
        return self.get(SecretKind.CLIENT_ID)

    def set_client_id(self, client_id: str) -> None:
        """Store a client ID."""
        self.set(SecretKind.CLIENT_ID, client_id)

    def delete_client_id(self) -> None:
        """Remove the stored client ID."""
        self.delete(SecretKind.CLIENT_ID)

    def get_client_secret(self) -> str:
        """Retrieve the stored client secret."""
        return self.get(SecretKind.CLIENT_SECRET)

    def set_client_secret(self, secret: str) -> None:
        """Store a client secret."""
        self.set(SecretKind.CLIENT_SECRET, secret)

    def delete_client_secret(self) -> None:
        """Remove the stored client secret."""
        self.delete(SecretKind.CLIENT_SECRET)

    def _serialize_token(self, value: TokenInput) -> str:
        """Serialize token data for storage."""
        try:
            if isinstance(value, TokenInfo):
                info = value
            elif isinstance(value, Mapping):
                info = TokenInfo.from_dict(dict(value))
            else:
                raise TypeError(f"unsupported token type {type(value).__name__}")
            return info.to_json()
        except (TypeError, ValueError) as e:
            # Validation messages echo field values, keep them out of the text
            raise SerializationError(
                "Cannot serialize token info", kind=SecretKind.TOKEN_INFO
            ) from e

    def _deserialize_token(self, raw: str) -> TokenInfo:
        """Deserialize token data from storage."""
        try:
            return TokenInfo.from_json(raw)
        except ValidationError as e:
            raise DeserializationError(
                f"Corrupted token info for {self.service_name}: "
                f"{e.error_count()} validation error(s)",
                kind=SecretKind.TOKEN_INFO,
            ) from e

    def __repr__(self) -> str:
        return f"{type(self).__name__}(service_name={self.service_name!r})"
