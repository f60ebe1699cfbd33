"""
Credential helpers for the auth commands of the CLI.
Combine environment overrides with the credential store.
"""

import os
from typing import Mapping, Optional

from .auth.token import TokenInfo
from .stores.base import BaseStore, DeserializationError, NotFoundError
from .logging_config import get_logger

logger = get_logger(__name__)

API_KEY_ENV_VAR = "LINEAR_API_KEY"


def resolve_api_key(
    store: BaseStore,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[str]:
    """
    Find the API key to use.

    The ``LINEAR_API_KEY`` environment variable takes precedence over the
    stored key.

    Args:
        store: Credential store
        environ: Environment mapping, defaults to ``os.environ``

    Returns:
        The API key, or None if neither source has one
    """
    environ = os.environ if environ is None else environ
    env_key = environ.get(API_KEY_ENV_VAR)
    if env_key:
        return env_key

    try:
        return store.get_api_key()
    except NotFoundError:
        return None


def load_token_info(store: BaseStore, discard_corrupt: bool = False) -> Optional[TokenInfo]:
    """
    Load the stored OAuth token.

    Args:
        store: Credential store
        discard_corrupt: Delete an undecodable token and report it as
            absent instead of raising

    Returns:
        TokenInfo, or None if no token is stored

    Raises:
        DeserializationError: If the stored token is corrupt and
            ``discard_corrupt`` is False
    """
    try:
        return store.get_token_info()
    except NotFoundError:
        return None
    except DeserializationError:
        if not discard_corrupt:
            raise
        logger.warning("discarding corrupt token info", service=store.service_name)
        store.delete_token_info()
        return None


def is_authenticated(
    store: BaseStore,
    environ: Optional[Mapping[str, str]] = None,
) -> bool:
    """
    Check whether an API key or an unexpired OAuth token is available.

    A corrupt stored token counts as not authenticated; it is left in
    place for ``load_token_info`` to report or discard.
    """
    if resolve_api_key(store, environ):
        return True

    try:
        token = load_token_info(store)
    except DeserializationError:
        return False
    return token is not None and not token.is_expired()


def logout(store: BaseStore) -> None:
    """Remove every stored credential."""
    store.clear()
    logger.info("credentials removed", service=store.service_name)
