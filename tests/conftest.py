"""
Shared test fixtures.

The real OS keyring is never touched: keyring-backed stores are built on
FakeKeyring, a dictionary with the keyring backend call surface.
"""

from __future__ import annotations

import uuid
from typing import Dict, Optional, Tuple

import pytest
from keyring.errors import PasswordDeleteError

from linear_vault.config import reset_config
from linear_vault.stores import KeyringStore, MemoryStore


class FakeKeyring:
    """In-process stand-in for a keyring backend."""

    def __init__(self):
        self.passwords: Dict[Tuple[str, str], str] = {}
        self.fail_with: Optional[Exception] = None
        self.calls = []

    def _maybe_fail(self):
        if self.fail_with is not None:
            raise self.fail_with

    def get_password(self, service: str, username: str) -> Optional[str]:
        self.calls.append(("get", service, username))
        self._maybe_fail()
        return self.passwords.get((service, username))

    def set_password(self, service: str, username: str, password: str) -> None:
        self.calls.append(("set", service, username))
        self._maybe_fail()
        self.passwords[(service, username)] = password

    def delete_password(self, service: str, username: str) -> None:
        self.calls.append(("delete", service, username))
        self._maybe_fail()
        try:
            del self.passwords[(service, username)]
        except KeyError:
            raise PasswordDeleteError("Password not found") from None


@pytest.fixture(autouse=True)
def clean_config():
    """Reset config singleton between tests."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def service_name():
    """Unique service namespace for test isolation."""
    return f"linear-cli-test-{uuid.uuid4().hex[:8]}"


@pytest.fixture
def fake_keyring():
    return FakeKeyring()


@pytest.fixture
def keyring_store(service_name, fake_keyring):
    return KeyringStore(service_name=service_name, backend=fake_keyring)


@pytest.fixture
def memory_store(service_name):
    return MemoryStore(service_name=service_name)


@pytest.fixture(params=["memory", "keyring"])
def store(request):
    """Every store implementation, for contract tests."""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def plant_raw(store, fake_keyring):
    """Write a raw value straight into the medium behind ``store``."""

    def _plant(kind: str, value: str) -> None:
        if isinstance(store, MemoryStore):
            store.raw[kind] = value
        else:
            fake_keyring.passwords[(store.service_name, kind)] = value

    return _plant
