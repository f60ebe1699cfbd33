"""Contract tests run against every store implementation."""

import pytest

from linear_vault.auth import TokenInfo
from linear_vault.stores import (
    DeserializationError,
    NotFoundError,
    SecretKind,
    SerializationError,
)

STRING_KINDS = [SecretKind.API_KEY, SecretKind.CLIENT_ID, SecretKind.CLIENT_SECRET]

FULL_TOKEN = TokenInfo(
    access_token="tok1",
    token_type="Bearer",
    refresh_token="ref1",
    expiry="2025-01-01T00:00:00Z",
    scope="read write",
)


class TestSecretKind:
    def test_stored_key_names(self):
        assert [kind.value for kind in SecretKind] == [
            "api_key",
            "token_info",
            "client_id",
            "client_secret",
        ]

    def test_lookup_by_name(self):
        assert SecretKind("client_secret") is SecretKind.CLIENT_SECRET


class TestGet:
    @pytest.mark.parametrize("kind", list(SecretKind))
    def test_absent_raises_not_found(self, store, kind):
        with pytest.raises(NotFoundError) as exc_info:
            store.get(kind)
        assert exc_info.value.kind is kind

    def test_accessors_raise_not_found(self, store):
        for getter in (
            store.get_api_key,
            store.get_token_info,
            store.get_client_id,
            store.get_client_secret,
        ):
            with pytest.raises(NotFoundError):
                getter()

    def test_kind_accepts_plain_string(self, store):
        store.set("api_key", "lin_api_abc123")
        assert store.get("api_key") == "lin_api_abc123"


class TestRoundTrip:
    @pytest.mark.parametrize("kind", STRING_KINDS)
    def test_string_kinds(self, store, kind):
        store.set(kind, "s3cr3t value with spaces")
        assert store.get(kind) == "s3cr3t value with spaces"

    def test_empty_string(self, store):
        store.set_client_id("")
        assert store.get_client_id() == ""

    def test_token_required_fields_only(self, store):
        info = TokenInfo(access_token="tok1")
        store.set_token_info(info)
        assert store.get_token_info() == info

    def test_token_all_fields(self, store):
        store.set_token_info(FULL_TOKEN)
        assert store.get_token_info() == FULL_TOKEN

    def test_token_from_mapping(self, store):
        store.set_token_info(
            {
                "access_token": "tok1",
                "refresh_token": "ref1",
                "expiry": "2025-01-01T00:00:00Z",
            }
        )
        info = store.get_token_info()
        assert info.access_token == "tok1"
        assert info.refresh_token == "ref1"
        assert info.expiry.isoformat() == "2025-01-01T00:00:00+00:00"

    def test_kinds_are_independent(self, store):
        store.set_api_key("key")
        store.set_client_id("id")
        store.set_client_secret("secret")
        store.set_token_info(FULL_TOKEN)

        assert store.get_api_key() == "key"
        assert store.get_client_id() == "id"
        assert store.get_client_secret() == "secret"
        assert store.get_token_info() == FULL_TOKEN


class TestSet:
    @pytest.mark.parametrize("kind", STRING_KINDS)
    def test_overwrite(self, store, kind):
        store.set(kind, "v1")
        store.set(kind, "v2")
        assert store.get(kind) == "v2"

    def test_token_overwrite(self, store):
        store.set_token_info(TokenInfo(access_token="old", refresh_token="r"))
        store.set_token_info(TokenInfo(access_token="new"))
        assert store.get_token_info() == TokenInfo(access_token="new")

    def test_idempotent(self, store):
        store.set_token_info(FULL_TOKEN)
        store.set_token_info(FULL_TOKEN)
        assert store.get_token_info() == FULL_TOKEN
        assert store.stored_kinds() == [SecretKind.TOKEN_INFO]

    def test_invalid_token_mapping_leaves_store_untouched(self, store):
        store.set_token_info(FULL_TOKEN)
        with pytest.raises(SerializationError):
            store.set_token_info({"refresh_token": "no access token"})
        assert store.get_token_info() == FULL_TOKEN

    def test_unsupported_token_type(self, store):
        with pytest.raises(SerializationError):
            store.set_token_info("tok1")
        assert not store.has(SecretKind.TOKEN_INFO)

    def test_non_string_secret_rejected(self, store):
        with pytest.raises(TypeError):
            store.set_api_key(12345)
        assert not store.has(SecretKind.API_KEY)


class TestDelete:
    @pytest.mark.parametrize("kind", list(SecretKind))
    def test_absent_is_silent(self, store, kind):
        store.delete(kind)
        store.delete(kind)

    def test_removes_only_that_kind(self, store):
        store.set_api_key("key")
        store.set_client_id("id")
        store.delete_api_key()

        with pytest.raises(NotFoundError):
            store.get_api_key()
        assert store.get_client_id() == "id"

    def test_accessors(self, store):
        store.set_api_key("key")
        store.set_token_info(FULL_TOKEN)
        store.set_client_id("id")
        store.set_client_secret("secret")

        store.delete_api_key()
        store.delete_token_info()
        store.delete_client_id()
        store.delete_client_secret()

        assert store.stored_kinds() == []

    def test_clear(self, store):
        store.set_api_key("key")
        store.set_token_info(FULL_TOKEN)
        store.clear()
        store.clear()
        assert store.stored_kinds() == []


class TestCorruption:
    @pytest.mark.parametrize(
        "raw",
        ["garbage", "{", "[1, 2]", '{"refresh_token": "ref1"}', '{"access_token": null}'],
    )
    def test_corrupt_token_raises(self, store, plant_raw, raw):
        plant_raw("token_info", raw)
        with pytest.raises(DeserializationError) as exc_info:
            store.get_token_info()
        assert exc_info.value.kind is SecretKind.TOKEN_INFO

    def test_corrupt_token_left_in_place(self, store, plant_raw):
        plant_raw("token_info", "garbage")
        with pytest.raises(DeserializationError):
            store.get_token_info()
        assert store.has(SecretKind.TOKEN_INFO)

    def test_corrupt_token_can_be_deleted(self, store, plant_raw):
        plant_raw("token_info", "garbage")
        store.delete_token_info()
        with pytest.raises(NotFoundError):
            store.get_token_info()

    def test_raw_strings_are_not_parsed(self, store, plant_raw):
        plant_raw("api_key", "{not json")
        assert store.get_api_key() == "{not json"


class TestScenarios:
    def test_api_key_lifecycle(self, store):
        store.set_api_key("lin_api_abc123")
        assert store.get_api_key() == "lin_api_abc123"

        store.delete_api_key()
        with pytest.raises(NotFoundError):
            store.get_api_key()

        store.delete_api_key()

    def test_token_lifecycle(self, store):
        store.set_token_info(
            {
                "access_token": "tok1",
                "refresh_token": "ref1",
                "expiry": "2025-01-01T00:00:00Z",
            }
        )
        assert store.get_token_info() == TokenInfo(
            access_token="tok1",
            refresh_token="ref1",
            expiry="2025-01-01T00:00:00Z",
        )


class TestBaseStore:
    def test_empty_service_name_rejected(self):
        from linear_vault.stores import MemoryStore

        with pytest.raises(ValueError):
            MemoryStore(service_name="")

    def test_repr_names_service(self, store):
        assert store.service_name in repr(store)
