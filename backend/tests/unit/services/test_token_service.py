# tests/unit/services/test_token_service.py
from __future__ import annotations

from datetime import timedelta

import pytest
from freezegun import freeze_time

from firehearts.infra.jwt import PyJWTTokenProvider
from firehearts.services._shared.errors import (
    CredentialNotFoundError,
    TokenInvalidError,
    TokenMissingError,
)
from firehearts.services._shared.ports import InMemoryCredentialStore, KeyClass, SigningKeys
from firehearts.services.tokens import IdentityClaims, TokenPair, TokenService


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def store() -> InMemoryCredentialStore:
    return InMemoryCredentialStore()


@pytest.fixture()
def service(store) -> TokenService:
    """TokenService wired to the real PyJWT adapter and an in-memory store."""
    keys = SigningKeys(access_secret="unit-access", refresh_secret="unit-refresh")
    return TokenService(token_provider=PyJWTTokenProvider(keys), credential_store=store)


@pytest.fixture()
def claims() -> IdentityClaims:
    return IdentityClaims(user_id="uid-7", name="Grace", email="grace@example.com", internal_id=7)


# -------------------------------- Tests ----------------------------------- #
def test_verify_roundtrips_identity(service, claims):
    token = service.issue(claims, ttl=timedelta(minutes=15))
    assert service.verify(token) == claims


@pytest.mark.parametrize("token", [None, ""])
def test_verify_without_token_is_missing(service, token):
    with pytest.raises(TokenMissingError):
        service.verify(token)


def test_verify_rejects_refresh_token_as_access(service, claims):
    refresh = service.issue(claims, key_class=KeyClass.REFRESH)
    with pytest.raises(TokenInvalidError):
        service.verify(refresh)


def test_verify_rejects_expired_token(service, claims):
    with freeze_time("2024-03-01 09:00:00"):
        token = service.issue(claims, ttl=service.ttl.access_on_create)
    with freeze_time("2024-03-01 09:14:00"):
        assert service.verify(token) == claims
    with freeze_time("2024-03-01 09:15:01"), pytest.raises(TokenInvalidError):
        service.verify(token)


def test_verify_rejects_payload_without_identity(service):
    token = service.tokens.encode({"foo": "bar"}, key_class=KeyClass.ACCESS)
    with pytest.raises(TokenInvalidError, match="identity"):
        service.verify(token)


def test_open_session_persists_refresh_before_returning(service, store, claims):
    pair = service.open_session(claims, access_ttl=timedelta(minutes=15))
    assert isinstance(pair, TokenPair)
    view = store.find(pair.refresh_token)
    assert view is not None
    assert view.user_id == claims.user_id
    assert service.verify(pair.access_token) == claims


def test_open_session_access_ttl_is_respected(service, claims):
    with freeze_time("2024-03-01 09:00:00"):
        pair = service.open_session(claims, access_ttl=timedelta(minutes=15))
    with freeze_time("2024-03-01 10:00:00"), pytest.raises(TokenInvalidError):
        service.verify(pair.access_token)


def test_rotate_returns_new_access_and_same_refresh(service, claims):
    pair = service.open_session(claims, access_ttl=timedelta(minutes=15))
    rotated = service.rotate(pair.refresh_token)
    assert rotated.refresh_token == pair.refresh_token
    assert rotated.access_token != pair.access_token
    assert service.verify(rotated.access_token) == claims


def test_rotated_access_token_lives_one_week(service, claims):
    with freeze_time("2024-03-01 09:00:00"):
        pair = service.open_session(claims, access_ttl=timedelta(minutes=15))
        rotated = service.rotate(pair.refresh_token)
    with freeze_time("2024-03-07 09:00:00"):
        assert service.verify(rotated.access_token) == claims
    with freeze_time("2024-03-08 09:00:01"), pytest.raises(TokenInvalidError):
        service.verify(rotated.access_token)


def test_rotate_without_token_is_missing(service):
    with pytest.raises(TokenMissingError):
        service.rotate(None)


def test_rotate_unknown_token_is_credential_not_found(service, claims):
    # Validly signed, but never stored
    stray = service.issue(claims, key_class=KeyClass.REFRESH)
    with pytest.raises(CredentialNotFoundError):
        service.rotate(stray)


def test_rotate_stored_but_invalid_token_is_rejected(service, store, claims):
    store.insert("garbage", claims.user_id)
    with pytest.raises(TokenInvalidError):
        service.rotate("garbage")


def test_rotate_after_revoke_all_fails(service, claims):
    pair = service.open_session(claims, access_ttl=timedelta(minutes=15))
    assert service.revoke_all(claims.user_id) == 1
    with pytest.raises(CredentialNotFoundError):
        service.rotate(pair.refresh_token)


def test_revoke_all_removes_every_session_of_user(service, store, claims):
    other = IdentityClaims(user_id="uid-8", name="Alan", email="alan@example.com", internal_id=8)
    first = service.open_session(claims, access_ttl=timedelta(minutes=15))
    second = service.open_session(claims, access_ttl=timedelta(weeks=1))
    kept = service.open_session(other, access_ttl=timedelta(weeks=1))

    assert service.revoke_all(claims.user_id) == 2
    assert store.find(first.refresh_token) is None
    assert store.find(second.refresh_token) is None
    assert store.find(kept.refresh_token) is not None
