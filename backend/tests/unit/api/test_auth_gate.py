"""The auth gate classifies requests without touching downstream handlers."""

from __future__ import annotations

from datetime import timedelta

import pytest
from flask import g

from firehearts.api.deps import (
    Authorized,
    Forbidden,
    Unauthorized,
    authenticate_request,
    extract_token,
    require_auth,
)
from firehearts.core.errors import Forbidden as ForbiddenError
from firehearts.core.errors import Unauthorized as UnauthorizedError
from firehearts.services._shared.ports import KeyClass
from firehearts.services.tokens import IdentityClaims

CLAIMS = IdentityClaims(user_id="uid-1", name="Ada", email="ada@example.com", internal_id=1)


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        (None, None),
        ("", None),
        ("Bearer", None),
        ("Bearer ", ""),
        ("Bearer  abc", ""),
        ("Bearer abc", "abc"),
        ("anything abc extra", "abc"),
    ],
)
def test_extract_token_uses_second_segment(header, expected):
    assert extract_token(header) == expected


def _headers(app, value: str) -> dict[str, str]:
    return {app.config["AUTH_HEADER_NAME"]: value}


def test_missing_header_is_unauthorized(app, db):
    with app.test_request_context("/"):
        assert isinstance(authenticate_request(), Unauthorized)


def test_invalid_token_is_forbidden(app, db):
    with app.test_request_context("/", headers=_headers(app, "Bearer nope")):
        assert isinstance(authenticate_request(), Forbidden)


def test_empty_token_segment_is_forbidden(app, db):
    with app.test_request_context("/", headers=_headers(app, "Bearer  abc")):
        assert isinstance(authenticate_request(), Forbidden)


def test_refresh_token_is_forbidden(app, token_service):
    refresh = token_service.issue(CLAIMS, key_class=KeyClass.REFRESH)
    with app.test_request_context("/", headers=_headers(app, f"Bearer {refresh}")):
        assert isinstance(authenticate_request(), Forbidden)


def test_valid_token_is_authorized(app, token_service):
    token = token_service.issue(CLAIMS, ttl=timedelta(minutes=5))
    with app.test_request_context("/", headers=_headers(app, f"Bearer {token}")):
        result = authenticate_request()
        assert result == Authorized(CLAIMS)
        assert not hasattr(g, "identity")


def test_require_auth_does_not_call_handler_without_token(app, db):
    calls: list[int] = []

    @require_auth
    def handler():
        calls.append(1)

    with app.test_request_context("/"), pytest.raises(UnauthorizedError):
        handler()
    with app.test_request_context("/", headers=_headers(app, "Bearer bad")), pytest.raises(
        ForbiddenError
    ):
        handler()
    assert calls == []


def test_require_auth_exposes_claims(app, token_service):
    token = token_service.issue(CLAIMS, ttl=timedelta(minutes=5))

    @require_auth
    def handler():
        return g.identity

    with app.test_request_context("/", headers=_headers(app, f"Bearer {token}")):
        assert handler() == CLAIMS
