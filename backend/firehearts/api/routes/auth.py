"""Session endpoints: login, token refresh and logout."""

from __future__ import annotations

from flask import Blueprint

from firehearts.api.deps import (
    current_identity,
    get_auth_service,
    json_response,
    request_payload,
    require_auth,
    timing,
)
from firehearts.schemas import LoginSchema, MessageSchema, TokenPairSchema, TokenRequestSchema
from firehearts.services.auth import RefreshIn

bp = Blueprint("auth", __name__)

login_schema = LoginSchema()
token_request_schema = TokenRequestSchema()
token_pair_schema = TokenPairSchema()
message_schema = MessageSchema()


@bp.post("/login")
@timing
def login():
    """Issue a token pair for an existing profile id."""

    dto = login_schema.load(request_payload())
    pair = get_auth_service().login(dto)
    return json_response(token_pair_schema.dump(pair), status=201)


@bp.post("/token")
@timing
def refresh_token():
    """Exchange a stored refresh token for a new access token."""

    data = token_request_schema.load(request_payload())
    pair = get_auth_service().refresh(RefreshIn(refresh_token=data["token"]))
    return json_response(token_pair_schema.dump(pair), status=201)


@bp.delete("/logout")
@require_auth
@timing
def logout():
    """Revoke every refresh credential of the caller."""

    get_auth_service().logout(current_identity().user_id)
    return json_response(message_schema.dump({"message": "Logged out successfully"}))
