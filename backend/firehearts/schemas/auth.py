"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import Schema, fields, post_load, validate

from firehearts.schemas.common import RequestSchema
from firehearts.services.auth import LoginIn


class LoginSchema(RequestSchema):
    """Input payload for logging in with an existing profile id."""

    user_id = fields.String(data_key="id", required=True, validate=validate.Length(min=1, max=128))

    @post_load
    def to_dto(self, data: dict[str, Any], **_: Any) -> LoginIn:
        return LoginIn(**data)


class TokenRequestSchema(RequestSchema):
    """Refresh request; a missing token is reported by the token service."""

    token = fields.String(load_default=None, allow_none=True)


class TokenPairSchema(Schema):
    """Response payload containing an access/refresh pair."""

    access_token = fields.String(data_key="accessToken", required=True)
    refresh_token = fields.String(data_key="refreshToken", required=True)
