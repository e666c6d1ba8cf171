# firehearts/infra/jwt/pyjwt_token_provider.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

import jwt

from firehearts.services._shared.errors import TokenInvalidError
from firehearts.services._shared.ports import KeyClass, SigningKeys, TokenProvider

log = logging.getLogger(__name__)


@dataclass(slots=True)
class PyJWTTokenProvider(TokenProvider):
    """
    Adapter signing tokens with PyJWT.

    Access and refresh tokens use separate secrets from :class:`SigningKeys`,
    so a refresh token can never pass as an access token (and vice versa)
    even before the ``type`` claim is checked.

    :param keys: Injected signing configuration.
    :param leeway: Clock skew tolerated when checking ``exp``.
    """

    keys: SigningKeys
    leeway: timedelta = timedelta(seconds=0)

    def encode(
        self,
        claims: dict[str, Any],
        *,
        key_class: KeyClass,
        expires_delta: timedelta | None = None,
    ) -> str:
        now = datetime.now(UTC)
        payload: dict[str, Any] = dict(claims)
        payload.update({"type": key_class.value, "jti": uuid4().hex, "iat": now})
        if expires_delta is not None:
            payload["exp"] = now + expires_delta
        return jwt.encode(payload, self.keys.secret_for(key_class), algorithm=self.keys.algorithm)

    def decode(self, token: str, *, key_class: KeyClass) -> dict[str, Any]:
        try:
            payload = jwt.decode(
                token,
                self.keys.secret_for(key_class),
                algorithms=[self.keys.algorithm],
                leeway=self.leeway,
            )
        except jwt.ExpiredSignatureError as exc:
            log.info("token.expired key_class=%s", key_class.value)
            raise TokenInvalidError("Token expired") from exc
        except jwt.InvalidTokenError as exc:
            log.info("token.invalid key_class=%s reason=%s", key_class.value, exc)
            raise TokenInvalidError() from exc

        if payload.get("type") != key_class.value:
            raise TokenInvalidError("Wrong token type")
        return payload
