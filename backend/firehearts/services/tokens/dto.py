# firehearts/services/tokens/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any

# Claim names on the wire
CLAIM_USER_ID = "id"
CLAIM_NAME = "name"
CLAIM_EMAIL = "email"
CLAIM_INTERNAL_ID = "_id"


@dataclass(frozen=True, slots=True)
class IdentityClaims:
    """
    Identity embedded in every access and refresh token.

    :param user_id: External profile id.
    :param name: Display name at issuance.
    :param email: Email at issuance.
    :param internal_id: Surrogate database key of the profile.
    """

    user_id: str
    name: str
    email: str
    internal_id: int

    def to_claims(self) -> dict[str, Any]:
        return {
            CLAIM_USER_ID: self.user_id,
            CLAIM_NAME: self.name,
            CLAIM_EMAIL: self.email,
            CLAIM_INTERNAL_ID: self.internal_id,
        }

    @classmethod
    def from_claims(cls, payload: dict[str, Any]) -> IdentityClaims:
        """
        Rebuild identity from a decoded payload.

        :raises KeyError: If an identity claim is missing.
        """
        return cls(
            user_id=str(payload[CLAIM_USER_ID]),
            name=str(payload[CLAIM_NAME]),
            email=str(payload[CLAIM_EMAIL]),
            internal_id=int(payload[CLAIM_INTERNAL_ID]),
        )


@dataclass(frozen=True, slots=True)
class TokenPair:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :param refresh_token: Encoded refresh JWT.
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class TokenTTLConfig:
    """
    Token lifetimes per issuing path.

    Access tokens issued when a profile is created live for 15 minutes while
    those issued at login or refresh live for a week.

    :param access_on_create: Access lifetime at profile creation.
    :param access_on_login: Access lifetime at login.
    :param access_on_refresh: Access lifetime at refresh rotation.
    :param refresh: Refresh lifetime; ``None`` issues refresh tokens without ``exp``.
    """

    access_on_create: timedelta = timedelta(minutes=15)
    access_on_login: timedelta = timedelta(weeks=1)
    access_on_refresh: timedelta = timedelta(weeks=1)
    refresh: timedelta | None = None
