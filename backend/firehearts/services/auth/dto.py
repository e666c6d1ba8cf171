# firehearts/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param user_id: External profile id.
    :type user_id: str
    """

    user_id: str


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for access-token refresh.

    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str | None
    """

    refresh_token: str | None
