from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Any, Protocol


class KeyClass(str, Enum):
    """Which signing key (and ``type`` claim) a token belongs to."""

    ACCESS = "access"
    REFRESH = "refresh"


@dataclass(frozen=True, slots=True)
class SigningKeys:
    """
    Process-wide signing configuration, injected at construction.

    :param access_secret: Secret for access tokens.
    :param refresh_secret: Secret for refresh tokens; must differ from ``access_secret``.
    :param algorithm: JWS algorithm shared by both key classes.
    """

    access_secret: str
    refresh_secret: str
    algorithm: str = "HS256"

    def __post_init__(self) -> None:
        if not self.access_secret or not self.refresh_secret:
            raise ValueError("Both access and refresh secrets are required.")
        if self.access_secret == self.refresh_secret:
            raise ValueError("Access and refresh secrets must be distinct.")

    def secret_for(self, key_class: KeyClass) -> str:
        return self.access_secret if key_class is KeyClass.ACCESS else self.refresh_secret


class TokenProvider(Protocol):
    """Port for signing and decoding tokens with per-class keys."""

    def encode(
        self,
        claims: dict[str, Any],
        *,
        key_class: KeyClass,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Sign ``claims``; ``expires_delta=None`` omits the ``exp`` claim."""
        ...

    def decode(self, token: str, *, key_class: KeyClass) -> dict[str, Any]:
        """
        Verify signature, expiry and ``type`` and return the payload.

        :raises TokenInvalidError: On any verification failure.
        """
        ...
