# firehearts/services/tokens/service.py
from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any

from firehearts.services._shared.errors import (
    CredentialNotFoundError,
    TokenInvalidError,
    TokenMissingError,
)
from firehearts.services._shared.ports import CredentialStore, KeyClass, TokenProvider
from firehearts.services.tokens.dto import IdentityClaims, TokenPair, TokenTTLConfig

log = logging.getLogger(__name__)


class TokenService:
    """
    Session-token lifecycle: issue, verify, rotate and revoke.

    Signing is delegated to a :class:`TokenProvider` built from injected keys;
    refresh credentials live in a :class:`CredentialStore`. The service holds
    no per-request state.

    Lifecycle
    ---------
    ``open_session`` persists a refresh credential and hands out a pair;
    ``rotate`` exchanges a stored refresh token for a new access token;
    ``revoke_all`` deletes every credential of a user (logout). Access token
    expiry is only noticed on the next ``verify``.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        credential_store: CredentialStore,
        ttl: TokenTTLConfig | None = None,
    ) -> None:
        """
        :param token_provider: Adapter for signing/decoding JWTs.
        :param credential_store: Persisted set of issued refresh tokens.
        :param ttl: Lifetimes per issuing path.
        """
        self.tokens = token_provider
        self.credentials = credential_store
        self.ttl = ttl or TokenTTLConfig()

    # ------------------------------------------------------------------ #
    # Stateless primitives
    # ------------------------------------------------------------------ #

    def issue(
        self,
        claims: IdentityClaims,
        *,
        key_class: KeyClass = KeyClass.ACCESS,
        ttl: timedelta | None = None,
    ) -> str:
        """
        Sign ``claims`` with the key of ``key_class``.

        :param ttl: Lifetime; ``None`` issues a token without ``exp``.
        """
        return self.tokens.encode(claims.to_claims(), key_class=key_class, expires_delta=ttl)

    def verify(self, token: str | None, *, key_class: KeyClass = KeyClass.ACCESS) -> IdentityClaims:
        """
        Check signature, expiry and type, and return the embedded identity.

        :raises TokenMissingError: If no token was supplied.
        :raises TokenInvalidError: On any verification failure.
        """
        if not token:
            raise TokenMissingError()
        payload = self.tokens.decode(token, key_class=key_class)
        return self._identity_from(payload)

    # ------------------------------------------------------------------ #
    # Session lifecycle
    # ------------------------------------------------------------------ #

    def open_session(self, claims: IdentityClaims, *, access_ttl: timedelta) -> TokenPair:
        """
        Issue an access/refresh pair and persist the refresh credential.

        The credential is stored before any token is returned, so a client
        never holds a refresh token the server does not know about.
        """
        refresh = self.issue(claims, key_class=KeyClass.REFRESH, ttl=self.ttl.refresh)
        self.credentials.insert(refresh, claims.user_id)
        access = self.issue(claims, key_class=KeyClass.ACCESS, ttl=access_ttl)
        log.info("session.opened", extra={"user_id": claims.user_id})
        return TokenPair(access_token=access, refresh_token=refresh)

    def rotate(self, refresh_token: str | None) -> TokenPair:
        """
        Exchange a stored refresh token for a new access token.

        The refresh token itself is not rotated: the same value is returned
        and stays valid until logout.

        :raises TokenMissingError: If no refresh token was supplied.
        :raises CredentialNotFoundError: If the token is not in the store.
        :raises TokenInvalidError: If the stored token fails verification.
        """
        if not refresh_token:
            raise TokenMissingError()

        # 1) Server-side state first: revoked credentials never reach the decoder
        if self.credentials.find(refresh_token) is None:
            log.info("session.rotate_rejected reason=credential_not_found")
            raise CredentialNotFoundError()

        # 2) Signature / expiry of the refresh token itself
        claims = self.verify(refresh_token, key_class=KeyClass.REFRESH)

        access = self.issue(claims, key_class=KeyClass.ACCESS, ttl=self.ttl.access_on_refresh)
        log.info("session.rotated", extra={"user_id": claims.user_id})
        return TokenPair(access_token=access, refresh_token=refresh_token)

    def revoke_all(self, user_id: str) -> int:
        """Delete every refresh credential of ``user_id``; return how many."""
        removed = self.credentials.delete_for_user(user_id)
        log.info("session.revoked count=%s", removed, extra={"user_id": user_id})
        return removed

    # ------------------------------------------------------------------ #
    # Utilities
    # ------------------------------------------------------------------ #

    @staticmethod
    def _identity_from(payload: dict[str, Any]) -> IdentityClaims:
        try:
            return IdentityClaims.from_claims(payload)
        except (KeyError, TypeError, ValueError) as exc:
            raise TokenInvalidError("Token is missing identity claims") from exc
