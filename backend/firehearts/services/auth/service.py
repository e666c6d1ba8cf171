# firehearts/services/auth/service.py
from __future__ import annotations

import logging

from firehearts.services._shared.base import BaseService
from firehearts.services._shared.errors import NotFoundError
from firehearts.services.auth.dto import LoginIn, RefreshIn
from firehearts.services.profiles.service import identity_of
from firehearts.services.tokens import TokenPair, TokenService

log = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Authentication use cases (login / refresh / logout).

    Login trusts the supplied profile id: there is no password. Token
    issuance, verification and revocation are delegated to
    :class:`TokenService`.
    """

    def __init__(self, *, token_service: TokenService) -> None:
        super().__init__()
        self.tokens = token_service

    def login(self, dto: LoginIn) -> TokenPair:
        """
        Open a session for an existing profile.

        :returns: Token pair; the access token lives one week.
        :raises NotFoundError: If no profile has ``dto.user_id``.
        """
        with self.ro_uow() as uow:
            row = uow.profiles.get_by_user_id(dto.user_id)
            if row is None:
                raise NotFoundError("Profile", dto.user_id)
            claims = identity_of(row)

        return self.tokens.open_session(claims, access_ttl=self.tokens.ttl.access_on_login)

    def refresh(self, dto: RefreshIn) -> TokenPair:
        """Exchange a stored refresh token for a new access token."""
        return self.tokens.rotate(dto.refresh_token)

    def logout(self, user_id: str) -> int:
        """
        Revoke every refresh credential of ``user_id``.

        :returns: Number of credentials removed.
        """
        removed = self.tokens.revoke_all(user_id)
        log.info("auth.logout", extra={"user_id": user_id})
        return removed
