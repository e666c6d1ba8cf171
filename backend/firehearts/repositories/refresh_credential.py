"""Refresh credential repository backing the SQL credential store."""

from __future__ import annotations

from sqlalchemy import delete, select

from firehearts.models.refresh_credential import RefreshCredential
from firehearts.repositories.base import BaseRepository


class RefreshCredentialRepository(BaseRepository[RefreshCredential]):
    """Find/insert/delete-by-owner access to ``refresh_credentials``."""

    model = RefreshCredential

    def find_by_token(self, token: str) -> RefreshCredential | None:
        return self.first(select(RefreshCredential).where(RefreshCredential.token == token))

    def delete_for_user(self, user_id: str) -> int:
        """Delete every credential owned by ``user_id``; return the row count."""
        stmt = delete(RefreshCredential).where(RefreshCredential.user_id == user_id)
        result = self.session.execute(stmt)
        return int(result.rowcount or 0)
