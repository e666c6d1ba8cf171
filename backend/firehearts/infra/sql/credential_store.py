"""Credential store persisting refresh tokens in the ``refresh_credentials`` table."""

from __future__ import annotations

from collections.abc import Callable

from firehearts.models.refresh_credential import RefreshCredential
from firehearts.services._shared.ports import CredentialStore, RefreshCredentialView
from firehearts.uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork, UnitOfWork


class SQLAlchemyCredentialStore(CredentialStore):
    """
    SQL-backed :class:`CredentialStore`.

    Each call runs in its own Unit of Work so inserts are committed before the
    token leaves the process. Requires an active Flask app context.
    """

    def __init__(
        self,
        *,
        rw_uow: Callable[[], UnitOfWork] = SQLAlchemyUnitOfWork,
        ro_uow: Callable[[], UnitOfWork] = SQLAlchemyReadOnlyUnitOfWork,
    ) -> None:
        self._rw_uow = rw_uow
        self._ro_uow = ro_uow

    def find(self, token: str) -> RefreshCredentialView | None:
        with self._ro_uow() as uow:
            row = uow.credentials.find_by_token(token)
            if row is None:
                return None
            return RefreshCredentialView(token=row.token, user_id=row.user_id)

    def insert(self, token: str, user_id: str) -> None:
        with self._rw_uow() as uow:
            uow.credentials.add(RefreshCredential(token=token, user_id=user_id))

    def delete_for_user(self, user_id: str) -> int:
        with self._rw_uow() as uow:
            return uow.credentials.delete_for_user(user_id)
