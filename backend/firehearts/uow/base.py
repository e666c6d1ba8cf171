"""Unit of Work contract shared by services and the SQL credential store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from firehearts.repositories import ProfileRepository, RefreshCredentialRepository


class UnitOfWork(Protocol):
    """
    One transaction scope exposing the repositories it binds.

    Leaving the ``with`` block commits when no exception escaped and rolls
    back otherwise. Read-only scopes always roll back.
    """

    profiles: ProfileRepository
    credentials: RefreshCredentialRepository

    def __enter__(self) -> UnitOfWork: ...

    def __exit__(self, exc_type, exc, tb) -> None: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
