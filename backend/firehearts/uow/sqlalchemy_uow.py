"""Units of Work over the Flask-SQLAlchemy scoped session."""

from __future__ import annotations

from sqlalchemy import event
from sqlalchemy.orm import Session

from firehearts.core.extensions import db
from firehearts.repositories import ProfileRepository, RefreshCredentialRepository


class _SessionScope:
    """Binds both repositories to the current scoped session."""

    read_only = False

    def __init__(self) -> None:
        self.session = db.session
        self.profiles = ProfileRepository(session=self.session)
        self.credentials = RefreshCredentialRepository(session=self.session)

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyUnitOfWork(_SessionScope):
    """Read-write scope: commit on a clean exit, rollback when anything raised."""

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.rollback()
            return
        try:
            self.commit()
        except Exception:
            self.rollback()
            raise

    def commit(self) -> None:
        self.session.commit()


class SQLAlchemyReadOnlyUnitOfWork(_SessionScope):
    """
    Read scope that can never write.

    Pending ORM changes abort the flush, ``commit()`` raises, and the scope
    always ends in a rollback. Services project rows into DTOs before the
    scope closes because the rollback expires loaded instances.
    """

    read_only = True

    def __init__(self) -> None:
        super().__init__()
        self._bound: Session | None = None

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        # The listener must target the concrete session, not the registry
        self._bound = db.session()
        event.listen(self._bound, "before_flush", _refuse_writes)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.rollback()
        finally:
            if self._bound is not None:
                event.remove(self._bound, "before_flush", _refuse_writes)
                self._bound = None

    def commit(self) -> None:
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")


def _refuse_writes(session: Session, flush_context, instances) -> None:
    if session.new or session.dirty or session.deleted:
        raise RuntimeError("Read-only UnitOfWork: ORM flush blocked with pending changes.")
