"""Shared plumbing for the SQLAlchemy repositories.

Repositories only read and stage changes. Commit and rollback belong to the
Unit of Work that created them.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import Select
from sqlalchemy.orm import Session

E = TypeVar("E")


class BaseRepository(Generic[E]):
    """
    Session-bound access to one mapped model.

    ``updatable`` lists the attributes :meth:`assign` may touch; anything
    else is refused so request payloads cannot reach identity columns.
    """

    model: ClassVar[type[Any]]
    updatable: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, session: Session) -> None:
        self.session = session

    def first(self, stmt: Select[tuple[E]]) -> E | None:
        return self.session.execute(stmt).scalars().first()

    def all(self, stmt: Select[tuple[E]]) -> list[E]:
        return list(self.session.execute(stmt).scalars().all())

    def add(self, instance: E) -> E:
        """Stage ``instance`` and flush so its primary key is populated."""
        self.session.add(instance)
        self.flush()
        return instance

    def assign(self, instance: E, fields: Mapping[str, Any]) -> E:
        """
        Set whitelisted attributes on ``instance``.

        :raises ValueError: If ``fields`` names a non-updatable attribute.
        """
        refused = sorted(set(fields) - self.updatable)
        if refused:
            raise ValueError(f"Unknown or non-updatable fields: {refused}")
        for key, value in fields.items():
            setattr(instance, key, value)
        return instance

    def flush(self) -> None:
        self.session.flush()
