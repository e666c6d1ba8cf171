"""Profile model: the public identity and score of a player."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates

from firehearts.core.extensions import db

from .base import PKMixin, ReprMixin

DEFAULT_FIREHEARTS = 600


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Profile(PKMixin, ReprMixin, db.Model):
    """
    Persisted profile record.

    Fields
    ------
    id : int
        Surrogate key, exposed to clients as ``_id``.
    user_id : str
        External identity supplied by the client at creation (exposed as ``id``).
    name : str
        Display name.
    email : str
        Contact email, stored as given.
    firehearts : int
        Score; starts at :data:`DEFAULT_FIREHEARTS` and only moves through
        clamped increments.
    image : dict
        ``{"url": ..., "blurhash": ...}`` as returned by the upload endpoint.
    last_edited : datetime
        Refreshed on every mutation; leaderboard tiebreaker.
    year_of_study : int
        Academic year.
    """

    __tablename__ = "profiles"

    user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    firehearts: Mapped[int] = mapped_column(Integer, nullable=False, default=DEFAULT_FIREHEARTS)
    image: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    last_edited: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    year_of_study: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", name="uq_profiles_user_id"),
        Index("ix_profiles_leaderboard", "firehearts", "last_edited"),
    )

    # -------------------- Validators --------------------
    @validates("name")
    def _normalize_name(self, key: str, value: str) -> str:
        """
        Trim and require a display name.

        :raises ValueError: If the name is missing or only whitespace.
        """
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Name is required.")
        return value.strip()

    @validates("image")
    def _validate_image(self, key: str, value: dict[str, Any]) -> dict[str, Any]:
        """
        Require an image object carrying at least a ``url``.

        :raises ValueError: If ``value`` is not a mapping with a string ``url``.
        """
        if not isinstance(value, dict) or not isinstance(value.get("url"), str):
            raise ValueError("Image must be an object with a 'url'.")
        return dict(value)
