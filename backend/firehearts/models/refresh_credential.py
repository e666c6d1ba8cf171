"""Persisted refresh credentials; a row is valid until it is deleted."""

from __future__ import annotations

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from firehearts.core.extensions import db

from .base import PKMixin, ReprMixin


class RefreshCredential(PKMixin, ReprMixin, db.Model):
    """Issued refresh token bound to the external ``user_id`` of its owner."""

    __tablename__ = "refresh_credentials"

    token: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False)

    __table_args__ = (
        Index("ix_refresh_credentials_token", "token"),
        Index("ix_refresh_credentials_user_id", "user_id"),
    )
