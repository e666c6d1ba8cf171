"""Repository package exposing persistence-layer access for all models."""

from __future__ import annotations

from firehearts.repositories.base import BaseRepository
from firehearts.repositories.profile import ProfileRepository
from firehearts.repositories.refresh_credential import RefreshCredentialRepository

__all__ = [
    "BaseRepository",
    "ProfileRepository",
    "RefreshCredentialRepository",
]
