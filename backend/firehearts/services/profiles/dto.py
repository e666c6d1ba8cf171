# firehearts/services/profiles/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

# ---------------------------- Output DTOs --------------------------------- #


@dataclass(frozen=True, slots=True)
class ProfileOut:
    """
    Output projection of a profile.

    :param internal_id: Surrogate key (``_id`` on the wire).
    :param user_id: External id (``id`` on the wire).
    :param name: Display name.
    :param email: Contact email.
    :param firehearts: Current score.
    :param image: ``{"url", "blurhash"}`` mapping.
    :param last_edited: Timestamp of the last mutation.
    :param year_of_study: Academic year.
    :param rank: 1-based leaderboard rank, only set by rank lookups.
    """

    internal_id: int
    user_id: str
    name: str
    email: str
    firehearts: int
    image: dict[str, Any]
    last_edited: datetime
    year_of_study: int
    rank: int | None = None


# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class ProfileIn:
    """
    Input DTO for profile creation.

    :param user_id: External id chosen by the client.
    :param name: Display name.
    :param email: Contact email.
    :param image: Image mapping previously returned by the upload endpoint.
    :param year_of_study: Academic year.
    """

    user_id: str
    name: str
    email: str
    image: dict[str, Any]
    year_of_study: int


@dataclass(frozen=True, slots=True)
class ProfileUpdateIn:
    """
    Input DTO for partial profile updates.

    ``None`` means "leave unchanged" for every field.
    """

    name: str | None = None
    image: dict[str, Any] | None = None
    year_of_study: int | None = None
