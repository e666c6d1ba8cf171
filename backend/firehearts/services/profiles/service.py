# firehearts/services/profiles/service.py
from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import timedelta
from typing import Any

from sqlalchemy.exc import IntegrityError

from firehearts.models.profile import DEFAULT_FIREHEARTS, Profile
from firehearts.repositories.profile import ProfileRepository
from firehearts.services._shared.base import BaseService
from firehearts.services._shared.errors import (
    ConflictError,
    NotFoundError,
    ValidationFailedError,
)
from firehearts.services.profiles.dto import ProfileIn, ProfileOut, ProfileUpdateIn
from firehearts.services.tokens import IdentityClaims, TokenPair, TokenService

log = logging.getLogger(__name__)

#: Largest score change a single increment may apply, in either direction.
MAX_INCREMENT = 20

DEFAULT_SAMPLE_SIZE = 5
DEFAULT_LEADERBOARD_SIZE = 10

ImageCleanup = Callable[[str], None]


def clamp_increment(delta: int | None) -> int:
    """Clamp ``delta`` to ``[-MAX_INCREMENT, MAX_INCREMENT]``; ``None`` is 0."""
    if delta is None:
        return 0
    return max(-MAX_INCREMENT, min(MAX_INCREMENT, int(delta)))


def identity_of(profile: Profile | ProfileOut) -> IdentityClaims:
    """Identity claims embedded in tokens for ``profile``."""
    internal_id = profile.internal_id if isinstance(profile, ProfileOut) else profile.id
    return IdentityClaims(
        user_id=profile.user_id,
        name=profile.name,
        email=profile.email,
        internal_id=internal_id,
    )


class ProfileService(BaseService):
    """
    Application service for profiles, scores and rankings.

    Responsibilities
    ----------------
    - Create profiles and open their first session.
    - Rank lookups, random samples and the leaderboard.
    - Partial updates and bounded score increments.

    Notes
    -----
    - Framework-agnostic; the HTTP layer handles authorization.
    - Replacing the image deletes the previous file *after* commit through
      ``image_cleanup``. Cleanup failures are logged and never change the
      result of the update.
    - Increments are read-modify-write without compare-and-swap; the last
      writer wins.
    """

    def __init__(
        self,
        *,
        token_service: TokenService,
        image_cleanup: ImageCleanup | None = None,
        access_ttl_on_create: timedelta | None = None,
    ) -> None:
        """
        :param token_service: Used to open a session on profile creation.
        :param image_cleanup: Deletes a stored image given its public URL.
        :param access_ttl_on_create: Override for the creation access TTL.
        """
        super().__init__()
        self.tokens = token_service
        self.image_cleanup = image_cleanup
        self.access_ttl_on_create = access_ttl_on_create or token_service.ttl.access_on_create

    # ------------------------------------------------------------------ #
    # Create
    # ------------------------------------------------------------------ #

    def create(self, dto: ProfileIn) -> tuple[ProfileOut, TokenPair]:
        """
        Persist a new profile and open its first session.

        :returns: The created profile and a token pair whose access token
            lives ``access_ttl_on_create`` (15 minutes by default).
        :raises ConflictError: When ``user_id`` is already taken.
        :raises ValidationFailedError: When model validation rejects a field.
        """
        try:
            with self.rw_uow() as uow:
                repo: ProfileRepository = uow.profiles
                if repo.get_by_user_id(dto.user_id) is not None:
                    raise ConflictError("Profile", "id already exists")
                row = Profile(
                    user_id=dto.user_id,
                    name=dto.name,
                    email=dto.email,
                    image=dto.image,
                    year_of_study=dto.year_of_study,
                    firehearts=DEFAULT_FIREHEARTS,
                    last_edited=self.now_utc(),
                )
                repo.add(row)
                out = self._to_out(row)
        except IntegrityError as ie:
            raise ConflictError("Profile", "id already exists") from ie
        except ValueError as ve:
            raise ValidationFailedError(str(ve)) from ve

        pair = self.tokens.open_session(identity_of(out), access_ttl=self.access_ttl_on_create)
        log.info("profile.created", extra={"user_id": out.user_id})
        return out, pair

    # ------------------------------------------------------------------ #
    # Read
    # ------------------------------------------------------------------ #

    def get(self, user_id: str) -> ProfileOut:
        """
        Retrieve a profile by external id.

        :raises NotFoundError: When no profile has ``user_id``.
        """
        with self.ro_uow() as uow:
            return self._to_out(self._require(uow.profiles, user_id))

    def get_with_rank(self, user_id: str) -> ProfileOut:
        """
        Retrieve a profile with its 1-based rank.

        Rank is one plus the number of profiles with strictly more
        firehearts, so tied profiles share a rank.

        :raises NotFoundError: When no profile has ``user_id``.
        """
        with self.ro_uow() as uow:
            repo: ProfileRepository = uow.profiles
            row = self._require(repo, user_id)
            rank = repo.count_with_more_firehearts(row.firehearts) + 1
            return self._to_out(row, rank=rank)

    def random_sample(self, count: int = DEFAULT_SAMPLE_SIZE) -> list[ProfileOut]:
        """Return up to ``count`` profiles in random order."""
        with self.ro_uow() as uow:
            return [self._to_out(r) for r in uow.profiles.sample(count)]

    def leaderboard(self, count: int = DEFAULT_LEADERBOARD_SIZE) -> list[ProfileOut]:
        """Return the ``count`` best profiles, earliest edit first on ties."""
        with self.ro_uow() as uow:
            return [self._to_out(r) for r in uow.profiles.top(count)]

    # ------------------------------------------------------------------ #
    # Update
    # ------------------------------------------------------------------ #

    def update(self, user_id: str, dto: ProfileUpdateIn) -> ProfileOut:
        """
        Apply the non-null fields of ``dto`` and refresh ``last_edited``.

        :raises NotFoundError: When no profile has ``user_id``.
        :raises ValidationFailedError: When model validation rejects a field.
        """
        fields: dict[str, Any] = {}
        if dto.name is not None:
            fields["name"] = dto.name
        if dto.image is not None:
            fields["image"] = dto.image
        if dto.year_of_study is not None:
            fields["year_of_study"] = dto.year_of_study

        try:
            with self.rw_uow() as uow:
                repo: ProfileRepository = uow.profiles
                row = self._require(repo, user_id)
                previous_url = (row.image or {}).get("url")
                fields["last_edited"] = self.now_utc()
                repo.assign(row, fields)
                repo.flush()
                out = self._to_out(row)
        except ValueError as ve:
            raise ValidationFailedError(str(ve)) from ve

        if "image" in fields and previous_url and previous_url != out.image.get("url"):
            self._cleanup_image(previous_url, user_id)
        return out

    def increment(self, user_id: str, delta: int | None) -> ProfileOut:
        """
        Add a clamped ``delta`` to the profile's firehearts.

        ``delta`` is clamped to ``[-20, 20]``; ``None`` leaves the score as
        is. ``last_edited`` is refreshed either way.

        :raises NotFoundError: When no profile has ``user_id``.
        """
        effective = clamp_increment(delta)
        with self.rw_uow() as uow:
            repo: ProfileRepository = uow.profiles
            row = self._require(repo, user_id)
            repo.assign(
                row,
                {"firehearts": row.firehearts + effective, "last_edited": self.now_utc()},
            )
            repo.flush()
            out = self._to_out(row)
        log.info("profile.incremented delta=%s", effective, extra={"user_id": user_id})
        return out

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _require(repo: ProfileRepository, user_id: str) -> Profile:
        row = repo.get_by_user_id(user_id)
        if row is None:
            raise NotFoundError("Profile", user_id)
        return row

    def _cleanup_image(self, url: str, user_id: str) -> None:
        if self.image_cleanup is None:
            return
        try:
            self.image_cleanup(url)
        except (OSError, ValueError):
            log.warning(
                "profile.image_cleanup_failed url=%s", url, extra={"user_id": user_id}, exc_info=True
            )

    @staticmethod
    def _to_out(row: Profile, *, rank: int | None = None) -> ProfileOut:
        return ProfileOut(
            internal_id=row.id,
            user_id=row.user_id,
            name=row.name,
            email=row.email,
            firehearts=row.firehearts,
            image=dict(row.image or {}),
            last_edited=row.last_edited,
            year_of_study=row.year_of_study,
            rank=rank,
        )
