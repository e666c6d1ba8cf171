"""Profile repository: lookups, ranking and ordered listings."""

from __future__ import annotations

from sqlalchemy import func, select

from firehearts.models.profile import Profile
from firehearts.repositories.base import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    """Persistence-only repository for :class:`Profile`."""

    model = Profile
    updatable = frozenset({"name", "image", "year_of_study", "firehearts", "last_edited"})

    def get_by_user_id(self, user_id: str) -> Profile | None:
        """Fetch a profile by its external ``user_id``."""
        return self.first(select(Profile).where(Profile.user_id == user_id))

    def count_with_more_firehearts(self, firehearts: int) -> int:
        """Count profiles whose score is strictly greater than ``firehearts``."""
        stmt = select(func.count()).select_from(Profile).where(Profile.firehearts > firehearts)
        return int(self.session.execute(stmt).scalar_one())

    def top(self, limit: int) -> list[Profile]:
        """Return the ``limit`` best profiles: score desc, earliest edit first on ties."""
        stmt = (
            select(Profile)
            .order_by(Profile.firehearts.desc(), Profile.last_edited.asc(), Profile.id.asc())
            .limit(max(int(limit), 0))
        )
        return self.all(stmt)

    def sample(self, size: int) -> list[Profile]:
        """Return up to ``size`` profiles in random order."""
        return self.all(select(Profile).order_by(func.random()).limit(max(int(size), 0)))

    def referenced_image_urls(self) -> set[str]:
        """Return every image URL currently stored on a profile."""
        images = self.session.execute(select(Profile.image)).scalars().all()
        return {img["url"] for img in images if isinstance(img, dict) and img.get("url")}
