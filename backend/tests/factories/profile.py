"""Factory Boy definition for :class:`firehearts.models.profile.Profile`."""

from __future__ import annotations

from datetime import UTC, datetime

import factory

from firehearts.models.profile import DEFAULT_FIREHEARTS, Profile
from tests.factories import BaseFactory


class ProfileFactory(BaseFactory):
    """Build persisted :class:`Profile` instances with a default image."""

    class Meta:
        model = Profile

    id = None  # let autoincrement handle it
    user_id = factory.Sequence(lambda n: f"uid-{n}")
    name = factory.Faker("name")
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    firehearts = DEFAULT_FIREHEARTS
    image = factory.Sequence(
        lambda n: {"url": f"http://localhost/profile/image/seed-{n}.jpg", "blurhash": "LKO2?U%2Tw=w"}
    )
    last_edited = factory.LazyFunction(lambda: datetime.now(UTC))
    year_of_study = factory.Faker("random_int", min=1, max=5)
