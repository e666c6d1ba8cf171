"""Profile endpoints: creation, lookups, leaderboard and mutations."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from firehearts.api.deps import (
    current_identity,
    get_profile_service,
    json_response,
    request_payload,
    require_auth,
    timing,
)
from firehearts.schemas import (
    CountQuerySchema,
    IncrementSchema,
    ProfileCreateSchema,
    ProfileSchema,
    ProfileUpdateSchema,
    RankedProfileSchema,
    TokenPairSchema,
)
from firehearts.services.profiles.service import (
    DEFAULT_LEADERBOARD_SIZE,
    DEFAULT_SAMPLE_SIZE,
)

bp = Blueprint("profiles", __name__)

profile_schema = ProfileSchema()
profiles_schema = ProfileSchema(many=True)
ranked_schema = RankedProfileSchema()
create_schema = ProfileCreateSchema()
update_schema = ProfileUpdateSchema()
increment_schema = IncrementSchema()
token_pair_schema = TokenPairSchema()
sample_count_schema = CountQuerySchema(default_count=DEFAULT_SAMPLE_SIZE)
leaderboard_count_schema = CountQuerySchema(default_count=DEFAULT_LEADERBOARD_SIZE)


def _count_source() -> dict[str, Any]:
    """``count`` comes from the query string, falling back to the JSON body."""
    if "count" in request.args:
        return {"count": request.args["count"]}
    return request_payload()


@bp.post("/profile")
@timing
def create_profile():
    """Create a profile and return its first token pair."""

    dto = create_schema.load(request_payload())
    _, pair = get_profile_service().create(dto)
    return json_response(token_pair_schema.dump(pair), status=201)


@bp.get("/user/<string:user_id>")
@require_auth
@timing
def get_user(user_id: str):
    """Return a profile together with its leaderboard rank."""

    profile = get_profile_service().get_with_rank(user_id)
    return json_response(ranked_schema.dump(profile))


@bp.get("/random")
@require_auth
@timing
def random_profiles():
    """Return a random sample of profiles."""

    count = sample_count_schema.load(_count_source())
    return json_response(profiles_schema.dump(get_profile_service().random_sample(count)))


@bp.get("/leaderboard")
@timing
def leaderboard():
    """Return the top profiles by firehearts."""

    count = leaderboard_count_schema.load(_count_source())
    return json_response(profiles_schema.dump(get_profile_service().leaderboard(count)))


@bp.patch("/update")
@require_auth
@timing
def update_profile():
    """Apply a partial update to the caller's own profile."""

    dto = update_schema.load(request_payload())
    profile = get_profile_service().update(current_identity().user_id, dto)
    return json_response(profile_schema.dump(profile), status=201)


@bp.patch("/increment")
@require_auth
@timing
def increment_firehearts():
    """Add a bounded delta to the firehearts of the profile named in the body."""

    data = increment_schema.load(request_payload())
    profile = get_profile_service().increment(data["user_id"], data["increment"])
    return json_response(profile_schema.dump(profile), status=201)
