"""Profile Marshmallow schemas.

Wire names follow the established client contract: ``id`` is the external
user id, ``_id`` the internal key, and multi-word fields are camelCase.
"""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load, validate

from firehearts.schemas.common import RequestSchema
from firehearts.services.profiles import ProfileIn, ProfileUpdateIn


class ImageSchema(Schema):
    """Image object stored on a profile."""

    class Meta:
        unknown = EXCLUDE

    url = fields.String(required=True, validate=validate.Length(min=1, max=2048))
    blurhash = fields.String(load_default=None, allow_none=True)


class ProfileSchema(Schema):
    """Serialized profile."""

    internal_id = fields.Integer(data_key="_id", dump_only=True)
    user_id = fields.String(data_key="id", dump_only=True)
    name = fields.String(dump_only=True)
    email = fields.String(dump_only=True)
    firehearts = fields.Integer(dump_only=True)
    image = fields.Nested(ImageSchema, dump_only=True)
    last_edited = fields.DateTime(data_key="lastEdited", dump_only=True)
    year_of_study = fields.Integer(data_key="yearOfStudy", dump_only=True)


class RankedProfileSchema(ProfileSchema):
    """Serialized profile with its leaderboard rank."""

    rank = fields.Integer(dump_only=True)


class ProfileCreateSchema(RequestSchema):
    """Input payload for creating a profile."""

    user_id = fields.String(data_key="id", required=True, validate=validate.Length(min=1, max=128))
    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    email = fields.Email(required=True, validate=validate.Length(max=254))
    image = fields.Nested(ImageSchema, required=True)
    year_of_study = fields.Integer(data_key="yearOfStudy", required=True, strict=True)

    @post_load
    def to_dto(self, data: dict[str, Any], **_: Any) -> ProfileIn:
        return ProfileIn(**data)


class ProfileUpdateSchema(RequestSchema):
    """Partial update; ``null`` and missing keys both mean "unchanged"."""

    name = fields.String(load_default=None, allow_none=True, validate=validate.Length(min=1, max=100))
    image = fields.Nested(ImageSchema, load_default=None, allow_none=True)
    year_of_study = fields.Integer(
        data_key="yearOfStudy", load_default=None, allow_none=True, strict=True
    )

    @post_load
    def to_dto(self, data: dict[str, Any], **_: Any) -> ProfileUpdateIn:
        return ProfileUpdateIn(**data)


class IncrementSchema(RequestSchema):
    """Score increment request: target profile ``id`` and a signed delta."""

    user_id = fields.String(data_key="id", required=True, validate=validate.Length(min=1, max=128))
    increment = fields.Integer(load_default=None, allow_none=True, strict=True)
