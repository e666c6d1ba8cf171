"""Common Marshmallow schemas shared across resources."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load, validate


class RequestSchema(Schema):
    """Base for request payloads; unknown keys are dropped silently."""

    class Meta:
        unknown = EXCLUDE


class CountQuerySchema(RequestSchema):
    """Validate a ``count`` parameter with a per-endpoint default."""

    def __init__(self, *, default_count: int, **kwargs: Any) -> None:
        self._default_count = default_count
        super().__init__(**kwargs)

    count = fields.Integer(load_default=None, allow_none=True, validate=validate.Range(min=1))

    @post_load
    def apply_default(self, data: dict[str, Any], **_: Any) -> int:
        count = data.get("count")
        return self._default_count if count is None else int(count)


class MessageSchema(Schema):
    """Plain ``{"message": ...}`` acknowledgement."""

    message = fields.String(required=True)
