"""Upload response schema."""

from __future__ import annotations

from marshmallow import Schema, fields


class UploadResponseSchema(Schema):
    """Stored image URL and its placeholder.

    ``blurhash`` repeats ``placeholderHash`` so the body can be sent back
    unchanged as a profile ``image``.
    """

    url = fields.String(required=True)
    placeholder_hash = fields.String(data_key="placeholderHash", required=True)
    blurhash = fields.String(attribute="placeholder_hash", dump_only=True)
