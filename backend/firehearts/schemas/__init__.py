"""Marshmallow schemas exposed for API request and response handling."""

from __future__ import annotations

from .auth import LoginSchema, TokenPairSchema, TokenRequestSchema
from .common import CountQuerySchema, MessageSchema, RequestSchema
from .profile import (
    ImageSchema,
    IncrementSchema,
    ProfileCreateSchema,
    ProfileSchema,
    ProfileUpdateSchema,
    RankedProfileSchema,
)
from .upload import UploadResponseSchema

__all__ = [
    "CountQuerySchema",
    "ImageSchema",
    "IncrementSchema",
    "LoginSchema",
    "MessageSchema",
    "ProfileCreateSchema",
    "ProfileSchema",
    "ProfileUpdateSchema",
    "RankedProfileSchema",
    "RequestSchema",
    "TokenPairSchema",
    "TokenRequestSchema",
    "UploadResponseSchema",
]
