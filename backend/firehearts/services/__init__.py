"""Service layer public API.

Callers import from :mod:`firehearts.services` without knowing the internal
structure.

Re-exports
----------
- Base primitives (from ``firehearts.services._shared.base``)
    * :class:`BaseService`, :func:`translate_service_error`

- Token service (from ``firehearts.services.tokens``)
    * :class:`TokenService`
    * DTOs: :class:`IdentityClaims`, :class:`TokenPair`, :class:`TokenTTLConfig`

- Auth service (from ``firehearts.services.auth``)
    * :class:`AuthService`
    * DTOs: :class:`LoginIn`, :class:`RefreshIn`

- Profile service (from ``firehearts.services.profiles``)
    * :class:`ProfileService`
    * DTOs: :class:`ProfileIn`, :class:`ProfileUpdateIn`, :class:`ProfileOut`

- Image pipeline (from ``firehearts.services.images``)
    * :class:`ImagePipeline`
    * DTOs: :class:`UploadIn`, :class:`UploadResult`
"""

from __future__ import annotations

from firehearts.services._shared.base import BaseService, translate_service_error
from firehearts.services.auth import AuthService, LoginIn, RefreshIn
from firehearts.services.images import ImagePipeline, UploadIn, UploadResult
from firehearts.services.profiles import (
    ProfileIn,
    ProfileOut,
    ProfileService,
    ProfileUpdateIn,
)
from firehearts.services.tokens import (
    IdentityClaims,
    TokenPair,
    TokenService,
    TokenTTLConfig,
)

__all__ = [
    "AuthService",
    "BaseService",
    "IdentityClaims",
    "ImagePipeline",
    "LoginIn",
    "ProfileIn",
    "ProfileOut",
    "ProfileService",
    "ProfileUpdateIn",
    "RefreshIn",
    "TokenPair",
    "TokenService",
    "TokenTTLConfig",
    "UploadIn",
    "UploadResult",
    "translate_service_error",
]
