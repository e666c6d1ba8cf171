"""Shared API helpers: the auth gate, service wiring and response helpers."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, TypeVar, cast

from flask import Response, current_app, g, jsonify, request, url_for

from firehearts.core import errors as api_errors
from firehearts.core.extensions import get_redis
from firehearts.infra.jwt import PyJWTTokenProvider
from firehearts.infra.redis import RedisCredentialStore
from firehearts.infra.sql import SQLAlchemyCredentialStore
from firehearts.infra.storage import LocalImageStore
from firehearts.services._shared.errors import TokenInvalidError, TokenMissingError
from firehearts.services._shared.ports import (
    CredentialStore,
    InMemoryCredentialStore,
    SigningKeys,
)
from firehearts.services.auth import AuthService
from firehearts.services.images import ImagePipeline
from firehearts.services.profiles import ProfileService
from firehearts.services.tokens import IdentityClaims, TokenService, TokenTTLConfig

F = TypeVar("F", bound=Callable[..., Any])

SERVICES_KEY = "firehearts.services"


# --------------------------------------------------------------------------- #
# Auth gate
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class Authorized:
    """The request carries a valid access token."""

    claims: IdentityClaims


@dataclass(frozen=True, slots=True)
class Unauthorized:
    """No token was presented."""

    reason: str = "Unauthorized"


@dataclass(frozen=True, slots=True)
class Forbidden:
    """A token was presented but failed verification."""

    reason: str = "Token Invalid"


GateResult = Authorized | Unauthorized | Forbidden


def extract_token(header_value: str | None) -> str | None:
    """
    Return the second space-separated segment of ``"<scheme> <token>"``.

    ``None`` means no token was presented. A present but empty segment
    (``"Bearer "``) is returned as ``""`` and rejected by verification.
    """
    if not header_value:
        return None
    parts = header_value.split(" ")
    if len(parts) < 2:
        return None
    return parts[1]


def authenticate_request() -> GateResult:
    """Classify the current request by its access token. No side effects."""
    header_name = current_app.config.get("AUTH_HEADER_NAME", "x-auth-token-header")
    token = extract_token(request.headers.get(header_name))
    if token is None:
        return Unauthorized()
    try:
        claims = get_token_service().verify(token)
    except (TokenMissingError, TokenInvalidError) as exc:
        current_app.logger.info("auth.gate_rejected reason=%s", exc)
        return Forbidden(str(exc))
    return Authorized(claims)


def require_auth(func: F) -> F:
    """Run the auth gate before the handler; claims land on ``g.identity``."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        result = authenticate_request()
        if isinstance(result, Unauthorized):
            raise api_errors.Unauthorized(result.reason)
        if isinstance(result, Forbidden):
            raise api_errors.Forbidden()
        g.identity = result.claims
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_identity() -> IdentityClaims:
    """Identity stored by :func:`require_auth` for the current request."""
    return cast(IdentityClaims, g.identity)


# --------------------------------------------------------------------------- #
# Service wiring
# --------------------------------------------------------------------------- #


def _registry() -> dict[str, Any]:
    default: dict[str, Any] = {}
    return cast(dict[str, Any], current_app.extensions.setdefault(SERVICES_KEY, default))


def _cached(name: str, build: Callable[[], Any]) -> Any:
    registry = _registry()
    service = registry.get(name)
    if service is None:
        service = registry[name] = build()
    return service


def build_credential_store() -> CredentialStore:
    """Credential store selected by ``CREDENTIAL_BACKEND``."""
    backend = str(current_app.config.get("CREDENTIAL_BACKEND", "sql")).lower()
    if backend == "redis":
        return RedisCredentialStore(get_redis())
    if backend == "memory":
        return InMemoryCredentialStore()
    if backend == "sql":
        return SQLAlchemyCredentialStore()
    raise RuntimeError(f"Unknown CREDENTIAL_BACKEND: {backend!r}")


def _seconds(value: int | None) -> timedelta | None:
    return None if value is None else timedelta(seconds=int(value))


def _build_token_service() -> TokenService:
    cfg = current_app.config
    keys = SigningKeys(
        access_secret=cfg["JWT_ACCESS_TOKEN_SECRET"],
        refresh_secret=cfg["JWT_REFRESH_TOKEN_SECRET"],
        algorithm=cfg.get("JWT_ALGORITHM", "HS256"),
    )
    ttl = TokenTTLConfig(
        access_on_create=timedelta(seconds=cfg["ACCESS_TOKEN_TTL_ON_CREATE"]),
        access_on_login=timedelta(seconds=cfg["ACCESS_TOKEN_TTL_ON_LOGIN"]),
        access_on_refresh=timedelta(seconds=cfg["ACCESS_TOKEN_TTL_ON_REFRESH"]),
        refresh=_seconds(cfg.get("REFRESH_TOKEN_TTL")),
    )
    return TokenService(
        token_provider=PyJWTTokenProvider(keys),
        credential_store=build_credential_store(),
        ttl=ttl,
    )


def get_image_store() -> LocalImageStore:
    return cast(
        LocalImageStore,
        _cached("image_store", lambda: LocalImageStore(current_app.config["UPLOAD_FOLDER"])),
    )


def delete_image_by_url(url: str) -> None:
    """Remove the stored file a profile image URL points to."""
    store = get_image_store()
    store.delete(store.filename_from_url(url))


def image_url(filename: str) -> str:
    """External URL serving ``filename``."""
    return url_for("images.serve_image", filename=filename, _external=True)


def get_token_service() -> TokenService:
    return cast(TokenService, _cached("tokens", _build_token_service))


def get_auth_service() -> AuthService:
    return cast(
        AuthService, _cached("auth", lambda: AuthService(token_service=get_token_service()))
    )


def get_profile_service() -> ProfileService:
    return cast(
        ProfileService,
        _cached(
            "profiles",
            lambda: ProfileService(
                token_service=get_token_service(), image_cleanup=delete_image_by_url
            ),
        ),
    )


def get_image_pipeline() -> ImagePipeline:
    cfg = current_app.config

    def build() -> ImagePipeline:
        return ImagePipeline(
            get_image_store(),
            url_for=image_url,
            max_bytes=int(cfg["UPLOAD_MAX_BYTES"]),
            max_width=int(cfg["IMAGE_MAX_WIDTH"]),
            jpeg_quality=int(cfg["IMAGE_JPEG_QUALITY"]),
            components=int(cfg["BLURHASH_COMPONENTS"]),
            sample_size=int(cfg["BLURHASH_SAMPLE_SIZE"]),
        )

    return cast(ImagePipeline, _cached("images", build))


# --------------------------------------------------------------------------- #
# Request / response helpers
# --------------------------------------------------------------------------- #


def request_payload() -> dict[str, Any]:
    """JSON body of the request, or an empty mapping."""
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
