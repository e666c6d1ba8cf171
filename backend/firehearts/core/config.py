"""Configuration classes, selected by ``APP_ENV`` and filled from the environment.

A ``.env`` file next to the process is loaded first when present.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()

SELECTOR_VAR = "APP_ENV"
_TRUTHY = frozenset({"1", "true", "yes", "on"})
_PLACEHOLDER_SECRETS = frozenset({"CHANGE_ME", "CHANGE_ME_ACCESS", "CHANGE_ME_REFRESH"})


def env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    return default if raw is None else raw.strip().lower() in _TRUTHY


def env_int(name: str, default: int | None) -> int | None:
    """Integer from ``name``; blank or unset yields ``default``.

    :raises ValueError: If the variable is set to something non-numeric.
    """
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


class BaseConfig:
    """Settings shared by every environment.

    Tokens
    ------
    JWT_ACCESS_TOKEN_SECRET / JWT_REFRESH_TOKEN_SECRET
        Separate HMAC secrets; a token signed with one never verifies with
        the other.
    ACCESS_TOKEN_TTL_ON_CREATE / _ON_LOGIN / _ON_REFRESH
        Access-token lifetime in seconds, per issuing path.
    REFRESH_TOKEN_TTL
        Refresh-token lifetime in seconds; unset means no ``exp`` claim.
    AUTH_HEADER_NAME
        Header carrying ``"<scheme> <token>"``.

    Storage
    -------
    DATABASE_URL (``SQLALCHEMY_DATABASE_URI``), CREDENTIAL_BACKEND
    (``sql`` | ``redis`` | ``memory``), REDIS_URL, UPLOAD_FOLDER.

    Uploads
    -------
    UPLOAD_MAX_BYTES caps one image. ``MAX_CONTENT_LENGTH`` leaves a margin
    above it for multipart framing. The image and blurhash knobs are not
    read from the environment.
    """

    API_BASE_PREFIX = ""
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")

    JWT_ACCESS_TOKEN_SECRET = os.getenv("JWT_ACCESS_TOKEN_SECRET", "CHANGE_ME_ACCESS")
    JWT_REFRESH_TOKEN_SECRET = os.getenv("JWT_REFRESH_TOKEN_SECRET", "CHANGE_ME_REFRESH")
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_TTL_ON_CREATE = env_int(
        "ACCESS_TOKEN_TTL_ON_CREATE", int(timedelta(minutes=15).total_seconds())
    )
    ACCESS_TOKEN_TTL_ON_LOGIN = env_int(
        "ACCESS_TOKEN_TTL_ON_LOGIN", int(timedelta(weeks=1).total_seconds())
    )
    ACCESS_TOKEN_TTL_ON_REFRESH = env_int(
        "ACCESS_TOKEN_TTL_ON_REFRESH", int(timedelta(weeks=1).total_seconds())
    )
    REFRESH_TOKEN_TTL = env_int("REFRESH_TOKEN_TTL", None)
    AUTH_HEADER_NAME = os.getenv("AUTH_HEADER_NAME", "x-auth-token-header")

    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./firehearts.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO")
    CREDENTIAL_BACKEND = os.getenv("CREDENTIAL_BACKEND", "sql").strip().lower()
    REDIS_URL = os.getenv("REDIS_URL")

    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "./user_images")
    UPLOAD_MAX_BYTES = env_int("UPLOAD_MAX_BYTES", 3_000_000)
    MAX_CONTENT_LENGTH = UPLOAD_MAX_BYTES + 1024 * 1024
    IMAGE_MAX_WIDTH = 600
    IMAGE_JPEG_QUALITY = 80
    BLURHASH_COMPONENTS = 4
    BLURHASH_SAMPLE_SIZE = 32

    CLIENT_ORIGIN = os.getenv("CLIENT_ORIGIN", "http://localhost:3000")
    CORS_MAX_AGE = 600
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_JSON = env_bool("LOG_JSON", True)

    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    DEBUG = env_bool("FLASK_DEBUG", True)
    LOG_JSON = env_bool("LOG_JSON", False)


class TestingConfig(BaseConfig):
    """In-memory SQLite and fixed secrets; nothing here depends on the environment."""

    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    JWT_ACCESS_TOKEN_SECRET = "test-access-secret"
    JWT_REFRESH_TOKEN_SECRET = "test-refresh-secret"
    CREDENTIAL_BACKEND = "sql"
    REDIS_URL = None
    USE_PROXYFIX = False


class ProductionConfig(BaseConfig):
    """Refuses to start with placeholder or shared token secrets."""

    SQLALCHEMY_ECHO = False

    @classmethod
    def check_secrets(cls) -> None:
        """
        :raises RuntimeError: If a token secret is unset or both are equal.
        """
        access, refresh = cls.JWT_ACCESS_TOKEN_SECRET, cls.JWT_REFRESH_TOKEN_SECRET
        if access in _PLACEHOLDER_SECRETS or refresh in _PLACEHOLDER_SECRETS:
            raise RuntimeError("JWT_ACCESS_TOKEN_SECRET and JWT_REFRESH_TOKEN_SECRET must be set")
        if access == refresh:
            raise RuntimeError("Access and refresh token secrets must differ")


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Config class named by ``APP_ENV``; unknown or unset means development."""
    name = os.getenv(SELECTOR_VAR, "development").strip().lower()
    config = CONFIG_MAP.get(name, DevelopmentConfig)
    if issubclass(config, ProductionConfig):
        config.check_secrets()
    return config
