"""Extension singletons: SQLAlchemy, Flask-Migrate and the Redis connection."""

from __future__ import annotations

from pathlib import Path

import redis  # type: ignore[import-untyped]
from flask import Flask, current_app
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

MIGRATIONS_DIR = Path(__file__).resolve().parents[2] / "migrations"
REDIS_KEY = "firehearts.redis"

# Deterministic constraint names so migrations diff cleanly on SQLite
metadata = MetaData(
    naming_convention={
        "ix": "ix_%(table_name)s_%(column_0_name)s",
        "uq": "uq_%(table_name)s_%(column_0_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "pk": "pk_%(table_name)s",
    }
)

db: SQLAlchemy = SQLAlchemy(metadata=metadata, session_options={"autoflush": False})
migrate = Migrate(render_as_batch=True)


def init_app(app: Flask) -> None:
    """
    Bind the database and migrations to ``app``.

    When refresh credentials live in Redis the connection is opened and
    pinged here, so a bad ``REDIS_URL`` fails at startup rather than on
    the first login.

    :raises RuntimeError: If the Redis backend is selected but unreachable
        or ``REDIS_URL`` is missing.
    """
    db.init_app(app)

    from firehearts import models  # noqa: F401  (registers tables on the metadata)

    migrate.init_app(app, db, directory=str(MIGRATIONS_DIR))

    if app.config.get("CREDENTIAL_BACKEND") == "redis":
        app.extensions[REDIS_KEY] = _connect_redis(app.config.get("REDIS_URL"))


def _connect_redis(url: str | None) -> redis.Redis:
    if not url:
        raise RuntimeError("CREDENTIAL_BACKEND='redis' requires REDIS_URL.")
    client = redis.Redis.from_url(url, decode_responses=True)
    try:
        client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Cannot reach Redis at {url!r}") from exc
    return client


def get_redis() -> redis.Redis:
    """Redis client of the current app.

    :raises RuntimeError: If the app was not started with the Redis backend.
    """
    client = current_app.extensions.get(REDIS_KEY)
    if client is None:
        raise RuntimeError("Redis is not configured for this app (CREDENTIAL_BACKEND != 'redis').")
    return client
