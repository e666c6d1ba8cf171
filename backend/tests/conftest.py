"""Pytest fixtures building an isolated application per test.

Each test gets its own app, a fresh in-memory SQLite schema and a temporary
upload folder, so data and files never leak between cases.
"""

from __future__ import annotations

import os

import pytest

from firehearts.core.config import TestingConfig
from firehearts.core.extensions import db as _db  # Flask-SQLAlchemy instance
from firehearts.factory import create_app  # application factory under test


class TestConfig(TestingConfig):
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Uses an in-memory SQLite database for speed.
    - Stores refresh credentials in SQL so logout/rotation hit the real table.
    - Avoids hitting external services (no Redis, no proxy headers).
    """

    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    LOG_LEVEL = "WARNING"


@pytest.fixture()
def app(tmp_path):
    """Create a Flask application configured for testing.

    Yields
    ------
    flask.Flask
        Application with :class:`TestConfig` applied, an active app context
        and ``UPLOAD_FOLDER`` pointing at a per-test temporary directory.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    application = create_app(TestConfig, instance_relative_config=False)
    application.config["UPLOAD_FOLDER"] = str(tmp_path / "user_images")
    application.config["SERVER_NAME"] = "localhost"
    with application.app_context():
        yield application


@pytest.fixture()
def db(app):
    """Create the schema for one test and drop it afterwards."""
    _db.create_all()
    yield _db
    _db.session.remove()
    _db.drop_all()


@pytest.fixture()
def session(db):
    """Flask-scoped SQLAlchemy session shared with the code under test."""
    yield db.session
    db.session.rollback()


@pytest.fixture()
def client(app, db):
    """Return a Flask test client with the schema in place."""
    return app.test_client()


@pytest.fixture()
def upload_dir(app):
    """Path of the per-test upload folder."""
    from pathlib import Path

    return Path(app.config["UPLOAD_FOLDER"])


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


@pytest.fixture()
def token_service(app, db):
    """Token service wired exactly as the HTTP layer wires it."""
    from firehearts.api.deps import get_token_service

    return get_token_service()


@pytest.fixture()
def auth_headers(app, token_service):
    """Build the auth header for a persisted profile.

    Examples
    --------
    >>> headers = auth_headers(profile)
    >>> client.get(f"/user/{profile.user_id}", headers=headers)
    """
    from firehearts.services.profiles import identity_of

    header = app.config["AUTH_HEADER_NAME"]

    def _build(profile) -> dict[str, str]:
        token = token_service.issue(identity_of(profile), ttl=token_service.ttl.access_on_login)
        return {header: f"Bearer {token}"}

    return _build


# -- Hook up Factory Boy to the pytest SQLAlchemy session ----------------------
@pytest.fixture(autouse=True)
def _factories_session(request):
    """Wire Factory Boy's session helper when the test uses the database."""
    from tests.factories import SQLAlchemySession

    if "db" in request.fixturenames or "session" in request.fixturenames:
        SQLAlchemySession.set(request.getfixturevalue("session"))
    yield
    SQLAlchemySession.set(None)
