"""CORS configuration restricted to the configured client origin."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS


def init_app(app: Flask) -> None:
    """Configure CORS for every route from ``CLIENT_ORIGIN``.

    Parameters
    ----------
    app: flask.Flask
        Application whose ``CLIENT_ORIGIN`` and ``CORS_MAX_AGE`` settings are
        consulted. A blank value or ``"*"`` allows any origin without
        credential support. The auth header is listed explicitly because it
        is not a CORS-safelisted request header.
    """
    raw_origins = app.config.get("CLIENT_ORIGIN") or ""
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
    wildcard = len(origins) == 0 or origins == ["*"]

    CORS(
        app,
        resources={r"/*": {"origins": "*" if wildcard else origins}},
        allow_headers=["Content-Type", app.config.get("AUTH_HEADER_NAME", "x-auth-token-header")],
        supports_credentials=not wildcard,
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
