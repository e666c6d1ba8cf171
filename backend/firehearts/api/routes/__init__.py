"""Blueprints bundling the HTTP routes."""

from __future__ import annotations

from flask import Blueprint

# Import blueprints *only here* to keep imports localized and avoid cycles.
from .auth import bp as auth_bp  # noqa: E402
from .health import bp as health_bp  # noqa: E402
from .images import bp as images_bp  # noqa: E402
from .profiles import bp as profiles_bp  # noqa: E402

# Each tuple: (blueprint, url_prefix_relative_to_base)
REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, ""),
    (auth_bp, ""),
    (profiles_bp, ""),
    (images_bp, ""),
]
