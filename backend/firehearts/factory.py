"""Application factory wiring Flask extensions and blueprints."""

from __future__ import annotations

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix

from firehearts.core.config import BaseConfig, get_config
from firehearts.core.logger import configure_logging
from firehearts.core.logger import init_app as init_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    Parameters
    ----------
    config:
        Config class/object (or import string). Defaults to the class picked
        by ``APP_ENV``.
    instance_relative_config:
        Whether ``instance/`` overrides are looked up.
    instance_config_filename:
        Name of the optional override file inside ``instance/``.
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(
        app.config.get("LOG_LEVEL", "INFO"), as_json=app.config.get("LOG_JSON", True)
    )

    # Trust one proxy hop for X-Forwarded-* so external upload URLs are right
    if app.config.get("USE_PROXYFIX", True):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    from firehearts.core import extensions

    extensions.init_app(app)

    init_logging(app)

    from firehearts.core import cors

    cors.init_app(app)

    from firehearts.api import init_app as init_api

    init_api(app)

    from firehearts.core import errors

    errors.init_app(app)

    from firehearts import cli as app_cli

    app_cli.init_app(app)

    return app
