"""Logging setup: one JSON object per line, tagged with request context.

Every record that passes through the root handler gets ``request_id``,
``method``, ``path`` and, once the auth gate has run, ``user_id``. The
request id is read from ``X-Request-ID`` / ``X-Correlation-ID`` when the
client sends one and echoed back on the response.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from flask import Flask, Response, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_HEADERS = (REQUEST_ID_HEADER, "X-Correlation-ID")

# Context attributes set by RequestContextFilter
CONTEXT_KEYS = ("request_id", "method", "path")

# Attributes passed through ``extra=`` that end up in the JSON payload
EXTRA_KEYS = ("endpoint", "elapsed_ms", "status", "stage", "image_file", "user_id", "size")

TEXT_FORMAT = "%(asctime)s %(levelname)-7s [%(request_id)s] %(name)s: %(message)s"

access_log = logging.getLogger("firehearts.access")


class JSONFormatter(logging.Formatter):
    """Render a record as a single-line JSON document."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict[str, Any] = {
            "time": created.isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        for key in CONTEXT_KEYS + EXTRA_KEYS:
            value = getattr(record, key, None)
            if value is not None:
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class RequestContextFilter(logging.Filter):
    """Copy request-scoped values onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not has_request_context():
            record.request_id = getattr(record, "request_id", None) or "-"
            return True
        record.request_id = ensure_request_id()
        record.method = request.method
        record.path = request.path
        identity = g.get("identity")
        if identity is not None and getattr(record, "user_id", None) is None:
            record.user_id = identity.user_id
        return True


def ensure_request_id() -> str:
    """Return the id of the current request, minting one on first use.

    Outside a request a fresh id is returned on every call.
    """
    if not has_request_context():
        return str(uuid4())
    current = g.get("request_id")
    if current:
        return str(current)
    incoming = next(
        (request.headers[h] for h in CORRELATION_HEADERS if request.headers.get(h)), None
    )
    g.request_id = incoming or str(uuid4())
    return str(g.request_id)


def configure_logging(level: str | int = "INFO", *, as_json: bool = True) -> None:
    """Install a single stdout handler on the root logger."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter() if as_json else logging.Formatter(TEXT_FORMAT))
    handler.addFilter(RequestContextFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)


def init_app(app: Flask) -> None:
    """Seed the request id, echo it back and emit one access line per request."""

    @app.before_request
    def _start_request() -> None:
        ensure_request_id()
        g.request_started = time.perf_counter()

    @app.after_request
    def _finish_request(response: Response) -> Response:
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        started = g.get("request_started")
        if started is not None:
            access_log.info(
                "%s %s %s",
                request.method,
                request.path,
                response.status_code,
                extra={
                    "status": response.status_code,
                    "elapsed_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
        return response


__all__ = [
    "JSONFormatter",
    "RequestContextFilter",
    "configure_logging",
    "ensure_request_id",
    "init_app",
]
