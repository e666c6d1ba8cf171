"""Problem+json (RFC 7807) error responses for every failure path.

Bodies look like::

    {"type": "about:blank", "title": "Forbidden", "status": 403,
     "detail": "Token Invalid", "message": "Token Invalid",
     "instance": "/update", "code": "token_invalid", "request_id": "..."}

``message`` mirrors ``detail`` for clients that only read ``message``.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, has_request_context, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from firehearts.core.logger import ensure_request_id

log = logging.getLogger(__name__)

# Stable ``code`` values for bare werkzeug errors
HTTP_CODES: dict[int, str] = {
    HTTPStatus.BAD_REQUEST: "bad_request",
    HTTPStatus.UNAUTHORIZED: "unauthorized",
    HTTPStatus.FORBIDDEN: "forbidden",
    HTTPStatus.NOT_FOUND: "not_found",
    HTTPStatus.METHOD_NOT_ALLOWED: "method_not_allowed",
    HTTPStatus.CONFLICT: "conflict",
    HTTPStatus.REQUEST_ENTITY_TOO_LARGE: "payload_too_large",
    HTTPStatus.UNSUPPORTED_MEDIA_TYPE: "unsupported_media_type",
    HTTPStatus.INTERNAL_SERVER_ERROR: "internal_server_error",
    HTTPStatus.SERVICE_UNAVAILABLE: "service_unavailable",
}


class APIError(Exception):
    """
    An error that renders as a problem+json response.

    :param message: Client-safe description, used as ``detail``/``message``.
    :param status_code: HTTP status, 400 unless a subclass says otherwise.
    :param code: Stable snake_case identifier.
    :param details: Extra structured context (e.g. field errors).
    """

    def __init__(
        self,
        message: str,
        status_code: int = HTTPStatus.BAD_REQUEST,
        code: str = "bad_request",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code
        self.details = details or {}

    def to_problem(self) -> dict[str, Any]:
        return problem_body(self.status_code, self.code, self.message, self.details)


class NotFound(APIError):
    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, HTTPStatus.NOT_FOUND, "not_found")


class Conflict(APIError):
    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message, HTTPStatus.CONFLICT, "conflict")


class Unauthorized(APIError):
    """401: the request carried no token."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, HTTPStatus.UNAUTHORIZED, "unauthorized")


class Forbidden(APIError):
    """403: a token was presented and rejected."""

    def __init__(self, message: str = "Token Invalid", code: str = "token_invalid") -> None:
        super().__init__(message, HTTPStatus.FORBIDDEN, code)


class ValidationFailure(APIError):
    """400 with the validator's message and, when available, per-field errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, HTTPStatus.BAD_REQUEST, "validation_error", details)


class PayloadTooLarge(APIError):
    def __init__(self, message: str = "File too large") -> None:
        super().__init__(message, HTTPStatus.REQUEST_ENTITY_TOO_LARGE, "payload_too_large")


class ProcessingFailure(APIError):
    """500 raised when an image pipeline stage fails."""

    def __init__(self, message: str = "Image processing failed") -> None:
        super().__init__(message, HTTPStatus.INTERNAL_SERVER_ERROR, "processing_failed")


def problem_body(
    status: int, code: str, message: str, details: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Assemble the problem document for ``status``."""
    body: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": status,
        "detail": message,
        "message": message,
        "instance": request.path if has_request_context() else None,
        "code": code,
        "request_id": ensure_request_id(),
    }
    if details:
        body["details"] = details
    return body


def problem_response(
    status: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
    *,
    exc_info: bool = False,
) -> tuple[Response, int]:
    """Log and render a problem; 5xx at ERROR, everything else at WARNING."""
    body = problem_body(status, code, message, details)
    level = logging.ERROR if status >= 500 else logging.WARNING
    log.log(level, "problem status=%s code=%s detail=%s", status, code, message, exc_info=exc_info)
    response = jsonify(body)
    response.mimetype = "application/problem+json"
    return response, status


def _summarize(messages: dict[str, Any] | list[Any]) -> str:
    if not isinstance(messages, dict):
        return "; ".join(map(str, messages))
    parts = []
    for field, errs in messages.items():
        text = ", ".join(map(str, errs)) if isinstance(errs, list) else str(errs)
        parts.append(f"{field}: {text}")
    return "; ".join(parts)


def init_app(app: Flask) -> None:
    """Register problem+json handlers, most specific first."""
    from firehearts.services._shared.base import translate_service_error
    from firehearts.services._shared.errors import ServiceError

    def render(err: APIError):
        return problem_response(err.status_code, err.code, err.message, err.details or None)

    @app.errorhandler(APIError)
    def on_api_error(err: APIError):
        return render(err)

    @app.errorhandler(ServiceError)
    def on_service_error(err: ServiceError):
        return render(translate_service_error(err))

    @app.errorhandler(MarshmallowValidationError)
    def on_validation_error(err: MarshmallowValidationError):
        messages = err.normalized_messages()
        return render(
            ValidationFailure(_summarize(messages) or "Validation failed", {"errors": messages})
        )

    @app.errorhandler(HTTPException)
    def on_http_exception(err: HTTPException):
        status = err.code or HTTPStatus.INTERNAL_SERVER_ERROR
        code = HTTP_CODES.get(status, "error")
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        else:
            message = (err.description or code.replace("_", " ").capitalize()).strip()
        return problem_response(status, code, message)

    @app.errorhandler(IntegrityError)
    def on_integrity_error(err: IntegrityError):
        return problem_response(
            HTTPStatus.CONFLICT, "conflict", "Resource conflict", exc_info=True
        )

    @app.errorhandler(OperationalError)
    def on_operational_error(err: OperationalError):
        return problem_response(
            HTTPStatus.SERVICE_UNAVAILABLE,
            "service_unavailable",
            "Service temporarily unavailable",
            exc_info=True,
        )

    @app.errorhandler(Exception)
    def on_unexpected(err: Exception):
        return problem_response(
            HTTPStatus.INTERNAL_SERVER_ERROR,
            "internal_server_error",
            "Unexpected error",
            exc_info=True,
        )
