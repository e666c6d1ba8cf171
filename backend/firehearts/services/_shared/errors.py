"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
helpers. They are the stable contract between repositories, adapters and
services. Translation to HTTP responses (RFC 7807) happens in
:func:`firehearts.services._shared.base.translate_service_error`.
"""

from __future__ import annotations

from dataclasses import dataclass

# --------------------------------------------------------------------------- #
# Base type
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories, adapters or domain logic.
    """

    pass


# --------------------------------------------------------------------------- #
# Lookups and payloads
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "Profile").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "Profile").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class ValidationFailedError(ServiceError):
    """Raised when a payload is malformed; the message is safe for clients."""


# --------------------------------------------------------------------------- #
# Tokens
# --------------------------------------------------------------------------- #


class TokenMissingError(ServiceError):
    """No token was supplied where one is required."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class TokenInvalidError(ServiceError):
    """Signature, expiry, type or payload check failed for a supplied token."""

    def __init__(self, message: str = "Token Invalid") -> None:
        super().__init__(message)


class CredentialNotFoundError(TokenInvalidError):
    """The refresh token is not (or no longer) present in the credential store."""

    def __init__(self, message: str = "Invalid Token") -> None:
        super().__init__(message)


# --------------------------------------------------------------------------- #
# Image pipeline
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class PayloadTooLargeError(ServiceError):
    """
    Raised when an uploaded file exceeds the configured byte ceiling.

    :param limit: Maximum accepted size in bytes.
    :type limit: int
    """

    limit: int

    def __str__(self) -> str:
        return f"File too large (limit is {self.limit} bytes)"


class ProcessingError(ServiceError):
    """A pipeline stage (compression or placeholder derivation) failed."""
