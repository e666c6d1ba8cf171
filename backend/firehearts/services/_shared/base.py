from __future__ import annotations

from datetime import UTC, datetime

from firehearts.core import errors as api_errors
from firehearts.services._shared.errors import (
    ConflictError,
    CredentialNotFoundError,
    NotFoundError,
    PayloadTooLargeError,
    ProcessingError,
    ServiceError,
    TokenInvalidError,
    TokenMissingError,
    ValidationFailedError,
)
from firehearts.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Offer a single clock so tests can patch "now".

    Notes
    -----
    Services never touch the global session directly; they always go through
    a Unit of Work.
    """

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :returns: Read-only UoW instance.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork()

    @staticmethod
    def now_utc() -> datetime:
        return datetime.now(UTC)


def translate_service_error(exc: ServiceError) -> api_errors.APIError:
    """
    Map domain/service-level errors to API-level (HTTP) errors.

    :param exc: Exception raised within the service layer.
    :type exc: ServiceError
    :returns: Translated exception ready to be serialized.
    :rtype: APIError
    """
    if isinstance(exc, TokenMissingError):
        return api_errors.Unauthorized(str(exc))

    if isinstance(exc, CredentialNotFoundError):
        return api_errors.Forbidden(str(exc), code="credential_not_found")

    if isinstance(exc, TokenInvalidError):
        return api_errors.Forbidden(str(exc))

    if isinstance(exc, NotFoundError):
        return api_errors.NotFound(str(exc))

    if isinstance(exc, ConflictError):
        return api_errors.Conflict(str(exc))

    if isinstance(exc, ValidationFailedError):
        return api_errors.ValidationFailure(str(exc))

    if isinstance(exc, PayloadTooLargeError):
        return api_errors.PayloadTooLarge(str(exc))

    if isinstance(exc, ProcessingError):
        return api_errors.ProcessingFailure(str(exc))

    # Any other ServiceError subclass → 400 Bad Request
    return api_errors.APIError(message=str(exc), status_code=400, code="bad_request")
