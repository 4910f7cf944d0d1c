from __future__ import annotations

from dataclasses import dataclass

from streamhub.core import errors as api_errors
from streamhub.services._shared.errors import (
    ConflictError,
    InvalidCredentialsError,
    InvalidInputError,
    NotFoundError,
    PersistenceError,
    ServiceError,
    UnauthorizedError,
)
from streamhub.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)

# Most specific first: InvalidCredentialsError is also an UnauthorizedError.
_TRANSLATIONS: tuple[tuple[type[ServiceError], type[api_errors.APIError], str | None], ...] = (
    (InvalidCredentialsError, api_errors.Unauthorized, "Invalid credentials"),
    (UnauthorizedError, api_errors.Unauthorized, None),
    (InvalidInputError, api_errors.InvalidInput, ""),
    (NotFoundError, api_errors.NotFound, ""),
    (ConflictError, api_errors.Conflict, ""),
    (PersistenceError, api_errors.ServerError, None),
)


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data.

    :param viewer_id: Authenticated identity, ``None`` for anonymous calls.
    :param request_id: Correlation id for logging/tracing.
    """

    viewer_id: int | None = None
    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Services orchestrate repositories and ports inside units of work and
    raise :class:`ServiceError` subclasses; they never see Flask or HTTP.
    """

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        self.ctx = ctx or ServiceContext()

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """Read-write unit of work: commits on success."""
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        """Read-only unit of work: never commits, blocks ORM writes."""
        return SQLAlchemyReadOnlyUnitOfWork()

    @staticmethod
    def translate_exceptions(exc: ServiceError) -> api_errors.APIError:
        """
        Map a service-level error to the API error rendered for it.

        Authentication failures keep a fixed wording (the logged ``reason``
        never leaks) and persistence failures hide their cause. Other errors
        carry their own message. Unlisted :class:`ServiceError` subclasses
        become a plain 400.

        :param exc: Exception raised within the service.
        :type exc: ServiceError
        :rtype: streamhub.core.errors.APIError
        """
        for service_type, api_type, message in _TRANSLATIONS:
            if isinstance(exc, service_type):
                # "" -> the service message, None -> the API default
                return api_type(str(exc) if message == "" else message)
        return api_errors.APIError(str(exc))
