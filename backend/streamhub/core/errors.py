"""Problem+JSON (RFC 7807) error responses for the API.

Every failure leaving the app, whether raised by a service, by marshmallow,
by SQLAlchemy or by Werkzeug routing, is turned into an :class:`APIError`
and rendered by one function, so all error bodies share the same shape::

    {"type": "about:blank", "title": "Unauthorized", "status": 401,
     "detail": "Unauthorized", "code": "unauthorized",
     "instance": "/api/v1/auth/me", "request_id": "..."}
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from streamhub.core.logger import ensure_request_id

log = logging.getLogger(__name__)

PROBLEM_MIMETYPE = "application/problem+json"


def _code_for(status: int) -> str:
    """``404`` -> ``"not_found"``, derived from the standard reason phrase."""
    try:
        phrase = HTTPStatus(status).phrase
    except ValueError:
        return "error"
    return phrase.lower().replace("-", "_").replace(" ", "_")


class APIError(Exception):
    """
    An error with an HTTP status, a stable machine code and a client-safe
    message.

    Subclasses only change the class-level defaults.
    """

    status_code: int = HTTPStatus.BAD_REQUEST
    code: str = "bad_request"
    default_message: str = "Bad request"

    def __init__(
        self,
        message: str | None = None,
        status_code: int | None = None,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)
        if status_code is not None:
            self.status_code = int(status_code)
        if code is not None:
            self.code = code
        self.details = details or {}

    def to_problem(self) -> dict[str, Any]:
        problem: dict[str, Any] = {
            "type": "about:blank",
            "title": HTTPStatus(self.status_code).phrase,
            "status": int(self.status_code),
            "detail": self.message,
            "instance": request.path if request else None,
            "code": self.code,
        }
        if self.details:
            problem["details"] = self.details
        problem["request_id"] = ensure_request_id()
        return problem


class InvalidInput(APIError):
    code = "invalid_input"
    default_message = "Invalid input"


class ValidationFailed(APIError):
    status_code = HTTPStatus.UNPROCESSABLE_ENTITY
    code = "validation_error"
    default_message = "Validation failed"


class Unauthorized(APIError):
    """401 with a fixed message.

    Expired, malformed, superseded and unknown-subject tokens all look the
    same to the client.
    """

    status_code = HTTPStatus.UNAUTHORIZED
    code = "unauthorized"
    default_message = "Unauthorized"


class NotFound(APIError):
    status_code = HTTPStatus.NOT_FOUND
    code = "not_found"
    default_message = "Resource not found"


class Conflict(APIError):
    status_code = HTTPStatus.CONFLICT
    code = "conflict"
    default_message = "Conflict"


class ServerError(APIError):
    """500 for persistence failures; never carries the underlying cause."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    code = "internal_server_error"
    default_message = "Something went wrong"


class Unavailable(APIError):
    status_code = HTTPStatus.SERVICE_UNAVAILABLE
    code = "service_unavailable"
    default_message = "Service temporarily unavailable"


def render(err: APIError) -> tuple[Response, int]:
    """Log ``err`` (5xx as errors, 4xx as warnings) and build its response."""
    level = log.error if err.status_code >= 500 else log.warning
    level("api.error code=%s status=%s detail=%s", err.code, err.status_code, err.message)
    response = jsonify(err.to_problem())
    response.mimetype = PROBLEM_MIMETYPE
    return response, int(err.status_code)


def init_app(app: Flask) -> None:
    """
    Register the error handlers.

    Service errors go through
    :meth:`streamhub.services._shared.base.BaseService.translate_exceptions`.
    Raw database errors are never echoed to the client.
    """
    from streamhub.services._shared.base import BaseService
    from streamhub.services._shared.errors import ServiceError

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        return render(err)

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        translated = BaseService.translate_exceptions(err)
        if translated.status_code >= 500:
            log.error("service.failure %s", type(err).__name__, exc_info=err)
        return render(translated)

    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        return render(ValidationFailed(details={"errors": err.messages}))

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        else:
            message = (err.description or HTTPStatus(status).phrase).strip()
        return render(APIError(message, status_code=status, code=_code_for(status)))

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        log.error("db.integrity_error", exc_info=True)
        return render(Conflict("Resource conflict"))

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        # Store timeout or lost connection; not retried here
        log.error("db.operational_error", exc_info=True)
        return render(Unavailable())

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        log.error("unhandled.exception", exc_info=True)
        return render(ServerError("Unexpected error"))
