"""Failure variants and their HTTP mapping.

Every way a request can fail is one of the frozen dataclasses below.
Services and views raise :class:`ServiceError` carrying a variant; the DRF
exception handler (``api_exception_handler``) turns it, and any framework or
unanticipated exception, into a response through :func:`map_failure`.

Response envelope: a single ``message`` key, except for ``FieldErrors``
which renders as a flat ``{field: message}`` mapping.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

import structlog
from rest_framework import status
from rest_framework.exceptions import APIException, ParseError
from rest_framework.response import Response

logger = structlog.get_logger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NotFound:
    resource: str
    id: Any


@dataclass(frozen=True)
class FieldErrors:
    errors: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class InvalidNumberFormat:
    detail: str


@dataclass(frozen=True)
class InvalidSortField:
    field: str


@dataclass(frozen=True)
class MalformedBody:
    detail: str


@dataclass(frozen=True)
class ParameterTypeMismatch:
    name: str
    value: str
    expected: str


@dataclass(frozen=True)
class HttpError:
    """Protocol-level rejection raised by DRF itself (405, 406, 415)."""

    status_code: int
    detail: str


@dataclass(frozen=True)
class UnexpectedError:
    pass


Failure = Union[
    NotFound,
    FieldErrors,
    InvalidNumberFormat,
    InvalidSortField,
    MalformedBody,
    ParameterTypeMismatch,
    HttpError,
    UnexpectedError,
]


class ServiceError(Exception):
    """Carries a :data:`Failure` from the point of detection to the handler."""

    def __init__(self, failure: Failure) -> None:
        super().__init__(failure)
        self.failure = failure


# ---------------------------------------------------------------------------
# Mapping
# ---------------------------------------------------------------------------


def map_failure(failure: Failure) -> tuple[int, dict[str, str]]:
    """Return ``(status_code, body)`` for a failure variant."""
    if isinstance(failure, NotFound):
        return status.HTTP_404_NOT_FOUND, {
            "message": f"{failure.resource} not found with id: {failure.id}"
        }
    if isinstance(failure, FieldErrors):
        return status.HTTP_400_BAD_REQUEST, dict(failure.errors)
    if isinstance(failure, InvalidNumberFormat):
        return status.HTTP_400_BAD_REQUEST, {
            "message": f"Invalid number format: {failure.detail}"
        }
    if isinstance(failure, InvalidSortField):
        return status.HTTP_400_BAD_REQUEST, {
            "message": f"Invalid sort parameter: {failure.field}"
        }
    if isinstance(failure, MalformedBody):
        return status.HTTP_400_BAD_REQUEST, {
            "message": f"Invalid request body: {failure.detail}"
        }
    if isinstance(failure, ParameterTypeMismatch):
        return status.HTTP_400_BAD_REQUEST, {
            "message": (
                f"Invalid parameter '{failure.name}': "
                f"'{failure.value}' is not a valid {failure.expected}"
            )
        }
    if isinstance(failure, HttpError):
        return failure.status_code, {"message": failure.detail}
    if isinstance(failure, UnexpectedError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR, {
            "message": UNEXPECTED_ERROR_MESSAGE
        }
    raise TypeError(f"Unknown failure variant: {failure!r}")


def failure_from_exception(exc: Exception) -> Failure:
    """Classify an exception raised while handling a request."""
    if isinstance(exc, ServiceError):
        return exc.failure
    if isinstance(exc, ParseError):
        return MalformedBody(str(exc.detail))
    if isinstance(exc, APIException):
        return HttpError(exc.status_code, str(exc.detail))
    return UnexpectedError()


def api_exception_handler(exc: Exception, context: dict) -> Response:
    """DRF ``EXCEPTION_HANDLER``: every failure leaves through here."""
    failure = failure_from_exception(exc)
    view = context.get("view")
    view_name = type(view).__name__ if view is not None else None

    if isinstance(failure, UnexpectedError):
        logger.exception(
            "unhandled_exception",
            view=view_name,
            error_type=type(exc).__name__,
            exc_info=exc,
        )
    else:
        logger.info(
            "request_failed",
            view=view_name,
            failure=type(failure).__name__,
        )

    status_code, body = map_failure(failure)
    return Response(body, status=status_code)
