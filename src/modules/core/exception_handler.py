"""DRF exception handler producing the API error body.

Every error response has the shape ``{"message": str, "errorMessage"?: str}``.
Blocked deletions add ``dependents`` with the number of referencing rows.

Unexpected exceptions (store failures, bugs) are logged and surfaced as
500 with the raw exception text in ``errorMessage``.
"""

from __future__ import annotations

from typing import Any

import structlog
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.views import set_rollback

from modules.core.exceptions import DomainError, IntegrityError, InternalError, ValidationError

logger = structlog.get_logger(__name__)


def format_pydantic_errors(exc: PydanticValidationError) -> str:
    """Flatten pydantic errors into ``field: message`` pairs."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ())) or "payload"
        parts.append(f"{location}: {error.get('msg', 'invalid')}")
    return "; ".join(parts)


def _drf_message(data: Any) -> tuple[str, str | None]:
    if isinstance(data, dict) and set(data) == {"detail"}:
        return str(data["detail"]), None
    return ValidationError.default_message, str(data)


def api_exception_handler(exc: Exception, context: dict) -> Response:
    view = context.get("view")
    log = logger.bind(view=type(view).__name__ if view else None)

    if isinstance(exc, DomainError):
        set_rollback()
        body: dict[str, Any] = {"message": exc.message}
        if isinstance(exc, IntegrityError):
            body["dependents"] = exc.dependents
        if isinstance(exc, InternalError) and exc.__cause__ is not None:
            body["errorMessage"] = str(exc.__cause__)
        log.warning(
            "api.domain_error",
            error=type(exc).__name__,
            status_code=exc.status_code,
        )
        return Response(body, status=exc.status_code)

    if isinstance(exc, PydanticValidationError):
        set_rollback()
        log.warning("api.validation_error", error_count=exc.error_count())
        return Response(
            {
                "message": ValidationError.default_message,
                "errorMessage": format_pydantic_errors(exc),
            },
            status=status.HTTP_400_BAD_REQUEST,
        )

    response = drf_exception_handler(exc, context)
    if response is not None:
        message, detail = _drf_message(response.data)
        response.data = {"message": message}
        if detail is not None:
            response.data["errorMessage"] = detail
        return response

    set_rollback()
    log.exception("api.unhandled_error", error=type(exc).__name__)
    return Response(
        {"message": InternalError.default_message, "errorMessage": str(exc)},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
