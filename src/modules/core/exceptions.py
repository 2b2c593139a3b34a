"""Project-wide DRF exception handler.

Domain errors are translated by the views themselves; this handler covers
everything that escapes them (malformed JSON, unsupported media types, disallowed
methods, unexpected failures) so callers always receive the standard
envelope and never a raw fault.
"""

from __future__ import annotations

from typing import Any

import structlog
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from modules.core.responses import ApiResponse

logger = structlog.get_logger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


def _first_message(detail: Any) -> str:
    """Flatten a DRF ``detail`` payload into one human-readable message."""
    if isinstance(detail, dict):
        if "detail" in detail:
            return _first_message(detail["detail"])
        for value in detail.values():
            return _first_message(value)
        return ""
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ""
    return str(detail)


def envelope_exception_handler(exc: Exception, context: dict) -> Response:
    response = exception_handler(exc, context)
    view = context.get("view")
    view_name = type(view).__name__ if view is not None else None

    if response is not None:
        logger.warning(
            "api.request_failed",
            view=view_name,
            status_code=response.status_code,
            error=type(exc).__name__,
        )
        envelope = ApiResponse.error(_first_message(response.data))
        headers = {
            name: value
            for name, value in response.items()
            if name in ("Allow", "Retry-After", "WWW-Authenticate")
        }
        return envelope.to_response(response.status_code, headers=headers)

    logger.exception("api.unexpected_error", view=view_name)
    return ApiResponse.error(UNEXPECTED_ERROR_MESSAGE).to_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR
    )
