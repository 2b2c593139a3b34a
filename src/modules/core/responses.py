"""Uniform response envelope.

Every API response, success or failure, is wrapped as::

    {"status": "SUCCESS" | "ERROR", "message": str, "data": ..., "timestamp": "...Z"}
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from rest_framework import status as http_status
from rest_framework.response import Response

DEFAULT_SUCCESS_MESSAGE = "Operation completed successfully"


class ResponseStatus(StrEnum):
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ApiResponse(BaseModel):
    """Immutable envelope around an operation's payload."""

    model_config = ConfigDict(frozen=True)

    status: ResponseStatus
    message: str
    data: Any = None
    timestamp: datetime = Field(default_factory=_utcnow)

    @field_serializer("timestamp")
    def serialize_timestamp(self, value: datetime) -> str:
        return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")

    @classmethod
    def success(cls, data: Any = None, message: str = DEFAULT_SUCCESS_MESSAGE) -> ApiResponse:
        return cls(status=ResponseStatus.SUCCESS, message=message, data=_dump(data))

    @classmethod
    def error(cls, message: str, data: Any = None) -> ApiResponse:
        return cls(status=ResponseStatus.ERROR, message=message, data=_dump(data))

    def to_response(self, status_code: int = http_status.HTTP_200_OK, **kwargs) -> Response:
        """Render as a DRF ``Response``."""
        return Response(self.model_dump(mode="json"), status=status_code, **kwargs)


def _dump(data: Any) -> Any:
    """Serialise pydantic payloads with their wire (camelCase) aliases."""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    return data
