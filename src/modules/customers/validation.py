"""Request validation: raw payload → DTO, or every violation at once.

Pydantic already evaluates each field independently and reports all
failures together; ``collect_violations`` folds its error list into the
``{wire_field: message}`` map surfaced to API callers (one message per
field, the first one reported wins).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from modules.customers.dtos import (
    INVALID_MESSAGES,
    REQUIRED_MESSAGES,
    CreateCustomerDTO,
    UpdateCustomerDTO,
)
from modules.customers.exceptions import InvalidCustomerData

DTO = TypeVar("DTO", bound=BaseModel)

BODY_FIELD = "body"
BODY_NOT_OBJECT_MESSAGE = "Request body must be a JSON object"

# Error types raised by our own validators already carry the final message.
_CUSTOM_ERROR_TYPES = {"required", "blank", "max_length", "phone_format"}


def _field_of(error: Dict[str, Any]) -> str:
    loc = error.get("loc") or ()
    return str(loc[0]) if loc else BODY_FIELD


def _message_for(field: str, error: Dict[str, Any]) -> str:
    error_type = error.get("type")
    if error_type in _CUSTOM_ERROR_TYPES:
        return error["msg"]
    if error_type == "missing":
        return REQUIRED_MESSAGES.get(field, f"{field} is required")
    return INVALID_MESSAGES.get(field, error.get("msg", "Invalid value"))


def collect_violations(exc: PydanticValidationError) -> Dict[str, str]:
    """Fold a Pydantic error list into ``{field: message}``."""
    violations: Dict[str, str] = {}
    for error in exc.errors():
        field = _field_of(error)
        violations.setdefault(field, _message_for(field, error))
    return violations


def _parse(dto_class: Type[DTO], payload: Any) -> DTO:
    if not isinstance(payload, Mapping):
        raise InvalidCustomerData({BODY_FIELD: BODY_NOT_OBJECT_MESSAGE})
    try:
        return dto_class.model_validate(dict(payload))
    except PydanticValidationError as exc:
        raise InvalidCustomerData(collect_violations(exc)) from exc


def parse_create_request(payload: Any) -> CreateCustomerDTO:
    """Validate a create payload.

    Raises:
        InvalidCustomerData: with every violated field and its message.
    """
    return _parse(CreateCustomerDTO, payload)


def parse_update_request(payload: Any) -> UpdateCustomerDTO:
    """Validate a partial-update payload.

    Raises:
        InvalidCustomerData: with every violated field and its message.
    """
    return _parse(UpdateCustomerDTO, payload)
