"""Customer DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (Views) and the Service
layer.  DTOs are immutable (``frozen=True``) and speak the camelCase wire
format (``firstName``, ``dateOfBirth`` ...) while also accepting the
snake_case attribute names.

- ``CreateCustomerDTO``: input for customer creation (all rules enforced).
- ``UpdateCustomerDTO``: partial update; ``None`` means "leave untouched".
- ``CustomerOutputDTO``: full record.
- ``CustomerSummaryDTO`` / ``CustomerListDTO``: paged list views.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from modules.customers.models import ADDRESS_MAX_LENGTH, NAME_MAX_LENGTH

if TYPE_CHECKING:
    from modules.core.pagination import Page
    from modules.customers.models import Customer

PHONE_PATTERN = re.compile(r"^\+?[0-9]{10,15}$")


# ---------------------------------------------------------------------------
# Enum (framework-agnostic — NOT Django TextChoices)
# ---------------------------------------------------------------------------


class CustomerStatusEnum(StrEnum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"


# ---------------------------------------------------------------------------
# Violation messages, keyed by wire field name
# ---------------------------------------------------------------------------

REQUIRED_MESSAGES: Dict[str, str] = {
    "firstName": "First name is required",
    "lastName": "Last name is required",
    "email": "Email is required",
    "phone": "Phone number is required",
}

BLANK_MESSAGES: Dict[str, str] = {
    "firstName": "First name must not be blank",
    "lastName": "Last name must not be blank",
}

MAX_LENGTH_MESSAGES: Dict[str, str] = {
    "firstName": f"First name must not exceed {NAME_MAX_LENGTH} characters",
    "lastName": f"Last name must not exceed {NAME_MAX_LENGTH} characters",
    "address": f"Address must not exceed {ADDRESS_MAX_LENGTH} characters",
}

INVALID_MESSAGES: Dict[str, str] = {
    "firstName": "First name must be text",
    "lastName": "Last name must be text",
    "email": "Email must be valid",
    "phone": "Phone number must be in international format",
    "address": "Address must be text",
    "dateOfBirth": "Date of birth must be a valid date (YYYY-MM-DD)",
    "status": "Status must be one of "
    + ", ".join(member.value for member in CustomerStatusEnum),
}

_MAX_LENGTHS = {
    "first_name": NAME_MAX_LENGTH,
    "last_name": NAME_MAX_LENGTH,
    "address": ADDRESS_MAX_LENGTH,
}


def _wire(field_name: str) -> str:
    return to_camel(field_name)


def _is_blank(value: Any) -> bool:
    return isinstance(value, str) and not value.strip()


def _check_max_length(value: Optional[str], info: ValidationInfo) -> Optional[str]:
    limit = _MAX_LENGTHS[info.field_name]
    if value is not None and len(value) > limit:
        raise PydanticCustomError("max_length", MAX_LENGTH_MESSAGES[_wire(info.field_name)])
    return value


def _check_phone(value: Optional[str]) -> Optional[str]:
    if value is not None and not PHONE_PATTERN.fullmatch(value):
        raise PydanticCustomError("phone_format", INVALID_MESSAGES["phone"])
    return value


_WIRE_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)
# Inputs keep plain string status values so they can be assigned to the model.
_INPUT_CONFIG = ConfigDict(
    frozen=True, alias_generator=to_camel, populate_by_name=True, use_enum_values=True
)


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateCustomerDTO(BaseModel):
    """Immutable DTO for customer creation requests.

    Validates:
    - ``firstName`` / ``lastName`` are present, not blank, at most 50 chars.
    - ``email`` is present and a well-formed address (Pydantic ``EmailStr``).
    - ``phone`` is present and matches ``^\\+?[0-9]{10,15}$``.
    - ``address`` is at most 200 chars.
    - ``status`` (optional) is one of ``CustomerStatusEnum``; the mapping
      layer defaults it to ``ACTIVE``.
    """

    model_config = _INPUT_CONFIG

    first_name: str
    last_name: str
    email: EmailStr
    phone: str
    address: Optional[str] = None
    date_of_birth: Optional[date] = None
    status: Optional[CustomerStatusEnum] = None

    @field_validator("first_name", "last_name", "email", "phone", mode="before")
    @classmethod
    def require_value(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None or _is_blank(v):
            raise PydanticCustomError("required", REQUIRED_MESSAGES[_wire(info.field_name)])
        return v

    @field_validator("first_name", "last_name", "address")
    @classmethod
    def limit_length(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        return _check_max_length(v, info)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        return _check_phone(v)


class UpdateCustomerDTO(BaseModel):
    """Immutable DTO for customer update requests.

    All fields are optional — only supplied (non-null) fields will be
    updated.  Supplied fields obey the same format rules as on creation;
    names may not be blanked out.
    """

    model_config = _INPUT_CONFIG

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    date_of_birth: Optional[date] = None
    status: Optional[CustomerStatusEnum] = None

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def reject_blank(cls, v: Any, info: ValidationInfo) -> Any:
        if _is_blank(v):
            raise PydanticCustomError("blank", BLANK_MESSAGES[_wire(info.field_name)])
        return v

    @field_validator("first_name", "last_name", "address")
    @classmethod
    def limit_length(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        return _check_max_length(v, info)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        return _check_phone(v)

    def present_fields(self) -> Dict[str, Any]:
        """Attribute name → value for every field the caller supplied."""
        return self.model_dump(exclude_none=True)


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class CustomerOutputDTO(BaseModel):
    """Immutable DTO for a full customer record."""

    model_config = _WIRE_CONFIG

    customer_id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    address: Optional[str] = None
    date_of_birth: Optional[date] = None
    status: CustomerStatusEnum
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, customer: Customer) -> CustomerOutputDTO:
        """Build an output DTO from a Customer model instance."""
        return cls(
            customer_id=customer.customer_id,
            first_name=customer.first_name,
            last_name=customer.last_name,
            email=customer.email,
            phone=customer.phone,
            address=customer.address,
            date_of_birth=customer.date_of_birth,
            status=customer.status,
            created_at=customer.created_at,
            updated_at=customer.updated_at,
        )


class CustomerSummaryDTO(BaseModel):
    """Reduced projection used by list and search results."""

    model_config = _WIRE_CONFIG

    customer_id: str
    first_name: str
    last_name: str
    email: str
    status: CustomerStatusEnum

    @classmethod
    def from_entity(cls, customer: Customer) -> CustomerSummaryDTO:
        return cls(
            customer_id=customer.customer_id,
            first_name=customer.first_name,
            last_name=customer.last_name,
            email=customer.email,
            status=customer.status,
        )


class CustomerListDTO(BaseModel):
    """One page of customer summaries plus navigation metadata."""

    model_config = _WIRE_CONFIG

    customers: List[CustomerSummaryDTO]
    page: int
    size: int
    total_elements: int
    total_pages: int
    has_next: bool
    has_previous: bool

    @classmethod
    def from_page(cls, page: Page[CustomerSummaryDTO]) -> CustomerListDTO:
        return cls(
            customers=page.items,
            page=page.page,
            size=page.size,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
            has_next=page.has_next,
            has_previous=page.has_previous,
        )
