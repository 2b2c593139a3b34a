"""Pure transformations between request DTOs and the Customer entity.

Entity → response projections live on the output DTOs
(``CustomerOutputDTO.from_entity`` / ``CustomerSummaryDTO.from_entity``).
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from django.utils import timezone

from modules.customers.models import Customer, CustomerStatus

if TYPE_CHECKING:
    from modules.customers.dtos import CreateCustomerDTO, UpdateCustomerDTO

UPDATABLE_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "phone",
    "address",
    "date_of_birth",
    "status",
)


def to_entity(dto: CreateCustomerDTO, now: Optional[datetime] = None) -> Customer:
    """Build an unsaved Customer; ``customer_id`` is left for the service."""
    customer = Customer(
        first_name=dto.first_name,
        last_name=dto.last_name,
        email=dto.email,
        phone=dto.phone,
        address=dto.address,
        date_of_birth=dto.date_of_birth,
        status=dto.status or CustomerStatus.ACTIVE,
    )
    customer.stamp_created(now or timezone.now())
    return customer


def apply_update(
    dto: UpdateCustomerDTO, customer: Customer, now: Optional[datetime] = None
) -> Customer:
    """Overwrite every field the request supplies, then bump ``updated_at``.

    ``updated_at`` moves forward even when the request carries no field.
    """
    present = dto.present_fields()
    for field in UPDATABLE_FIELDS:
        if field in present:
            setattr(customer, field, present[field])
    customer.touch(now or timezone.now())
    return customer
