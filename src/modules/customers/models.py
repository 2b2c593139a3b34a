"""Customer model.

Business rules implemented here:
- Email is unique across all customers, compared case-insensitively
  (unique index on ``LOWER(email)``).
- ``status`` is always one of ``CustomerStatus``; it defaults to ``ACTIVE``.
- ``customer_id`` is assigned once by the service layer and never changes.
- Phone numbers are masked in ``__str__`` so they stay out of logs.
"""

from __future__ import annotations

from django.db import models
from django.db.models.functions import Lower

from modules.core.models import TimestampedModel

NAME_MAX_LENGTH = 50
ADDRESS_MAX_LENGTH = 200


class CustomerStatus(models.TextChoices):
    ACTIVE = "ACTIVE", "Active"
    INACTIVE = "INACTIVE", "Inactive"
    SUSPENDED = "SUSPENDED", "Suspended"


class Customer(TimestampedModel):
    """Customer aggregate root.

    Equality is Django's primary-key equality: two saved instances are equal
    iff their ``customer_id`` values match, and an instance without an id is
    only equal to itself.
    """

    customer_id = models.CharField(primary_key=True, max_length=36, editable=False)
    first_name = models.CharField(max_length=NAME_MAX_LENGTH)
    last_name = models.CharField(max_length=NAME_MAX_LENGTH)
    email = models.EmailField(max_length=254)
    phone = models.CharField(max_length=16)
    address = models.CharField(max_length=ADDRESS_MAX_LENGTH, null=True, blank=True)
    date_of_birth = models.DateField(null=True, blank=True)
    status = models.CharField(
        max_length=10,
        choices=CustomerStatus.choices,
        default=CustomerStatus.ACTIVE,
    )

    class Meta:
        db_table = "customers"
        ordering = ["-created_at", "-customer_id"]
        indexes = [
            models.Index(fields=["-created_at"], name="customers_created_idx"),
            models.Index(
                fields=["status", "-created_at"], name="customers_status_created_idx"
            ),
        ]
        constraints = [
            models.UniqueConstraint(Lower("email"), name="customers_email_ci_unique"),
        ]

    def __str__(self) -> str:
        suffix = self.phone[-4:] if self.phone else "????"
        return f"{self.first_name} {self.last_name} <{self.email}> (phone ***{suffix})"
