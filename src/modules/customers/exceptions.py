"""Customer domain exceptions.

Raised by the Service Layer (and the request parsers in ``validation``)
when business rules are violated.  The API layer (Views) catches these and
translates them into the response envelope with the matching HTTP status.
"""

from __future__ import annotations

from typing import Dict


class CustomerError(Exception):
    """Base class for customer domain failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class CustomerNotFound(CustomerError):
    """The referenced customer id does not exist."""

    def __init__(self, customer_id: str) -> None:
        super().__init__(f"Customer not found with ID: {customer_id}")
        self.customer_id = customer_id


class DuplicateEmail(CustomerError):
    """The requested email already belongs to another customer.

    Raised both by the uniqueness pre-check and when the storage-level
    unique index rejects a write that lost a concurrent race.
    """

    def __init__(self, email: str) -> None:
        super().__init__(f"Customer with email '{email}' already exists")
        self.email = email


class InvalidCustomerData(CustomerError):
    """One or more request fields violate their constraints.

    ``errors`` maps each offending wire field name to one message.
    """

    def __init__(self, errors: Dict[str, str]) -> None:
        super().__init__("Validation failed")
        self.errors = dict(errors)
