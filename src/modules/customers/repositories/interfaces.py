"""Customer repository interface.

Extends ``IRepository[Customer]`` with the look-ups the service needs for
email uniqueness and the paged status/name queries.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING

from modules.core.pagination import Page, PageRequest
from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.customers.models import Customer


class ICustomerRepository(IRepository["Customer"]):
    """Repository contract for the Customer aggregate.

    Email comparisons are case-insensitive, matching the storage-level
    unique index on ``LOWER(email)``.  Paged queries are ordered by
    ``created_at`` descending.
    """

    @abstractmethod
    def exists_by_email(self, email: str) -> bool:
        """Return ``True`` if any customer holds this email."""

    @abstractmethod
    def exists_by_email_excluding(self, email: str, customer_id: str) -> bool:
        """Return ``True`` if a customer other than ``customer_id`` holds this email."""

    @abstractmethod
    def find_by_status(self, status: str, page_request: PageRequest) -> Page[Customer]:
        """Return one page of customers with the given status."""

    @abstractmethod
    def search_by_name(self, term: str, page_request: PageRequest) -> Page[Customer]:
        """Return one page of customers whose first or last name contains ``term``."""
