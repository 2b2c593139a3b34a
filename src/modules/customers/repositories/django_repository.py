"""Django ORM implementation of the Customer repository.

Satisfies ``ICustomerRepository`` using Django's QuerySet API.
Look-ups follow the Null Object pattern: they return ``None`` / ``False``
instead of raising — the Service Layer decides how to translate a missing
entity into an API response.  Writes let ``IntegrityError`` propagate so
the service can map a unique-email violation to a domain error.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.db import transaction

from modules.core.pagination import Page, PageRequest, paginate
from modules.customers.filters import CustomerFilter
from modules.customers.models import Customer
from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerDjangoRepository(ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    def _page(self, params: Dict[str, Any], page_request: PageRequest) -> Page[Customer]:
        filterset = CustomerFilter(params, queryset=Customer.objects.all())
        if not filterset.is_valid():
            logger.warning("customer.invalid_filter", errors=dict(filterset.errors))
            return Page.empty(page_request)
        return paginate(filterset.qs, page_request)

    def get_by_id(self, id: str) -> Optional[Customer]:
        return Customer.objects.filter(customer_id=id).first()

    def exists_by_id(self, id: str) -> bool:
        return Customer.objects.filter(customer_id=id).exists()

    def exists_by_email(self, email: str) -> bool:
        return Customer.objects.filter(email__iexact=email).exists()

    def exists_by_email_excluding(self, email: str, customer_id: str) -> bool:
        return (
            Customer.objects.filter(email__iexact=email)
            .exclude(customer_id=customer_id)
            .exists()
        )

    def find_all(self, page_request: PageRequest) -> Page[Customer]:
        return paginate(Customer.objects.all(), page_request)

    def find_by_status(self, status: str, page_request: PageRequest) -> Page[Customer]:
        return self._page({"status": status}, page_request)

    def search_by_name(self, term: str, page_request: PageRequest) -> Page[Customer]:
        """Case-insensitive substring search over first and last name.

        A blank ``term`` matches nothing.
        """
        if not term or not term.strip():
            return Page.empty(page_request)
        return self._page({"name": term}, page_request)

    @transaction.atomic
    def save(self, entity: Customer) -> Customer:
        """Persist (create or update) a customer.

        New records are force-inserted so an id collision can never
        overwrite an existing row.
        """
        is_new = entity._state.adding
        entity.save(force_insert=is_new)
        logger.info("customer.saved", customer_id=entity.customer_id, is_new=is_new)
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Hard-delete a customer; ``False`` if no customer has this ID."""
        deleted, _ = Customer.objects.filter(customer_id=id).delete()
        if deleted:
            logger.info("customer.deleted", customer_id=id)
        return bool(deleted)
