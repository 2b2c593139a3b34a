"""Customer service layer (Use Cases).

Orchestrates business logic for the Customer aggregate, delegating
persistence to the injected ``ICustomerRepository``.

Business rules enforced here:
- Email must be unique.  The ``exists`` pre-check only gives a friendly
  error in the common case; two concurrent writers can both pass it, so a
  unique-index violation raised by ``save`` is mapped to the same
  ``DuplicateEmail`` failure.
- ``customer_id`` and both timestamps are assigned here, never by clients.
- Delete is permanent.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import structlog
import uuid6
from django.db import IntegrityError, transaction

from modules.core.pagination import PageRequest
from modules.customers import mappers
from modules.customers.dtos import CustomerListDTO, CustomerOutputDTO, CustomerSummaryDTO
from modules.customers.exceptions import CustomerNotFound, DuplicateEmail

if TYPE_CHECKING:
    from modules.core.pagination import Page
    from modules.customers.dtos import CreateCustomerDTO, UpdateCustomerDTO
    from modules.customers.models import Customer
    from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


def new_customer_id() -> str:
    """Time-ordered, globally unique identifier in string form."""
    return str(uuid6.uuid7())


class CustomerService:
    """Application service for Customer use-cases.

    Receives an ``ICustomerRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: ICustomerRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_customer(self, dto: CreateCustomerDTO) -> CustomerOutputDTO:
        """Create a new customer after enforcing email uniqueness.

        Raises:
            DuplicateEmail: if the email is already taken.
        """
        log = logger.bind(email=dto.email)
        log.info("customer.creating")

        if self._repo.exists_by_email(dto.email):
            log.warning("customer.duplicate_email")
            raise DuplicateEmail(dto.email)

        customer = mappers.to_entity(dto)
        customer.customer_id = new_customer_id()
        customer = self._save(customer, dto.email, log)

        log.info("customer.created", customer_id=customer.customer_id)
        return CustomerOutputDTO.from_entity(customer)

    @transaction.atomic
    def update_customer(self, id: str, dto: UpdateCustomerDTO) -> CustomerOutputDTO:
        """Apply a partial update to an existing customer.

        Raises:
            CustomerNotFound: if the customer does not exist.
            DuplicateEmail: if the new email belongs to another customer.
        """
        log = logger.bind(customer_id=str(id))
        log.info("customer.updating")

        customer = self._repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound(id)

        if dto.email is not None and dto.email != customer.email:
            if self._repo.exists_by_email_excluding(dto.email, id):
                log.warning("customer.duplicate_email", email=dto.email)
                raise DuplicateEmail(dto.email)

        mappers.apply_update(dto, customer)
        customer = self._save(customer, dto.email or customer.email, log)

        log.info("customer.updated")
        return CustomerOutputDTO.from_entity(customer)

    @transaction.atomic
    def delete_customer(self, id: str) -> str:
        """Permanently delete a customer and return its id.

        Raises:
            CustomerNotFound: if the customer does not exist.
        """
        if not self._repo.exists_by_id(id):
            raise CustomerNotFound(id)
        self._repo.delete(id)
        logger.info("customer.deleted", customer_id=str(id))
        return id

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_customer(self, id: str) -> CustomerOutputDTO:
        """Retrieve a single customer by ID.

        Raises:
            CustomerNotFound: if the customer does not exist.
        """
        customer = self._repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound(id)
        logger.debug("customer.retrieved", customer_id=str(id))
        return CustomerOutputDTO.from_entity(customer)

    def list_customers(
        self, page: int = 0, size: int = 10, status: Optional[str] = None
    ) -> CustomerListDTO:
        """Return one page of customers, newest first, optionally by status."""
        page_request = PageRequest.of(page, size)
        logger.debug(
            "customer.listing",
            page=page_request.page,
            size=page_request.size,
            status=status,
        )
        if status is not None:
            result = self._repo.find_by_status(status, page_request)
        else:
            result = self._repo.find_all(page_request)
        return self._to_list(result)

    def search_customers(self, name: str, page: int = 0, size: int = 10) -> CustomerListDTO:
        """Return one page of customers whose first or last name contains ``name``."""
        page_request = PageRequest.of(page, size)
        logger.debug(
            "customer.searching",
            term=name,
            page=page_request.page,
            size=page_request.size,
        )
        return self._to_list(self._repo.search_by_name(name or "", page_request))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _save(self, customer: Customer, email: str, log) -> Customer:
        """Persist, mapping a lost uniqueness race to ``DuplicateEmail``.

        Any other integrity failure propagates unchanged.
        """
        try:
            return self._repo.save(customer)
        except IntegrityError as exc:
            if not self._repo.exists_by_email_excluding(email, customer.customer_id):
                raise
            log.warning("customer.duplicate_email_on_write")
            raise DuplicateEmail(email) from exc

    @staticmethod
    def _to_list(page: Page[Customer]) -> CustomerListDTO:
        return CustomerListDTO.from_page(page.map(CustomerSummaryDTO.from_entity))
