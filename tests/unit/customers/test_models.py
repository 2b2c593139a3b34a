"""Unit tests for the Customer model.

Covers:
- Defaults (status ACTIVE, optional fields empty).
- Equality by ``customer_id``; unsaved instances equal only to themselves.
- Case-insensitive unique email enforced by the database.
- Phone masking in ``__str__``.
"""

from __future__ import annotations

import pytest
from django.db import IntegrityError, transaction

from modules.customers.models import Customer, CustomerStatus

pytestmark = pytest.mark.unit


class TestCustomerDefaults:
    def test_status_defaults_to_active(self):
        assert Customer().status == CustomerStatus.ACTIVE

    def test_optional_fields_default_to_none(self):
        customer = Customer()
        assert customer.address is None
        assert customer.date_of_birth is None

    def test_no_id_until_assigned(self):
        assert Customer().customer_id is None


class TestCustomerEquality:
    def test_equal_when_ids_match(self):
        a = Customer(customer_id="abc", first_name="A")
        b = Customer(customer_id="abc", first_name="B")
        assert a == b
        assert hash(a) == hash(b)

    def test_not_equal_when_ids_differ(self):
        assert Customer(customer_id="abc") != Customer(customer_id="xyz")

    def test_unassigned_ids_are_not_equal_to_each_other(self):
        assert Customer() != Customer()

    def test_unassigned_instance_equals_itself(self):
        customer = Customer()
        assert customer == customer


class TestEmailUniqueness:
    def test_duplicate_email_rejected(self, make_customer):
        make_customer(email="john@x.com")
        with pytest.raises(IntegrityError), transaction.atomic():
            make_customer(email="john@x.com")

    def test_duplicate_email_rejected_case_insensitively(self, make_customer):
        make_customer(email="john@x.com")
        with pytest.raises(IntegrityError), transaction.atomic():
            make_customer(email="John@X.com")

    def test_distinct_emails_allowed(self, make_customer):
        make_customer(email="a@x.com")
        make_customer(email="b@x.com")
        assert Customer.objects.count() == 2


class TestCustomerStr:
    def test_masks_phone(self):
        customer = Customer(
            first_name="John", last_name="Doe", email="john@x.com", phone="+1234567890"
        )
        text = str(customer)
        assert "+1234567890" not in text
        assert "***7890" in text
        assert "John Doe" in text
