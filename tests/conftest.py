import uuid
from datetime import timedelta

import pytest
from django.utils import timezone

from rest_framework.test import APIClient

from modules.customers.models import Customer, CustomerStatus


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def make_customer():
    """Factory persisting customers whose ``created_at`` grows with each call."""
    base = timezone.now() - timedelta(days=1)
    counter = {"n": 0}

    def _make(**overrides) -> Customer:
        counter["n"] += 1
        created = base + timedelta(seconds=counter["n"])
        defaults = {
            "customer_id": str(uuid.uuid4()),
            "first_name": "John",
            "last_name": "Doe",
            "email": f"{uuid.uuid4().hex[:8]}@example.com",
            "phone": "+1234567890",
            "status": CustomerStatus.ACTIVE,
            "created_at": created,
            "updated_at": created,
        }
        defaults.update(overrides)
        customer = Customer(**defaults)
        customer.save(force_insert=True)
        return customer

    return _make
