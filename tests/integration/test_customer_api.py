"""Integration tests for Customer API endpoints.

Covers:
- CRUD operations via /api/v1/customers/ wrapped in the response envelope.
- Domain exception mapping (400 with field errors, 404, 409).
- Paged listing: defaults, normalisation, status filter, past-the-end pages.
- Name search via /api/v1/customers/search/.
"""

from __future__ import annotations

import re

import pytest

from modules.customers.models import Customer, CustomerStatus

pytestmark = pytest.mark.integration

BASE_URL = "/api/v1/customers/"
SEARCH_URL = "/api/v1/customers/search/"
TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$")


def _detail_url(customer_id: str) -> str:
    return f"{BASE_URL}{customer_id}/"


def _john(**overrides) -> dict:
    payload = {
        "firstName": "John",
        "lastName": "Doe",
        "email": "john@x.com",
        "phone": "+1234567890",
    }
    payload.update(overrides)
    return payload


# ===========================================================================
# Lifecycle
# ===========================================================================


class TestCustomerLifecycle:
    def test_full_lifecycle(self, api_client):
        created = api_client.post(BASE_URL, _john(), format="json")
        assert created.status_code == 201
        customer_id = created.json()["data"]["customerId"]

        duplicate = api_client.post(BASE_URL, _john(firstName="Other"), format="json")
        assert duplicate.status_code == 409
        assert duplicate.json()["message"] == "Customer with email 'john@x.com' already exists"

        updated = api_client.put(_detail_url(customer_id), {"lastName": "Smith"}, format="json")
        assert updated.status_code == 200
        assert updated.json()["data"]["lastName"] == "Smith"
        assert updated.json()["data"]["firstName"] == "John"

        deleted = api_client.delete(_detail_url(customer_id))
        assert deleted.status_code == 200

        gone = api_client.get(_detail_url(customer_id))
        assert gone.status_code == 404


# ===========================================================================
# Create
# ===========================================================================


class TestCreateCustomer:
    def test_create_returns_201_envelope(self, api_client):
        response = api_client.post(BASE_URL, _john(), format="json")
        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "SUCCESS"
        assert body["message"] == "Customer created successfully"
        assert TIMESTAMP_RE.match(body["timestamp"])

        data = body["data"]
        assert data["firstName"] == "John"
        assert data["lastName"] == "Doe"
        assert data["email"] == "john@x.com"
        assert data["phone"] == "+1234567890"
        assert data["status"] == "ACTIVE"
        assert data["customerId"]
        assert data["createdAt"] == data["updatedAt"]
        assert Customer.objects.filter(customer_id=data["customerId"]).exists()

    def test_create_with_optional_fields(self, api_client):
        response = api_client.post(
            BASE_URL,
            _john(address="1 Main St", dateOfBirth="1990-05-17", status="INACTIVE"),
            format="json",
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["address"] == "1 Main St"
        assert data["dateOfBirth"] == "1990-05-17"
        assert data["status"] == "INACTIVE"

    def test_client_supplied_id_is_ignored(self, api_client):
        response = api_client.post(BASE_URL, _john(customerId="my-own-id"), format="json")
        assert response.status_code == 201
        assert response.json()["data"]["customerId"] != "my-own-id"

    def test_duplicate_email_returns_409(self, api_client, make_customer):
        make_customer(email="john@x.com")
        response = api_client.post(BASE_URL, _john(), format="json")
        assert response.status_code == 409
        body = response.json()
        assert body["status"] == "ERROR"
        assert body["message"] == "Customer with email 'john@x.com' already exists"
        assert body["data"] is None

    def test_duplicate_email_differing_in_case_returns_409(self, api_client, make_customer):
        make_customer(email="john@x.com")
        response = api_client.post(BASE_URL, _john(email="JOHN@x.com"), format="json")
        assert response.status_code == 409
        assert Customer.objects.count() == 1

    def test_missing_fields_return_400_with_all_errors(self, api_client):
        response = api_client.post(BASE_URL, {}, format="json")
        assert response.status_code == 400
        body = response.json()
        assert body["status"] == "ERROR"
        assert body["message"] == "Validation failed"
        assert body["data"] == {
            "firstName": "First name is required",
            "lastName": "Last name is required",
            "email": "Email is required",
            "phone": "Phone number is required",
        }
        assert Customer.objects.count() == 0

    def test_invalid_values_return_400(self, api_client):
        response = api_client.post(
            BASE_URL,
            _john(
                firstName="x" * 51,
                email="not-an-email",
                phone="12345",
                dateOfBirth="2020-13-45",
                status="BOGUS",
            ),
            format="json",
        )
        assert response.status_code == 400
        errors = response.json()["data"]
        assert errors["firstName"] == "First name must not exceed 50 characters"
        assert errors["email"] == "Email must be valid"
        assert errors["phone"] == "Phone number must be in international format"
        assert errors["dateOfBirth"] == "Date of birth must be a valid date (YYYY-MM-DD)"
        assert errors["status"] == "Status must be one of ACTIVE, INACTIVE, SUSPENDED"
        assert "lastName" not in errors

    def test_non_object_body_returns_400(self, api_client):
        response = api_client.post(BASE_URL, [1, 2, 3], format="json")
        assert response.status_code == 400
        assert response.json()["data"] == {"body": "Request body must be a JSON object"}


# ===========================================================================
# Retrieve
# ===========================================================================


class TestRetrieveCustomer:
    def test_get_existing(self, api_client, make_customer):
        customer = make_customer(first_name="Jane", address="2 Side St")
        response = api_client.get(_detail_url(customer.customer_id))
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "SUCCESS"
        assert body["message"] == "Operation completed successfully"
        assert body["data"]["customerId"] == customer.customer_id
        assert body["data"]["firstName"] == "Jane"
        assert body["data"]["address"] == "2 Side St"

    def test_get_unknown_returns_404(self, api_client):
        response = api_client.get(_detail_url("unknown-id"))
        assert response.status_code == 404
        body = response.json()
        assert body["status"] == "ERROR"
        assert body["message"] == "Customer not found with ID: unknown-id"


# ===========================================================================
# Update
# ===========================================================================


class TestUpdateCustomer:
    def test_partial_update_keeps_other_fields(self, api_client, make_customer):
        customer = make_customer(address="1 Main St")
        response = api_client.put(
            _detail_url(customer.customer_id), {"lastName": "Smith"}, format="json"
        )
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Customer updated successfully"
        assert body["data"]["lastName"] == "Smith"
        assert body["data"]["address"] == "1 Main St"
        assert body["data"]["email"] == customer.email

        customer.refresh_from_db()
        assert customer.last_name == "Smith"

    def test_update_advances_updated_at(self, api_client, make_customer):
        customer = make_customer()
        created_at = customer.created_at
        api_client.put(_detail_url(customer.customer_id), {"phone": "+19876543210"}, format="json")
        customer.refresh_from_db()
        assert customer.updated_at > created_at
        assert customer.created_at == created_at

    def test_patch_behaves_like_put(self, api_client, make_customer):
        customer = make_customer()
        response = api_client.patch(
            _detail_url(customer.customer_id), {"status": "SUSPENDED"}, format="json"
        )
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "SUSPENDED"

    def test_update_unknown_returns_404(self, api_client):
        response = api_client.put(_detail_url("ghost"), {"firstName": "Ghost"}, format="json")
        assert response.status_code == 404
        assert response.json()["message"] == "Customer not found with ID: ghost"

    def test_update_to_taken_email_returns_409(self, api_client, make_customer):
        make_customer(email="taken@x.com")
        customer = make_customer()
        response = api_client.put(
            _detail_url(customer.customer_id), {"email": "taken@x.com"}, format="json"
        )
        assert response.status_code == 409
        customer.refresh_from_db()
        assert customer.email != "taken@x.com"

    def test_update_keeping_own_email_succeeds(self, api_client, make_customer):
        customer = make_customer(email="mine@x.com")
        response = api_client.put(
            _detail_url(customer.customer_id), {"email": "mine@x.com"}, format="json"
        )
        assert response.status_code == 200

    def test_invalid_update_returns_400(self, api_client, make_customer):
        customer = make_customer()
        response = api_client.put(
            _detail_url(customer.customer_id),
            {"firstName": "  ", "phone": "abc"},
            format="json",
        )
        assert response.status_code == 400
        assert response.json()["data"] == {
            "firstName": "First name must not be blank",
            "phone": "Phone number must be in international format",
        }


# ===========================================================================
# Delete
# ===========================================================================


class TestDeleteCustomer:
    def test_delete_returns_id(self, api_client, make_customer):
        customer = make_customer()
        response = api_client.delete(_detail_url(customer.customer_id))
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Customer deleted successfully"
        assert body["data"] == customer.customer_id
        assert not Customer.objects.filter(customer_id=customer.customer_id).exists()

    def test_delete_unknown_returns_404(self, api_client):
        response = api_client.delete(_detail_url("unknown-id"))
        assert response.status_code == 404

    def test_deleted_email_can_be_reused(self, api_client, make_customer):
        customer = make_customer(email="john@x.com")
        api_client.delete(_detail_url(customer.customer_id))
        response = api_client.post(BASE_URL, _john(), format="json")
        assert response.status_code == 201


# ===========================================================================
# List
# ===========================================================================


class TestListCustomers:
    def test_three_customers_single_page(self, api_client, make_customer):
        for _ in range(3):
            make_customer()
        response = api_client.get(BASE_URL)
        assert response.status_code == 200
        data = response.json()["data"]
        assert len(data["customers"]) == 3
        assert data["page"] == 0
        assert data["size"] == 10
        assert data["totalElements"] == 3
        assert data["totalPages"] == 1
        assert data["hasNext"] is False
        assert data["hasPrevious"] is False

    def test_newest_first_with_summary_fields(self, api_client, make_customer):
        older = make_customer()
        newer = make_customer()
        data = api_client.get(BASE_URL).json()["data"]
        assert [c["customerId"] for c in data["customers"]] == [
            newer.customer_id,
            older.customer_id,
        ]
        assert set(data["customers"][0]) == {
            "customerId",
            "firstName",
            "lastName",
            "email",
            "status",
        }

    def test_paging_window(self, api_client, make_customer):
        for _ in range(5):
            make_customer()
        data = api_client.get(BASE_URL, {"page": 1, "size": 2}).json()["data"]
        assert len(data["customers"]) == 2
        assert data["totalElements"] == 5
        assert data["totalPages"] == 3
        assert data["hasNext"] is True
        assert data["hasPrevious"] is True

    def test_page_past_the_end_is_empty(self, api_client, make_customer):
        for _ in range(3):
            make_customer()
        response = api_client.get(BASE_URL, {"page": 5})
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["customers"] == []
        assert data["totalElements"] == 3
        assert data["hasNext"] is False
        assert data["hasPrevious"] is True

    @pytest.mark.parametrize(
        "params",
        [
            {"page": -1, "size": 0},
            {"page": "abc", "size": "xyz"},
            {"size": 1001},
        ],
    )
    def test_invalid_paging_falls_back_to_defaults(self, api_client, params):
        response = api_client.get(BASE_URL, params)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["page"] == 0
        assert data["size"] == 10

    def test_status_filter(self, api_client, make_customer):
        make_customer()
        suspended = make_customer(status=CustomerStatus.SUSPENDED)
        data = api_client.get(BASE_URL, {"status": "SUSPENDED"}).json()["data"]
        assert data["totalElements"] == 1
        assert data["customers"][0]["customerId"] == suspended.customer_id

    def test_unknown_status_returns_400(self, api_client):
        response = api_client.get(BASE_URL, {"status": "BOGUS"})
        assert response.status_code == 400
        assert response.json()["data"] == {
            "status": "Status must be one of ACTIVE, INACTIVE, SUSPENDED"
        }


# ===========================================================================
# Search
# ===========================================================================


class TestSearchCustomers:
    def test_matches_first_or_last_name_case_insensitively(self, api_client, make_customer):
        make_customer(first_name="Johanna", last_name="Berg")
        make_customer(first_name="Alice", last_name="Johnson")
        make_customer(first_name="Bob", last_name="Stone")
        response = api_client.get(SEARCH_URL, {"name": "JOH"})
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["totalElements"] == 2
        assert {c["firstName"] for c in data["customers"]} == {"Johanna", "Alice"}

    def test_no_match_returns_empty_page(self, api_client, make_customer):
        make_customer()
        data = api_client.get(SEARCH_URL, {"name": "zzz"}).json()["data"]
        assert data["customers"] == []
        assert data["totalElements"] == 0

    def test_missing_term_returns_empty_page(self, api_client, make_customer):
        make_customer()
        data = api_client.get(SEARCH_URL).json()["data"]
        assert data["customers"] == []
        assert data["totalElements"] == 0

    def test_search_is_paged(self, api_client, make_customer):
        for _ in range(3):
            make_customer(first_name="Mary")
        data = api_client.get(SEARCH_URL, {"name": "mary", "size": 2}).json()["data"]
        assert len(data["customers"]) == 2
        assert data["totalPages"] == 2
        assert data["hasNext"] is True
