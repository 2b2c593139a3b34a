"""Customer API views.

Exposes the ``CustomerService`` via HTTP using a DRF ViewSet.
Domain exceptions are caught and translated into the standard response
envelope with the matching HTTP status; the view never swallows generic
exceptions (those reach ``envelope_exception_handler``).
"""

from __future__ import annotations

from typing import Any, Optional

from django.http import QueryDict
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.core.pagination import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, coerce_int
from modules.core.responses import ApiResponse
from modules.customers.dtos import INVALID_MESSAGES, CustomerStatusEnum
from modules.customers.exceptions import (
    CustomerError,
    CustomerNotFound,
    DuplicateEmail,
    InvalidCustomerData,
)
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.services import CustomerService
from modules.customers.validation import parse_create_request, parse_update_request

_ERROR_STATUS = {
    InvalidCustomerData: status.HTTP_400_BAD_REQUEST,
    CustomerNotFound: status.HTTP_404_NOT_FOUND,
    DuplicateEmail: status.HTTP_409_CONFLICT,
}

_PAGE_PARAMETERS = [
    OpenApiParameter("page", OpenApiTypes.INT, description="Page number (0-based)"),
    OpenApiParameter(
        "size", OpenApiTypes.INT, description="Customers per page (1-1000, default 10)"
    ),
]


def _error_response(exc: CustomerError) -> Response:
    data = exc.errors if isinstance(exc, InvalidCustomerData) else None
    return ApiResponse.error(exc.message, data).to_response(_ERROR_STATUS[type(exc)])


def _payload(request: Request) -> Any:
    data = request.data
    if isinstance(data, QueryDict):
        return data.dict()
    return data


def _status_filter(raw: Optional[str]) -> Optional[str]:
    if raw is None or raw == "":
        return None
    if raw not in CustomerStatusEnum.__members__:
        raise InvalidCustomerData({"status": INVALID_MESSAGES["status"]})
    return raw


class CustomerViewSet(ViewSet):
    """ViewSet for Customer CRUD, listing and search.

    Uses ``CustomerService`` with ``CustomerDjangoRepository`` (DIP).
    All ORM access goes through the service/repository layer.
    """

    lookup_field = "customer_id"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CustomerService(repository=CustomerDjangoRepository())

    # ------------------------------------------------------------------
    # List / Retrieve / Search
    # ------------------------------------------------------------------

    @extend_schema(
        parameters=[
            *_PAGE_PARAMETERS,
            OpenApiParameter(
                "status",
                OpenApiTypes.STR,
                enum=[member.value for member in CustomerStatusEnum],
                description="Filter by customer status",
            ),
        ]
    )
    def list(self, request: Request) -> Response:
        """GET /api/v1/customers/?page=&size=&status="""
        params = request.query_params
        try:
            status_filter = _status_filter(params.get("status"))
        except InvalidCustomerData as exc:
            return _error_response(exc)

        result = self._service.list_customers(
            page=coerce_int(params.get("page"), DEFAULT_PAGE),
            size=coerce_int(params.get("size"), DEFAULT_PAGE_SIZE),
            status=status_filter,
        )
        return ApiResponse.success(result).to_response()

    def retrieve(self, request: Request, customer_id: str | None = None) -> Response:
        """GET /api/v1/customers/{customer_id}/"""
        try:
            customer = self._service.get_customer(customer_id)
        except CustomerNotFound as exc:
            return _error_response(exc)
        return ApiResponse.success(customer).to_response()

    @extend_schema(
        parameters=[
            OpenApiParameter(
                "name",
                OpenApiTypes.STR,
                description="Text to find in first or last name (case-insensitive)",
            ),
            *_PAGE_PARAMETERS,
        ]
    )
    @action(detail=False, methods=["get"], url_path="search")
    def search(self, request: Request) -> Response:
        """GET /api/v1/customers/search/?name=&page=&size="""
        params = request.query_params
        result = self._service.search_customers(
            name=params.get("name", ""),
            page=coerce_int(params.get("page"), DEFAULT_PAGE),
            size=coerce_int(params.get("size"), DEFAULT_PAGE_SIZE),
        )
        return ApiResponse.success(result).to_response()

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/customers/"""
        try:
            dto = parse_create_request(_payload(request))
            customer = self._service.create_customer(dto)
        except (InvalidCustomerData, DuplicateEmail) as exc:
            return _error_response(exc)

        return ApiResponse.success(customer, "Customer created successfully").to_response(
            status.HTTP_201_CREATED
        )

    def update(self, request: Request, customer_id: str | None = None) -> Response:
        """PUT /api/v1/customers/{customer_id}/ (partial semantics)"""
        try:
            dto = parse_update_request(_payload(request))
            customer = self._service.update_customer(customer_id, dto)
        except (InvalidCustomerData, CustomerNotFound, DuplicateEmail) as exc:
            return _error_response(exc)

        return ApiResponse.success(customer, "Customer updated successfully").to_response()

    def partial_update(self, request: Request, customer_id: str | None = None) -> Response:
        """PATCH /api/v1/customers/{customer_id}/"""
        return self.update(request, customer_id)

    def destroy(self, request: Request, customer_id: str | None = None) -> Response:
        """DELETE /api/v1/customers/{customer_id}/"""
        try:
            deleted_id = self._service.delete_customer(customer_id)
        except CustomerNotFound as exc:
            return _error_response(exc)
        return ApiResponse.success(deleted_id, "Customer deleted successfully").to_response()
