"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.
The view never builds error responses itself: failures are raised as
``ServiceError`` and rendered by ``modules.core.errors.api_exception_handler``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from django.conf import settings
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.core.errors import MalformedBody, ParameterTypeMismatch, ServiceError
from modules.core.pagination import resolve_page_request
from modules.products.constants import ProductSortField
from modules.products.dtos import ProductInput
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import ProductPageSerializer, ProductSerializer
from modules.products.services import ProductService

_ID_RE = re.compile(r"[+-]?[0-9]{1,19}", re.ASCII)
_INT64_MIN, _INT64_MAX = -(2**63), 2**63 - 1

ID_PARAMETER = OpenApiParameter(
    "id", OpenApiTypes.INT64, OpenApiParameter.PATH, description="Product ID"
)
PRODUCT_INPUT_SCHEMA = {
    "application/json": {
        "type": "object",
        "required": ["name", "price"],
        "properties": {
            "name": {"type": "string", "minLength": 3, "example": "Laptop"},
            "description": {
                "type": "string",
                "nullable": True,
                "example": "High-performance laptop with 16GB RAM",
            },
            "price": {"type": "string", "format": "decimal", "example": "999.99"},
        },
    }
}
ERROR_RESPONSE = OpenApiResponse(description='{"message": "..."} or {field: message}')
TEXT_FIELDS = ("name", "description")


def parse_product_id(raw: str | None) -> int:
    """Parse a path ``id`` into a signed 64-bit integer.

    Raises:
        ServiceError: ``ParameterTypeMismatch`` when ``raw`` is not one.
    """
    if raw is None or not _ID_RE.fullmatch(raw):
        raise ServiceError(ParameterTypeMismatch("id", str(raw), "integer"))
    value = int(raw)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ServiceError(ParameterTypeMismatch("id", raw, "integer"))
    return value


def product_input_from_request(request: Request) -> ProductInput:
    data = request.data
    if not isinstance(data, Mapping):
        raise ServiceError(MalformedBody("expected a JSON object"))
    for key in TEXT_FIELDS:
        if isinstance(data.get(key), (Mapping, list)):
            raise ServiceError(MalformedBody(f"'{key}' must be a text value"))
    return ProductInput.from_payload(data)


class ProductViewSet(ViewSet):
    """ViewSet for Product CRUD operations.

    Uses ``ProductService`` with ``ProductDjangoRepository`` (DIP).
    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    # Let malformed ids reach the view so they get a 400, not a routing 404.
    lookup_value_regex = "[^/]+"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    @extend_schema(
        summary="List products, one page at a time",
        parameters=[
            OpenApiParameter("page", int, description="Zero-based page number (default 0)"),
            OpenApiParameter("size", int, description="Page size (default 20)"),
            OpenApiParameter(
                "sort",
                str,
                description=(
                    "'field' or 'field,asc|desc'. Fields: "
                    + ", ".join(ProductSortField.values)
                ),
            ),
        ],
        responses={200: ProductPageSerializer, 400: ERROR_RESPONSE},
    )
    def list(self, request: Request) -> Response:
        """GET /products"""
        page_request = resolve_page_request(
            request.query_params.get("page"),
            request.query_params.get("size"),
            request.query_params.get("sort"),
            sortable=ProductSortField.values,
            default_size=settings.DEFAULT_PAGE_SIZE,
            max_size=settings.MAX_PAGE_SIZE,
        )
        page = self._service.list_products(page_request)
        return Response(ProductPageSerializer(page).data)

    @extend_schema(
        summary="Get a product by ID",
        parameters=[ID_PARAMETER],
        responses={200: ProductSerializer, 400: ERROR_RESPONSE, 404: ERROR_RESPONSE},
    )
    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /products/{pk}"""
        product = self._service.get_product(parse_product_id(pk))
        return Response(ProductSerializer(product).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    @extend_schema(
        summary="Create a new product",
        request=PRODUCT_INPUT_SCHEMA,
        responses={201: ProductSerializer, 400: ERROR_RESPONSE},
    )
    def create(self, request: Request) -> Response:
        """POST /products"""
        product = self._service.create_product(product_input_from_request(request))
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="Replace a product's name, description and price",
        parameters=[ID_PARAMETER],
        request=PRODUCT_INPUT_SCHEMA,
        responses={200: ProductSerializer, 400: ERROR_RESPONSE, 404: ERROR_RESPONSE},
    )
    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /products/{pk}"""
        product_id = parse_product_id(pk)
        product = self._service.update_product(
            product_id, product_input_from_request(request)
        )
        return Response(ProductSerializer(product).data)

    @extend_schema(
        summary="Delete a product",
        parameters=[ID_PARAMETER],
        responses={204: None, 400: ERROR_RESPONSE, 404: ERROR_RESPONSE},
    )
    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /products/{pk}"""
        self._service.delete_product(parse_product_id(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)
