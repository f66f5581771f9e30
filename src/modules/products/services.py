"""Product service layer (Use Cases).

Orchestrates validation and persistence for the Product aggregate,
delegating storage to the injected ``IProductRepository``.

Failure contract: every method either returns its result or raises
``ServiceError`` carrying one of
- ``NotFound``: no product with the requested id.
- ``InvalidNumberFormat``: the price is present but not a number.
- ``FieldErrors``: one message per field that broke a rule.

Existence is always checked before the payload is validated, and the
payload is always validated before anything is written.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from django.db import transaction

from modules.core.errors import FieldErrors, InvalidNumberFormat, NotFound, ServiceError
from modules.products.models import Product
from modules.products.validators import PriceParseFailure, parse_price, validate_product

if TYPE_CHECKING:
    from modules.core.pagination import Page, PageRequest
    from modules.products.dtos import ProductData, ProductInput
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

RESOURCE_NAME = "Product"


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, product_input: ProductInput) -> Product:
        """Validate the payload and insert a new product.

        Raises:
            ServiceError: ``InvalidNumberFormat`` or ``FieldErrors``; the
                store is not touched in either case.
        """
        data = self._validate(product_input)

        product = Product(
            name=data.name,
            description=data.description,
            price=data.price,
        )
        product = self._repo.create(product)
        logger.info("product.created", product_id=product.id)
        return product

    @transaction.atomic
    def update_product(self, id: int, product_input: ProductInput) -> Product:
        """Replace name, description and price of an existing product.

        ``id`` and ``created_at`` are left untouched.

        Raises:
            ServiceError: ``NotFound`` (checked first), then
                ``InvalidNumberFormat`` or ``FieldErrors``.
        """
        product = self.get_product(id)
        data = self._validate(product_input, product_id=id)

        product.name = data.name
        product.description = data.description
        product.price = data.price

        updated = self._repo.update(product)
        if updated is None:
            logger.warning("product.vanished_during_update", product_id=id)
            raise ServiceError(NotFound(RESOURCE_NAME, id))
        logger.info("product.updated", product_id=id)
        return updated

    @transaction.atomic
    def delete_product(self, id: int) -> None:
        """Hard-delete a product.

        Raises:
            ServiceError: ``NotFound`` if the product does not exist.
        """
        self.get_product(id)
        if not self._repo.delete(id):
            raise ServiceError(NotFound(RESOURCE_NAME, id))
        logger.info("product.deleted", product_id=id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_product(self, id: int) -> Product:
        """Retrieve a single product by ID.

        Raises:
            ServiceError: ``NotFound`` if the product does not exist.
        """
        product = self._repo.get_by_id(id)
        if product is None:
            logger.info("product.not_found", product_id=id)
            raise ServiceError(NotFound(RESOURCE_NAME, id))
        return product

    def list_products(self, page_request: PageRequest) -> Page[Product]:
        """Return one page of products.

        A page past the end comes back empty with the real totals.
        """
        return self._repo.list_page(page_request)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _validate(
        self, product_input: ProductInput, product_id: int | None = None
    ) -> ProductData:
        log = logger.bind(product_id=product_id)

        price = parse_price(product_input.price)
        if isinstance(price, PriceParseFailure):
            log.info("product.validation_failed", fields=["price"], reason="number_format")
            raise ServiceError(InvalidNumberFormat(price.raw))

        result = validate_product(product_input, price)
        if not result.is_valid:
            log.info("product.validation_failed", fields=sorted(result.errors))
            raise ServiceError(FieldErrors(result.errors))
        return result.data
