"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: methods return ``None``
(or ``False``) instead of raising; the Service Layer decides how to
translate a missing entity into an API response.
"""

from __future__ import annotations

from typing import Optional

import structlog
from django.db import transaction

from modules.core.pagination import Page, PageRequest, SortDirection
from modules.products.constants import SORT_COLUMNS
from modules.products.models import Product, quantize_price
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Product]:
        """Retrieve a product by primary key, or ``None``."""
        return Product.objects.filter(pk=id).first()

    def list_page(self, page_request: PageRequest) -> Page[Product]:
        """Return one page ordered by the requested key, ties broken by id."""
        queryset = Product.objects.all()

        if page_request.sort_key is not None:
            column = SORT_COLUMNS[page_request.sort_key]
            prefix = "-" if page_request.sort_direction == SortDirection.DESC else ""
            ordering = [f"{prefix}{column}"]
            if column != "id":
                ordering.append("id")
            queryset = queryset.order_by(*ordering)
        else:
            queryset = queryset.order_by("id")

        total = queryset.count()
        start = page_request.offset
        content: list[Product] = []
        if start < total:
            content = list(queryset[start : start + page_request.page_size])

        return Page(
            content=content,
            total_elements=total,
            page_number=page_request.page_number,
            page_size=page_request.page_size,
            sort_key=page_request.sort_key,
            sort_direction=page_request.sort_direction,
        )

    @transaction.atomic
    def create(self, entity: Product) -> Product:
        """Insert a product; the database assigns ``id`` and ``created_at``."""
        entity.save(force_insert=True)
        logger.info("product.saved", product_id=entity.id, operation="insert")
        return entity

    @transaction.atomic
    def update(self, entity: Product) -> Optional[Product]:
        """Overwrite the mutable columns of an existing row.

        Returns ``None`` if the row disappeared; never re-inserts it.
        """
        entity.price = quantize_price(entity.price)
        updated = Product.objects.filter(pk=entity.pk).update(
            name=entity.name,
            description=entity.description,
            price=entity.price,
        )
        if not updated:
            return None
        logger.info("product.saved", product_id=entity.id, operation="update")
        return entity

    @transaction.atomic
    def delete(self, id: int) -> bool:
        """Hard-delete a product by ID.

        Returns ``True`` if a row was removed, ``False`` otherwise.
        """
        deleted, _ = Product.objects.filter(pk=id).delete()
        return deleted > 0
