"""In-memory implementation of the Product repository.

Keeps rows as plain field dicts and hands out fresh ``Product`` instances,
so callers can never mutate stored state without going through
``update``.  Useful for service tests and local experiments; it is not
shared between processes.
"""

from __future__ import annotations

import itertools
from typing import Any, Optional

from django.utils import timezone

from modules.core.pagination import Page, PageRequest, SortDirection
from modules.products.constants import SORT_COLUMNS
from modules.products.models import Product, quantize_price
from modules.products.repositories.interfaces import IProductRepository


class InMemoryProductRepository(IProductRepository):
    """Dict-backed Product repository with auto-incrementing ids."""

    def __init__(self) -> None:
        self._rows: dict[int, dict[str, Any]] = {}
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._rows)

    def _to_entity(self, row: dict[str, Any]) -> Product:
        return Product(**row)

    def get_by_id(self, id: int) -> Optional[Product]:
        row = self._rows.get(id)
        return self._to_entity(row) if row is not None else None

    def list_page(self, page_request: PageRequest) -> Page[Product]:
        rows = sorted(self._rows.values(), key=lambda row: row["id"])

        if page_request.sort_key is not None:
            column = SORT_COLUMNS[page_request.sort_key]
            # Stable sort: ties keep ascending id even when reversed.
            # NULLs sort first ascending, as in SQLite and MySQL.
            rows.sort(
                key=lambda row: (row[column] is not None, row[column]),
                reverse=page_request.sort_direction == SortDirection.DESC,
            )

        start = page_request.offset
        window = rows[start : start + page_request.page_size]
        return Page(
            content=[self._to_entity(row) for row in window],
            total_elements=len(rows),
            page_number=page_request.page_number,
            page_size=page_request.page_size,
            sort_key=page_request.sort_key,
            sort_direction=page_request.sort_direction,
        )

    def create(self, entity: Product) -> Product:
        entity.id = next(self._ids)
        entity.created_at = timezone.now()
        entity.price = quantize_price(entity.price)
        self._rows[entity.id] = {
            "id": entity.id,
            "name": entity.name,
            "description": entity.description,
            "price": entity.price,
            "created_at": entity.created_at,
        }
        return entity

    def update(self, entity: Product) -> Optional[Product]:
        row = self._rows.get(entity.id)
        if row is None:
            return None
        entity.price = quantize_price(entity.price)
        row.update(
            name=entity.name,
            description=entity.description,
            price=entity.price,
        )
        return self._to_entity(row)

    def delete(self, id: int) -> bool:
        return self._rows.pop(id, None) is not None

