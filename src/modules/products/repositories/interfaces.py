"""Product repository interface.

``IRepository[Product]`` is the whole store capability the product
service needs: look-up, paged listing, create, update and delete.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate.

    ``list_page`` must honour ``PageRequest.sort_key`` for every
    ``ProductSortField`` and fall back to ascending ``id``.
    """
