"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the minimal store capability every concrete
store implements: look-up by id, paged listing, create, update and hard
delete.  Service-layer code depends on this abstraction, never on the
Django ORM directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, Optional, TypeVar

if TYPE_CHECKING:
    from modules.core.pagination import Page, PageRequest

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the domain entity managed by the
    repository (e.g. ``Product``).
    """

    @abstractmethod
    def get_by_id(self, id: int) -> Optional[T]:
        """Retrieve an entity by its primary key, or ``None``."""

    @abstractmethod
    def list_page(self, page_request: PageRequest) -> Page[T]:
        """Return one sorted page plus the collection totals."""

    @abstractmethod
    def create(self, entity: T) -> T:
        """Insert a new entity; the store assigns its identity."""

    @abstractmethod
    def update(self, entity: T) -> Optional[T]:
        """Overwrite an existing entity.

        Returns ``None`` when the row no longer exists; never inserts.
        """

    @abstractmethod
    def delete(self, id: int) -> bool:
        """Hard-delete an entity.  ``False`` if nothing was removed."""
