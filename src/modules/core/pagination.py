"""Page requests and paged results.

``resolve_page_request`` turns the raw ``page``, ``size`` and ``sort`` query
parameters into a bounded :class:`PageRequest`; stores answer with a
:class:`Page`.  Bad input raises :class:`~modules.core.errors.ServiceError`
so the exception handler can report which parameter was wrong.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from modules.core.errors import InvalidSortField, ParameterTypeMismatch, ServiceError

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 2000

_INTEGER_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)
_INT32_MIN, _INT32_MAX = -(2**31), 2**31 - 1


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


class PageRequest(BaseModel):
    """Immutable, normalised pagination and sort parameters."""

    model_config = ConfigDict(frozen=True)

    page_number: int = Field(default=0, ge=0)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, gt=0)
    sort_key: str | None = None
    sort_direction: SortDirection = SortDirection.ASC

    @property
    def offset(self) -> int:
        return self.page_number * self.page_size


@dataclass(frozen=True)
class Page(Generic[T]):
    """One slice of a sorted collection plus the collection totals."""

    content: list[T] = field(default_factory=list)
    total_elements: int = 0
    page_number: int = 0
    page_size: int = DEFAULT_PAGE_SIZE
    sort_key: str | None = None
    sort_direction: SortDirection = SortDirection.ASC

    @property
    def total_pages(self) -> int:
        if self.total_elements == 0:
            return 0
        return math.ceil(self.total_elements / self.page_size)

    @property
    def is_first(self) -> bool:
        return self.page_number == 0

    @property
    def is_last(self) -> bool:
        return self.page_number + 1 >= self.total_pages


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def _parse_int(name: str, raw: str | None, default: int) -> int:
    if raw is None or not str(raw).strip():
        return default
    text = str(raw).strip()
    # 11 chars covers "-2147483648"; longer digit runs never fit in 32 bits.
    if not _INTEGER_RE.fullmatch(text) or len(text) > 11:
        raise ServiceError(ParameterTypeMismatch(name, str(raw), "integer"))
    value = int(text)
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise ServiceError(ParameterTypeMismatch(name, str(raw), "integer"))
    return value


def _parse_sort(
    raw_sort: str | None, sortable: Iterable[str]
) -> tuple[str | None, SortDirection]:
    if raw_sort is None or not raw_sort.strip():
        return None, SortDirection.ASC

    key, _, direction = raw_sort.partition(",")
    key = key.strip()
    if not key:
        return None, SortDirection.ASC
    if key not in {str(name) for name in sortable}:
        raise ServiceError(InvalidSortField(key))

    if direction.strip().lower() == SortDirection.DESC:
        return key, SortDirection.DESC
    return key, SortDirection.ASC


def resolve_page_request(
    raw_page: str | None,
    raw_size: str | None,
    raw_sort: str | None,
    *,
    sortable: Iterable[str],
    default_size: int = DEFAULT_PAGE_SIZE,
    max_size: int = MAX_PAGE_SIZE,
) -> PageRequest:
    """Normalise raw query parameters into a :class:`PageRequest`.

    Raises:
        ServiceError: ``ParameterTypeMismatch`` for a non-integer, negative
            page or non-positive size; ``InvalidSortField`` when the sort
            key is not one of ``sortable``.
    """
    page_number = _parse_int("page", raw_page, 0)
    if page_number < 0:
        raise ServiceError(
            ParameterTypeMismatch("page", str(raw_page), "non-negative integer")
        )

    page_size = _parse_int("size", raw_size, default_size)
    if page_size <= 0:
        raise ServiceError(
            ParameterTypeMismatch("size", str(raw_size), "positive integer")
        )

    sort_key, sort_direction = _parse_sort(raw_sort, sortable)

    return PageRequest(
        page_number=page_number,
        page_size=min(page_size, max_size),
        sort_key=sort_key,
        sort_direction=sort_direction,
    )
