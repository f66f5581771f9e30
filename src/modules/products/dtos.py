"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (Views) and the
Service layer.  DTOs are immutable (``frozen=True``).

- ``ProductInput``: the submitted payload, exactly as received.
- ``ProductData``: a payload that passed every field rule.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from modules.products.models import (
    MAX_PRICE,
    MIN_PRICE,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    quantize_price,
)

# ---------------------------------------------------------------------------
# Input DTO
# ---------------------------------------------------------------------------


class ProductInput(BaseModel):
    """Raw create/update payload.

    Values are kept untyped: ``price`` may still be text, an integer or a
    ``Decimal`` and is only interpreted by ``parse_price``.  Identity and
    timestamps are never taken from a payload.
    """

    model_config = ConfigDict(frozen=True)

    name: Any = None
    description: Any = None
    price: Any = None

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> ProductInput:
        return cls(
            name=data.get("name"),
            description=data.get("description"),
            price=data.get("price"),
        )


# ---------------------------------------------------------------------------
# Validated DTO
# ---------------------------------------------------------------------------


class ProductData(BaseModel):
    """Immutable, validated product fields.

    Validates:
    - ``name`` is present and at least 3 characters once trimmed; the
      "required" message wins over the length message.
    - ``price`` is present, at least 0.01 and still fits the stored column
      once rounded to two places.

    Scalar ``name`` and ``description`` values (numbers, booleans) are read
    as their text form.

    Every field is checked, so one ``ValidationError`` reports all of them.
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = Field(default=None, validate_default=True)
    description: str | None = None
    price: Decimal | None = Field(default=None, validate_default=True)

    @field_validator("name", "description", mode="before")
    @classmethod
    def scalars_as_text(cls, v: Any) -> Any:
        if isinstance(v, bool):
            return str(v).lower()
        if isinstance(v, (int, float, Decimal)):
            return str(v)
        return v

    @field_validator("name")
    @classmethod
    def name_must_be_long_enough(cls, v: str | None) -> str:
        if v is None or not v.strip():
            raise PydanticCustomError("name_required", "Name is required")
        if len(v.strip()) < NAME_MIN_LENGTH:
            raise PydanticCustomError(
                "name_too_short",
                "Name must be at least {min_length} characters",
                {"min_length": NAME_MIN_LENGTH},
            )
        if len(v) > NAME_MAX_LENGTH:
            raise PydanticCustomError(
                "name_too_long",
                "Name must be at most {max_length} characters",
                {"max_length": NAME_MAX_LENGTH},
            )
        return v

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Decimal | None) -> Decimal:
        if v is None:
            raise PydanticCustomError("price_required", "Price is required")
        if v < MIN_PRICE:
            raise PydanticCustomError(
                "price_too_low", "Price must be greater than 0"
            )
        if v >= MAX_PRICE or quantize_price(v) >= MAX_PRICE:
            raise PydanticCustomError(
                "price_too_high",
                "Price must be less than {max_price}",
                {"max_price": f"{MAX_PRICE:f}"},
            )
        return v
