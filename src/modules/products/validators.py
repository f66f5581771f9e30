"""Price parsing and product field validation.

Neither function raises for bad input: ``parse_price`` returns a
``PriceParseFailure`` and ``validate_product`` returns a
``ValidationResult``; the service decides what to do with them.

A blank price is *absent* (later reported as "Price is required"), while a
non-blank price that is not a number is *malformed*.  The two are kept
apart on purpose.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import ValidationError

from modules.products.dtos import ProductData, ProductInput

# Plain decimal literal: optional sign, digits with an optional fraction,
# optional exponent. No digit-group underscores, no non-ASCII digits.
_DECIMAL_RE = re.compile(
    r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?", re.ASCII
)


@dataclass(frozen=True)
class PriceParseFailure:
    """A price that is present but is not a finite decimal number."""

    raw: str


@dataclass(frozen=True)
class ValidationResult:
    data: ProductData | None = None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return self.data is not None and not self.errors


def parse_price(raw: Any) -> Decimal | None | PriceParseFailure:
    """Convert a submitted price into an exact ``Decimal``.

    ``None`` and blank strings are absent (``None``).  Integers and
    ``Decimal`` values pass through; floats go through their shortest
    ``repr`` so ``999.99`` stays ``999.99``.
    """
    if raw is None:
        return None
    if isinstance(raw, bool):
        return PriceParseFailure(str(raw).lower())

    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        if not _DECIMAL_RE.fullmatch(text):
            return PriceParseFailure(raw)
        try:
            value = Decimal(text)
        except InvalidOperation:
            return PriceParseFailure(raw)
    elif isinstance(raw, Decimal):
        value = raw
    elif isinstance(raw, int):
        value = Decimal(raw)
    elif isinstance(raw, float):
        value = Decimal(repr(raw))
    else:
        return PriceParseFailure(str(raw))

    if not value.is_finite():
        return PriceParseFailure(str(raw))
    return value


def validate_product(
    product_input: ProductInput, price: Decimal | None
) -> ValidationResult:
    """Check every field rule and collect one message per failing field.

    ``price`` is the successful output of :func:`parse_price` for
    ``product_input.price``.
    """
    try:
        data = ProductData(
            name=product_input.name,
            description=product_input.description,
            price=price,
        )
    except ValidationError as exc:
        errors: dict[str, str] = {}
        for error in exc.errors():
            loc = error["loc"][0] if error["loc"] else "__all__"
            errors.setdefault(str(loc), error["msg"])
        return ValidationResult(errors=errors)
    return ValidationResult(data=data)
