"""Product model.

Business rules implemented:
- RN-PRO-001: ``name`` is required and at least 3 characters once trimmed
  (checked by the validator before a Product is ever built).
- RN-PRO-002: ``price`` is at least 0.01, stored with two decimal places.
- RN-PRO-003: ``created_at`` is written once, on insert.
- RN-PRO-004: deletion is physical (no soft delete).
"""

from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal

from django.core.validators import MinValueValidator
from django.db import models

MIN_PRICE = Decimal("0.01")
MAX_PRICE = Decimal("1E17")
PRICE_DECIMAL_PLACES = 2
PRICE_QUANTUM = Decimal(1).scaleb(-PRICE_DECIMAL_PLACES)
NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 255


def quantize_price(price: Decimal) -> Decimal:
    """Round a price to the stored scale (two places, banker's rounding)."""
    return price.quantize(PRICE_QUANTUM, rounding=ROUND_HALF_EVEN)


class Product(models.Model):
    """Product aggregate root.

    ``id`` and ``created_at`` are assigned by the store on insert and never
    change afterwards.
    """

    name = models.CharField(max_length=NAME_MAX_LENGTH)
    description = models.TextField(null=True, blank=True)
    price = models.DecimalField(
        max_digits=19,
        decimal_places=PRICE_DECIMAL_PLACES,
        validators=[MinValueValidator(MIN_PRICE)],
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "products"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=MIN_PRICE),
                name="products_price_min",
            ),
        ]

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args, **kwargs) -> None:
        # Match the column scale so the saved instance equals a fresh read.
        if isinstance(self.price, Decimal):
            self.price = quantize_price(self.price)
        super().save(*args, **kwargs)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"#{self.id} - {self.name}"
