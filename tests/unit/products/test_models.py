"""Unit tests for the Product model.

Covers:
- Valid creation with all fields.
- Price scale (banker's rounding on save).
- Price >= 0.01 validation (application + DB constraint).
- Hard delete.
- __str__ representation.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from modules.products.models import Product, quantize_price

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Creation
# ---------------------------------------------------------------------------


class TestProductCreation:
    def test_create_product_with_valid_data(self):
        product = Product.objects.create(
            name="Laptop", description="16GB RAM", price=Decimal("999.99")
        )

        product.refresh_from_db()
        assert product.pk is not None
        assert product.name == "Laptop"
        assert product.description == "16GB RAM"
        assert product.price == Decimal("999.99")

    def test_created_at_set_on_create(self):
        product = Product.objects.create(name="Laptop", price=Decimal("1.00"))
        assert product.created_at is not None

    def test_description_is_optional(self):
        product = Product.objects.create(name="Laptop", price=Decimal("1.00"))
        product.refresh_from_db()
        assert product.description is None


# ---------------------------------------------------------------------------
# Price scale
# ---------------------------------------------------------------------------


class TestPriceScale:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("10", "10.00"),
            ("10.125", "10.12"),
            ("10.135", "10.14"),
            ("0.005", "0.00"),
            ("999.99", "999.99"),
        ],
    )
    def test_quantize_price_half_even(self, raw, expected):
        assert str(quantize_price(Decimal(raw))) == expected

    def test_save_quantizes_price(self):
        product = Product.objects.create(name="Laptop", price=Decimal("19.999"))
        assert product.price == Decimal("20.00")
        assert str(product.price) == "20.00"


# ---------------------------------------------------------------------------
# Price validation
# ---------------------------------------------------------------------------


class TestPriceValidation:
    def test_zero_price_raises_validation_error(self):
        with pytest.raises(ValidationError):
            Product(name="Laptop", price=Decimal("0.00")).full_clean()

    def test_minimum_valid_price(self):
        Product(name="Laptop", price=Decimal("0.01")).full_clean()

    def test_db_constraint_rejects_zero_price(self):
        with pytest.raises(IntegrityError), transaction.atomic():
            Product.objects.create(name="Laptop", price=Decimal("0.00"))


# ---------------------------------------------------------------------------
# Deletion
# ---------------------------------------------------------------------------


class TestDeletion:
    def test_delete_removes_row(self):
        product = Product.objects.create(name="Laptop", price=Decimal("1.00"))
        pk = product.pk

        product.delete()

        assert not Product.objects.filter(pk=pk).exists()


# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------


class TestStr:
    def test_str_representation(self):
        product = Product.objects.create(name="Laptop", price=Decimal("1.00"))
        assert str(product) == f"#{product.pk} - Laptop"
