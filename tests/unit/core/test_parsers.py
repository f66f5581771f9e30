"""Unit tests for DecimalJSONParser."""

from __future__ import annotations

import io
from decimal import Decimal

import pytest
from rest_framework.exceptions import ParseError

from modules.core.parsers import DecimalJSONParser

pytestmark = pytest.mark.unit


def _parse(text: str):
    return DecimalJSONParser().parse(io.BytesIO(text.encode("utf-8")))


class TestDecimalJSONParser:
    def test_floats_become_decimals(self):
        data = _parse('{"price": 999.99}')
        assert data["price"] == Decimal("999.99")
        assert isinstance(data["price"], Decimal)

    def test_exact_digits_preserved(self):
        assert str(_parse('{"price": 0.10}')["price"]) == "0.10"

    def test_integers_stay_integers(self):
        assert _parse('{"price": 10}')["price"] == 10

    def test_strings_untouched(self):
        assert _parse('{"price": "10.5"}')["price"] == "10.5"

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_literals_rejected(self, literal):
        with pytest.raises(ParseError):
            _parse(f'{{"price": {literal}}}')

    def test_malformed_json(self):
        with pytest.raises(ParseError, match="JSON parse error"):
            _parse("{")
