"""Tests for price parsing."""
from decimal import Decimal

import pytest

from x402_sales.utils.price import parse_price


class TestParsePrice:

    @pytest.mark.parametrize("price, expected", [
        ("$0.001", Decimal("0.001")),
        ("$1", Decimal("1")),
        ("$ 2.50", Decimal("2.50")),
    ])
    def test_valid(self, price, expected):
        assert parse_price(price) == expected

    @pytest.mark.parametrize("price", ["1.00", "", None, 5])
    def test_missing_prefix(self, price):
        with pytest.raises(ValueError, match="must start with"):
            parse_price(price)

    @pytest.mark.parametrize("price", ["$abc", "$", "$NaN", "$Infinity"])
    def test_not_a_number(self, price):
        with pytest.raises(ValueError, match="valid number"):
            parse_price(price)

