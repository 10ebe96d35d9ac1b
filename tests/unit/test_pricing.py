"""
Unit tests for checkout line pricing.
"""

from decimal import Decimal

import pytest

from app.models import DiscountTier, Product
from app.services.pricing_service import (
    LinePrice, discounted_unit_price, price_line, sale_total
)


def _product(pid, price, discount):
    return Product(id=pid, name=f'Product {pid}', price=Decimal(price), discount=discount, stock_quantity=100)


class TestDiscountedUnitPrice:
    """Tests for applying a discount tier to a unit price."""

    def test_five_percent_is_exact_to_four_decimals(self):
        """Test 5% off 44.37 keeps every digit."""
        assert discounted_unit_price(Decimal('44.37'), DiscountTier.FIVE_PERCENT) == Decimal('42.1515')

    def test_no_discount_keeps_price(self):
        """Test the NONE tier leaves the price untouched."""
        assert discounted_unit_price(Decimal('49.99'), DiscountTier.NONE) == Decimal('49.99')

    def test_fifty_percent(self):
        """Test the largest tier halves the price."""
        assert discounted_unit_price(Decimal('24.99'), DiscountTier.FIFTY_PERCENT) == Decimal('12.495')

    @pytest.mark.parametrize('tier', list(DiscountTier))
    def test_never_above_unit_price(self, tier):
        """Test no tier can raise the price."""
        assert discounted_unit_price(Decimal('66.99'), tier) <= Decimal('66.99')


class TestPriceLine:
    """Tests for pricing a single cart line."""

    def test_first_example_line(self):
        """Test 10 x 44.37 at 5% off."""
        line = price_line(_product(1, '44.37', DiscountTier.FIVE_PERCENT), 10)

        assert line.unit_price == Decimal('44.37')
        assert line.discounted_unit_price == Decimal('42.1515')
        assert line.gross_price == Decimal('443.70')
        assert line.final_price == Decimal('421.52')

    def test_second_example_line(self):
        """Test 20 x 66.99 at 15% off."""
        line = price_line(_product(2, '66.99', DiscountTier.FIFTEEN_PERCENT), 20)

        assert line.discounted_unit_price == Decimal('56.9415')
        assert line.gross_price == Decimal('1339.80')
        assert line.final_price == Decimal('1138.83')

    def test_final_price_rounds_half_up(self):
        """Test 1 x 12.495 rounds up to 12.50."""
        line = price_line(_product(3, '24.99', DiscountTier.FIFTY_PERCENT), 1)
        assert line.final_price == Decimal('12.50')

    def test_line_keeps_product_and_quantity(self):
        """Test the breakdown records what was priced."""
        line = price_line(_product(7, '10.00', DiscountTier.NONE), 3)

        assert line.product_id == 7
        assert line.quantity == 3
        assert line.final_price == line.gross_price == Decimal('30.00')


class TestSaleTotal:
    """Tests for the sale total."""

    def test_total_is_sum_of_final_prices(self):
        """Test the two example lines add up to 1560.35."""
        lines = [
            price_line(_product(1, '44.37', DiscountTier.FIVE_PERCENT), 10),
            price_line(_product(2, '66.99', DiscountTier.FIFTEEN_PERCENT), 20),
        ]
        assert sale_total(lines) == Decimal('1560.35')

    def test_empty_total_is_zero(self):
        """Test no lines total zero."""
        assert sale_total([]) == Decimal('0.00')

    def test_total_is_decimal(self):
        """Test no float sneaks into the total."""
        line = LinePrice(1, 1, Decimal('0.10'), Decimal('0.10'), Decimal('0.10'), Decimal('0.10'))
        total = sale_total([line, line, line])

        assert isinstance(total, Decimal)
        assert total == Decimal('0.30')
