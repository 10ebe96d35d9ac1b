"""
Pricing service for checkout line items.

Pure functions only: no session access and no mutation. All arithmetic is
done with Decimal; nothing here ever touches a float.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from app.models import DiscountTier, Product

CENT = Decimal('0.01')
HUNDRED = Decimal('100')


@dataclass(frozen=True)
class LinePrice:
    """
    Frozen price breakdown for one cart line.

    unit_price and gross_price are in cents; discounted_unit_price keeps
    four decimals; final_price is rounded half-up to the cent.
    """
    product_id: int
    quantity: int
    unit_price: Decimal
    discounted_unit_price: Decimal
    gross_price: Decimal
    final_price: Decimal


def _to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() first so floats coming from a driver keep their printed digits
    return Decimal(str(value))


def discounted_unit_price(unit_price, discount: DiscountTier) -> Decimal:
    """
    Apply a discount tier to a unit price.

    Example:
        discounted_unit_price(Decimal('44.37'), DiscountTier.FIVE_PERCENT)
        -> Decimal('42.1515')
    """
    price = _to_decimal(unit_price)
    percent = Decimal(discount.percent if discount is not None else 0)
    return price - (percent / HUNDRED) * price


def price_line(product: Product, quantity: int) -> LinePrice:
    """
    Price `quantity` units of `product` at its current price and discount.

    Args:
        product: Product whose price/discount are snapshotted
        quantity: Positive number of units

    Returns:
        LinePrice
    """
    unit_price = _to_decimal(product.price).quantize(CENT, rounding=ROUND_HALF_UP)
    discounted = discounted_unit_price(unit_price, product.discount)
    qty = Decimal(quantity)

    return LinePrice(
        product_id=product.id,
        quantity=quantity,
        unit_price=unit_price,
        discounted_unit_price=discounted,
        gross_price=(qty * unit_price).quantize(CENT, rounding=ROUND_HALF_UP),
        final_price=(qty * discounted).quantize(CENT, rounding=ROUND_HALF_UP),
    )


def sale_total(lines: Iterable[LinePrice]) -> Decimal:
    """Sum of the lines' final prices."""
    total = sum((line.final_price for line in lines), Decimal('0.00'))
    return total.quantize(CENT)
