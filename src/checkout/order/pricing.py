"""Pricing engine: order totals from snapshotted line items.

Amounts accumulate as exact ``Decimal`` values and are rounded to cents only
on output, so the same line items always price identically.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")
FREE_SHIPPING_THRESHOLD = Decimal("50.00")
FLAT_SHIPPING = Decimal("9.99")
TAX_RATE = Decimal("0.08")


def to_decimal(value) -> Decimal:
    """Convert a float/int/str amount without binary float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def line_subtotal(unit_price, quantity: int) -> Decimal:
    return quantize(to_decimal(unit_price) * quantity)


@dataclass(frozen=True)
class PricingBreakdown:
    subtotal: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal


def compute_totals(line_items: list[dict]) -> PricingBreakdown:
    """Price a list of ``{"unit_price", "quantity"}`` mappings.

    Shipping is free at or above the threshold (judged on the unrounded
    subtotal), tax is a flat rate on the subtotal, and the total is the
    exact sum of the three rounded parts.
    """
    raw_subtotal = sum(
        (to_decimal(item["unit_price"]) * int(item["quantity"]) for item in line_items),
        Decimal("0"),
    )
    shipping = Decimal("0.00") if raw_subtotal >= FREE_SHIPPING_THRESHOLD else FLAT_SHIPPING
    subtotal = quantize(raw_subtotal)
    tax = quantize(raw_subtotal * TAX_RATE)
    return PricingBreakdown(
        subtotal=subtotal,
        shipping=shipping,
        tax=tax,
        total=subtotal + shipping + tax,
    )
