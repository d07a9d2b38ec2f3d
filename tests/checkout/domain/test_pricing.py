"""Tests for order totals."""

import random
from decimal import Decimal

import pytest
from checkout.order.pricing import compute_totals, line_subtotal, quantize


def _items(*pairs):
    return [{"unit_price": price, "quantity": quantity} for price, quantity in pairs]


class TestComputeTotals:
    def test_free_shipping_at_seventy_five(self):
        totals = compute_totals(_items((75.0, 1)))
        assert totals.subtotal == Decimal("75.00")
        assert totals.shipping == Decimal("0.00")
        assert totals.tax == Decimal("6.00")
        assert totals.total == Decimal("81.00")

    def test_flat_shipping_below_threshold(self):
        totals = compute_totals(_items((49.99, 1)))
        assert totals.shipping == Decimal("9.99")
        assert totals.tax == Decimal("4.00")
        assert totals.total == Decimal("63.98")

    def test_threshold_is_inclusive(self):
        assert compute_totals(_items((25.0, 2))).shipping == Decimal("0.00")

    def test_multiple_lines_accumulate_before_rounding(self):
        # Three lines of 0.335 sum to 1.005, rounded once to 1.01
        totals = compute_totals(_items((0.335, 1), (0.335, 1), (0.335, 1)))
        assert totals.subtotal == Decimal("1.01")

    def test_float_prices_do_not_leak_binary_noise(self):
        totals = compute_totals(_items((0.1, 3)))
        assert totals.subtotal == Decimal("0.30")

    def test_reproducible_for_identical_items(self):
        items = _items((19.99, 3), (4.25, 7))
        assert compute_totals(items) == compute_totals(list(items))


class TestLineSubtotal:
    @pytest.mark.parametrize(
        "price, quantity, expected",
        [(75.0, 2, "150.00"), (19.99, 3, "59.97"), (0.0, 5, "0.00")],
    )
    def test_price_times_quantity(self, price, quantity, expected):
        assert line_subtotal(price, quantity) == Decimal(expected)


class TestTotalsProperties:
    """Randomized line-item combinations, seeded so failures reproduce."""

    @pytest.mark.parametrize("seed", range(20))
    def test_total_is_exact_sum_of_parts(self, seed):
        rng = random.Random(seed)
        for _ in range(25):
            items = _items(
                *[(round(rng.uniform(0, 120), 2), rng.randint(1, 5)) for _ in range(rng.randint(1, 4))]
            )
            totals = compute_totals(items)
            raw_subtotal = sum(Decimal(str(i["unit_price"])) * i["quantity"] for i in items)

            assert totals.total == totals.subtotal + totals.shipping + totals.tax
            assert totals.subtotal == quantize(raw_subtotal)
            assert totals.tax == quantize(raw_subtotal * Decimal("0.08"))
            expected_shipping = Decimal("0.00") if raw_subtotal >= Decimal("50") else Decimal("9.99")
            assert totals.shipping == expected_shipping
            assert totals.total == totals.total.quantize(Decimal("0.01"))
