"""Application tests for order placement through the PlaceOrder command."""

import pytest
from checkout.catalogue.product import Product
from checkout.order import numbering
from checkout.order.order import Order
from checkout.order.placement import MAX_ORDER_NUMBER_ATTEMPTS, place_order
from checkout.order.repository import OrderRepository
from checkout.shared.exceptions import (
    ExpiredError,
    FormatError,
    InsufficientInventoryError,
    PersistenceError,
    ProductNotFoundError,
)
from protean import current_domain
from protean.exceptions import ValidationError


def _stock(product):
    return current_domain.repository_for(Product).get(product.id).inventory


def _order_count():
    return len(current_domain.repository_for(Order).list_newest_first())


class TestPaymentOutcomes:
    def test_code_111_approves_and_decrements(self, make_product, line_item, customer_info, payment_info):
        product = make_product(inventory=10)

        order = place_order([line_item(product, quantity=2)], customer_info, payment_info("111"))

        assert order.status == "approved"
        assert order.transaction_id.startswith("TXN-")
        assert order.notes is None
        assert _stock(product) == 8

    def test_code_222_declines_without_touching_stock(self, make_product, line_item, customer_info, payment_info):
        product = make_product(inventory=10)

        order = place_order([line_item(product, quantity=2)], customer_info, payment_info("222"))

        assert order.status == "declined"
        assert order.transaction_id is None
        assert order.notes == "Card declined by issuer"
        assert _stock(product) == 10

    def test_code_333_fails_without_touching_stock(self, make_product, line_item, customer_info, payment_info):
        product = make_product(inventory=10)

        order = place_order([line_item(product, quantity=2)], customer_info, payment_info("333"))

        assert order.status == "failed"
        assert order.transaction_id is None
        assert order.notes == "Gateway timeout error"
        assert _stock(product) == 10

    @pytest.mark.parametrize("code", ["000", "123", "999", "444"])
    def test_other_codes_behave_like_111(self, make_product, line_item, customer_info, payment_info, code):
        product = make_product(inventory=3)

        order = place_order([line_item(product)], customer_info, payment_info(code))

        assert order.status == "approved"
        assert order.transaction_id is not None
        assert _stock(product) == 2


class TestStoredOrder:
    def test_snapshot_uses_catalogue_price_and_name(self, make_product, line_item, customer_info, payment_info):
        product = make_product(name="Sneaker", price=20.0)

        order = place_order(
            [line_item(product, quantity=3, product_name="Client Name")],
            customer_info,
            payment_info(),
        )

        item = order.items[0]
        assert item.product_name == "Sneaker"
        assert item.unit_price == 20.0
        assert item.subtotal == 60.0
        assert item.variant_list == [{"name": "color", "value": "Black"}]

    def test_totals(self, make_product, line_item, customer_info, payment_info):
        product = make_product(price=20.0)

        order = place_order([line_item(product, quantity=2)], customer_info, payment_info())

        assert order.pricing.subtotal == 40.0
        assert order.pricing.shipping_cost == 9.99
        assert order.pricing.tax_total == 3.2
        assert order.pricing.grand_total == 53.19

    def test_image_falls_back_to_product_image(self, make_product, line_item, customer_info, payment_info):
        product = make_product(image="https://cdn.example.com/default.jpg")

        order = place_order([line_item(product)], customer_info, payment_info())

        assert order.items[0].image == "https://cdn.example.com/default.jpg"

    def test_variant_image_is_kept(self, make_product, line_item, customer_info, payment_info):
        product = make_product()

        order = place_order(
            [line_item(product, image="https://cdn.example.com/red.jpg")], customer_info, payment_info()
        )

        assert order.items[0].image == "https://cdn.example.com/red.jpg"

    def test_card_is_masked_and_email_lowercased(self, make_product, line_item, customer_info, payment_info):
        product = make_product()

        order = place_order([line_item(product)], customer_info, payment_info())

        assert order.payment_info.card_number == "************1234"
        assert order.customer_info.email == "jane.doe@example.com"
        assert order.email_sent is False


class TestRejectedSubmissions:
    def test_bad_card_creates_nothing(self, make_product, line_item, customer_info, payment_info):
        product = make_product(inventory=5)

        with pytest.raises(FormatError):
            place_order([line_item(product)], customer_info, payment_info(card_number="1234-5678-9012-345"))

        assert _order_count() == 0
        assert _stock(product) == 5

    def test_expired_card(self, make_product, line_item, customer_info, payment_info):
        product = make_product()

        with pytest.raises(ExpiredError):
            place_order([line_item(product)], customer_info, payment_info(expiry_date="01/20"))

        assert _order_count() == 0

    def test_invalid_contact(self, make_product, line_item, customer_info, payment_info):
        product = make_product()
        customer_info["zip_code"] = "1234"

        with pytest.raises(ValidationError) as exc:
            place_order([line_item(product)], customer_info, payment_info())

        assert "zip_code" in exc.value.messages
        assert _order_count() == 0

    def test_missing_product(self, customer_info, payment_info):
        item = {"product_id": "does-not-exist", "product_name": "Ghost", "quantity": 1}

        with pytest.raises(ProductNotFoundError) as exc:
            place_order([item], customer_info, payment_info())

        assert exc.value.messages == {"product_id": ["Product Ghost not found"]}
        assert _order_count() == 0

    def test_inactive_product(self, make_product, line_item, customer_info, payment_info):
        product = make_product(is_active=False)

        with pytest.raises(ProductNotFoundError):
            place_order([line_item(product)], customer_info, payment_info())

    def test_insufficient_inventory(self, make_product, line_item, customer_info, payment_info):
        product = make_product(name="Sneaker", inventory=1)

        with pytest.raises(InsufficientInventoryError) as exc:
            place_order([line_item(product, quantity=2)], customer_info, payment_info())

        assert exc.value.messages == {"inventory": ["Insufficient inventory for Sneaker"]}
        assert _stock(product) == 1
        assert _order_count() == 0

    def test_repeated_product_lines_are_checked_together(
        self, make_product, line_item, customer_info, payment_info
    ):
        product = make_product(inventory=3)

        with pytest.raises(InsufficientInventoryError):
            place_order(
                [line_item(product, quantity=2), line_item(product, quantity=2)],
                customer_info,
                payment_info(),
            )

        assert _stock(product) == 3

    def test_declined_order_still_requires_stock(self, make_product, line_item, customer_info, payment_info):
        product = make_product(inventory=0)

        with pytest.raises(InsufficientInventoryError):
            place_order([line_item(product)], customer_info, payment_info("222"))


class TestOrderNumbers:
    def test_collision_is_retried(self, make_product, line_item, customer_info, payment_info, monkeypatch):
        product = make_product()
        first = place_order([line_item(product)], customer_info, payment_info())

        candidates = iter([first.order_number, "ORD-FEEDFACECAFEBEEF"])
        monkeypatch.setattr(numbering, "generate_order_number", lambda: next(candidates))

        second = place_order([line_item(product)], customer_info, payment_info())

        assert second.order_number == "ORD-FEEDFACECAFEBEEF"

    def test_exhausted_retries_raise_persistence_error(
        self, make_product, line_item, customer_info, payment_info, monkeypatch
    ):
        product = make_product(inventory=5)
        first = place_order([line_item(product)], customer_info, payment_info())
        monkeypatch.setattr(numbering, "generate_order_number", lambda: first.order_number)

        with pytest.raises(PersistenceError):
            place_order([line_item(product)], customer_info, payment_info())

        assert _order_count() == 1
        assert _stock(product) == 4

    def test_storage_clash_is_retried_with_new_number(
        self, make_product, line_item, customer_info, payment_info, monkeypatch
    ):
        # Another order took the number between the availability check and the save
        product = make_product(inventory=5)
        first = place_order([line_item(product)], customer_info, payment_info())

        candidates = iter([first.order_number, "ORD-0DDBA11C0FFEE000"])
        monkeypatch.setattr(numbering, "generate_order_number", lambda: next(candidates))
        monkeypatch.setattr(OrderRepository, "order_number_taken", lambda self, order_number: False)

        second = place_order([line_item(product)], customer_info, payment_info())

        assert second.order_number == "ORD-0DDBA11C0FFEE000"
        assert _order_count() == 2
        assert _stock(product) == 3

    def test_storage_clash_on_every_attempt_raises_persistence_error(
        self, make_product, line_item, customer_info, payment_info, monkeypatch
    ):
        product = make_product(inventory=5)
        first = place_order([line_item(product)], customer_info, payment_info())

        attempts = []

        def _same_number():
            attempts.append(first.order_number)
            return first.order_number

        monkeypatch.setattr(numbering, "generate_order_number", _same_number)
        monkeypatch.setattr(OrderRepository, "order_number_taken", lambda self, order_number: False)

        with pytest.raises(PersistenceError):
            place_order([line_item(product)], customer_info, payment_info())

        assert len(attempts) == MAX_ORDER_NUMBER_ATTEMPTS
        assert _order_count() == 1
        assert _stock(product) == 4
