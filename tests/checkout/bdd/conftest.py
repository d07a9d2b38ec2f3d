"""Shared BDD fixtures and step definitions for checkout."""

import pytest
from checkout.catalogue.product import Product
from checkout.order.placement import place_order
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then, when


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(
    parsers.cfparse('a product "{name}" priced at {price:f} with {stock:d} units in stock'),
    target_fixture="product",
)
def product_in_stock(make_product, name, price, stock):
    return make_product(name=name, price=price, inventory=stock)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(
    parsers.re(r'the buyer orders (?P<quantity>\d+) units? paying with code "(?P<code>\d{3})"'),
    target_fixture="order",
)
def buyer_orders(product, line_item, customer_info, payment_info, error, quantity, code):
    try:
        return place_order([line_item(product, quantity=int(quantity))], customer_info, payment_info(code))
    except ValidationError as exc:
        error["exc"] = exc
        return None


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(order, status):
    assert order.status == status


@then(parsers.re(r"the order (?P<has_txn>has a|has no) transaction id"))
def order_transaction_id(order, has_txn):
    if has_txn == "has a":
        assert order.transaction_id.startswith("TXN-")
    else:
        assert order.transaction_id is None


@then(parsers.cfparse('the order notes read "{notes}"'))
def order_notes(order, notes):
    assert order.notes == notes


@then(parsers.cfparse("the product has {stock:d} units in stock"))
def product_stock(product, stock):
    assert current_domain.repository_for(Product).get(product.id).inventory == stock


@then(parsers.cfparse('the submission is rejected with "{message}"'))
def submission_rejected(order, error, message):
    assert order is None
    assert error["exc"] is not None
    assert message in [m for messages in error["exc"].messages.values() for m in messages]


@then(parsers.cfparse("the order subtotal is {amount:f}"))
def order_subtotal(order, amount):
    assert order.pricing.subtotal == pytest.approx(amount)


@then(parsers.cfparse("the order shipping is {amount:f}"))
def order_shipping(order, amount):
    assert order.pricing.shipping_cost == pytest.approx(amount)


@then(parsers.cfparse("the order tax is {amount:f}"))
def order_tax(order, amount):
    assert order.pricing.tax_total == pytest.approx(amount)


@then(parsers.cfparse("the order total is {amount:f}"))
def order_total(order, amount):
    assert order.pricing.grand_total == pytest.approx(amount)
