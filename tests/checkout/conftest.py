import os
from datetime import date

import pytest


@pytest.fixture(scope="session")
def _checkout_domain(request):
    """Initialize the checkout domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from checkout.domain import checkout

    checkout.init()
    return checkout


@pytest.fixture(scope="session", autouse=True)
def setup_db(_checkout_domain):
    from checkout.utils.db import drop_db, setup_db

    setup_db(_checkout_domain)

    yield

    drop_db(_checkout_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_checkout_domain):
    """Push domain context before each test, cleanup after."""
    from checkout.notification.channel import reset_email_transport
    from checkout.payment import reset_gateway

    ctx = _checkout_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    reset_gateway()
    reset_email_transport()
    ctx.pop()


@pytest.fixture()
def checkout_domain(_checkout_domain):
    return _checkout_domain


def future_expiry(years: int = 5) -> str:
    return f"12/{(date.today().year + years) % 100:02d}"


@pytest.fixture()
def customer_info():
    return {
        "full_name": "Jane Doe",
        "email": "Jane.Doe@Example.com",
        "phone": "+1 555 123 4567",
        "address": "1 Main St",
        "city": "Springfield",
        "state": "IL",
        "zip_code": "62701",
    }


@pytest.fixture()
def payment_info():
    def _payment_info(cvv="111", **overrides):
        data = {
            "card_number": "4111 1111 1111 1234",
            "expiry_date": future_expiry(),
            "cvv": cvv,
        }
        data.update(overrides)
        return data

    return _payment_info


@pytest.fixture()
def make_product():
    """Factory fixture persisting a product and returning it."""
    from checkout.catalogue.product import Product
    from protean import current_domain

    def _make_product(**overrides):
        data = {
            "name": "Converse Chuck Taylor All Star II Hi",
            "description": "Classic high-top sneaker",
            "price": 75.0,
            "image": "https://cdn.example.com/chuck.jpg",
            "inventory": 10,
        }
        data.update(overrides)
        product = Product.create(**data)
        current_domain.repository_for(Product).add(product)
        return product

    return _make_product


@pytest.fixture()
def line_item():
    def _line_item(product, quantity=1, **overrides):
        data = {
            "product_id": str(product.id),
            "product_name": product.name,
            "quantity": quantity,
            "selected_variants": [{"name": "color", "value": "Black"}],
        }
        data.update(overrides)
        return data

    return _line_item
