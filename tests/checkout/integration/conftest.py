import pytest
from checkout.api import email_router, order_router, product_router, register_exception_handlers
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient


@pytest.fixture()
def app(checkout_domain):
    app = FastAPI()

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        with checkout_domain.domain_context():
            return await call_next(request)

    app.include_router(order_router)
    app.include_router(email_router)
    app.include_router(product_router)
    register_exception_handlers(app)
    return app


@pytest.fixture()
def client(app):
    return TestClient(app)


@pytest.fixture()
def order_payload(customer_info, payment_info):
    def _order_payload(product_id, quantity=1, cvv="111", **payment_overrides):
        payment = payment_info(cvv, **payment_overrides)
        return {
            "items": [
                {
                    "productId": product_id,
                    "productName": "Converse Chuck Taylor All Star II Hi",
                    "price": 1.0,
                    "quantity": quantity,
                    "selectedVariants": [{"name": "color", "value": "Black"}],
                    "image": None,
                }
            ],
            "customerInfo": {
                "fullName": customer_info["full_name"],
                "email": customer_info["email"],
                "phone": customer_info["phone"],
                "address": customer_info["address"],
                "city": customer_info["city"],
                "state": customer_info["state"],
                "zipCode": customer_info["zip_code"],
            },
            "paymentInfo": {
                "cardNumber": payment["card_number"],
                "expiryDate": payment["expiry_date"],
                "cvv": payment["cvv"],
            },
        }

    return _order_payload
