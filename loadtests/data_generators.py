"""Faker-based data generators for Locust load test scenarios.

Each generator produces camelCase payloads that pass the checkout
validation rules (16-digit card numbers, MM/YY expiry in the future, 10-15
digit phones, 5 or 9 digit ZIP codes).
"""

import random
import uuid
from datetime import date

from faker import Faker

fake = Faker("en_US")

# Well-known 16-digit test cards
TEST_CARDS = [
    "4111 1111 1111 1111",
    "5555 5555 5555 4444",
    "6011 1111 1111 1117",
]

APPROVED_CODE = "111"
DECLINED_CODE = "222"
FAILED_CODE = "333"


# ---------- Customer ----------


def valid_phone() -> str:
    """Generate phones with exactly 10 digits once separators are stripped."""
    area = random.randint(200, 999)
    prefix = random.randint(200, 999)
    line = random.randint(1000, 9999)
    return f"({area}) {prefix}-{line}"


def customer_info() -> dict:
    """Generate a customerInfo payload."""
    return {
        "fullName": fake.name()[:100],
        "email": f"{fake.user_name()[:20]}.{uuid.uuid4().hex[:4]}@{fake.free_email_domain()}",
        "phone": valid_phone(),
        "address": fake.street_address(),
        "city": fake.city(),
        "state": fake.state_abbr(),
        "zipCode": fake.zipcode(),
    }


# ---------- Payment ----------


def future_expiry() -> str:
    """Generate an MM/YY expiry one to five years ahead."""
    year = date.today().year + random.randint(1, 5)
    return f"{random.randint(1, 12):02d}/{year % 100:02d}"


def payment_info(code: str = APPROVED_CODE) -> dict:
    """Generate a paymentInfo payload whose CVV selects the simulated outcome."""
    return {
        "cardNumber": random.choice(TEST_CARDS),
        "expiryDate": future_expiry(),
        "cvv": code,
    }


def outcome_code() -> str:
    """Pick a simulation code with a mostly-approved mix."""
    return random.choices([APPROVED_CODE, DECLINED_CODE, FAILED_CODE], weights=[80, 15, 5])[0]


# ---------- Catalogue ----------


def product_data(inventory: int = 10_000) -> dict:
    """Generate a CreateProductRequest payload with a deep stock level."""
    word = fake.word().capitalize()
    return {
        "name": f"{word} {fake.color_name()} Sneaker",
        "description": fake.sentence(nb_words=12),
        "price": round(random.uniform(5.0, 150.0), 2),
        "image": f"https://images.example.com/{uuid.uuid4().hex[:12]}.jpg",
        "inventory": inventory,
        "variants": [
            {
                "name": "size",
                "value": "Size",
                "options": [{"label": str(size), "value": str(size)} for size in range(7, 12)],
            }
        ],
    }


# ---------- Order ----------


def order_data(product: dict, quantity: int | None = None, code: str | None = None) -> dict:
    """Generate a PlaceOrderRequest payload for one catalogue product."""
    selected = []
    for group in product.get("variants", []):
        if group["options"]:
            selected.append({"name": group["name"], "value": random.choice(group["options"])["value"]})
    return {
        "items": [
            {
                "productId": product["id"],
                "productName": product["name"],
                "price": product["price"],
                "quantity": quantity or random.randint(1, 3),
                "selectedVariants": selected,
                "image": product.get("image"),
            }
        ],
        "customerInfo": customer_info(),
        "paymentInfo": payment_info(code or outcome_code()),
    }
