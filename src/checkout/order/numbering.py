"""Order number generation.

Numbers are ``ORD-`` followed by 16 uppercase hex digits from a random
UUID. Uniqueness is also checked against storage before an order is saved.
"""

from uuid import uuid4

ORDER_NUMBER_PREFIX = "ORD-"


def generate_order_number() -> str:
    return f"{ORDER_NUMBER_PREFIX}{uuid4().hex[:16].upper()}"
