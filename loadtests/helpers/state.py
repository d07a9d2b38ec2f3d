"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state. State tracks the
products and orders returned by creation endpoints so follow-up
operations can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class CheckoutState:
    """Tracks state for a single simulated checkout."""

    product: dict | None = None
    order_number: str | None = None
    status: str | None = None
    email_sent: bool = False


@dataclass
class ShopperState:
    """Tracks the catalogue and order history seen by a browsing shopper."""

    products: list[dict] = field(default_factory=list)
    order_numbers: list[str] = field(default_factory=list)
