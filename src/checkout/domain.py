"""Checkout bounded context: catalogue reads, order submission and notification.

Handles the order-submission pipeline: input validation, deterministic
payment simulation, inventory accounting, order persistence and
status-driven customer notification.
"""

from protean.domain import Domain

from checkout.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
checkout = Domain(name="checkout")
