"""Order aggregate: the persisted record of one checkout submission.

State Machine:
    PENDING → APPROVED | DECLINED | FAILED

PENDING only exists between creation and the payment outcome being
recorded inside the same unit of work; every stored order is in one of the
three terminal states. After that the only permitted change is flipping
``email_sent`` once the customer has been notified.
"""

import json
import re
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from checkout.domain import checkout
from checkout.payment.port import PaymentResult


class OrderStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    DECLINED = "declined"
    FAILED = "failed"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.APPROVED, OrderStatus.DECLINED, OrderStatus.FAILED},
    OrderStatus.APPROVED: set(),  # Terminal
    OrderStatus.DECLINED: set(),  # Terminal
    OrderStatus.FAILED: set(),  # Terminal
}

_MASKED_CARD = re.compile(r"^\*{12}\d{4}$")


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@checkout.value_object(part_of="Order")
class CustomerInfo:
    """Contact and shipping details captured with the order."""

    full_name: String(required=True, max_length=255)
    email: String(required=True, max_length=254)
    phone: String(required=True, max_length=30)
    address: String(required=True, max_length=255)
    city: String(required=True, max_length=100)
    state: String(required=True, max_length=100)
    zip_code: String(required=True, max_length=10)


@checkout.value_object(part_of="Order")
class PaymentInfo:
    """Payment details as stored: the card number is always masked.

    The simulation code is kept only so the simulated decision can be
    replayed. It is never returned by the API.
    """

    card_number: String(required=True, max_length=16)
    expiry_date: String(required=True, max_length=5)
    simulation_code: String(max_length=3)

    @invariant.post
    def card_number_must_be_masked(self):
        if not _MASKED_CARD.match(self.card_number or ""):
            raise ValidationError({"card_number": ["Card number must be masked before storage"]})


@checkout.value_object(part_of="Order")
class OrderPricing:
    """Totals locked at submission time. Never recomputed afterwards."""

    subtotal: Float(default=0.0)
    shipping_cost: Float(default=0.0)
    tax_total: Float(default=0.0)
    grand_total: Float(default=0.0)
    currency: String(max_length=3, default="USD")

    @invariant.post
    def grand_total_is_sum_of_parts(self):
        expected = round(self.subtotal + self.shipping_cost + self.tax_total, 2)
        if abs(expected - self.grand_total) > 0.001:
            raise ValidationError({"grand_total": ["Grand total must equal subtotal + shipping + tax"]})


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@checkout.entity(part_of="Order")
class OrderLineItem:
    """A product snapshot: name and price are copied at order time."""

    product_id: Identifier(required=True)
    product_name: String(required=True, max_length=255)
    unit_price: Float(required=True, min_value=0.0)
    quantity: Integer(required=True, min_value=1)
    selected_variants: Text()  # JSON: list of {name, value}
    image: String(max_length=1000)
    subtotal: Float(required=True, min_value=0.0)

    @property
    def variant_list(self) -> list[dict]:
        return json.loads(self.selected_variants) if self.selected_variants else []


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@checkout.aggregate
class Order:
    order_number: String(required=True, max_length=30, unique=True)
    items: HasMany(OrderLineItem)
    customer_info: ValueObject(CustomerInfo)
    payment_info: ValueObject(PaymentInfo)
    pricing: ValueObject(OrderPricing)
    status: String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    transaction_id: String(max_length=50)
    notes: Text()
    email_sent: Boolean(default=False)
    created_at: DateTime(default=lambda: datetime.now(UTC))
    updated_at: DateTime(default=lambda: datetime.now(UTC))

    @invariant.post
    def transaction_id_only_when_approved(self):
        approved = self.status == OrderStatus.APPROVED.value
        if approved and not self.transaction_id:
            raise ValidationError({"transaction_id": ["Approved orders must carry a transaction id"]})
        if not approved and self.transaction_id:
            raise ValidationError({"transaction_id": ["Only approved orders carry a transaction id"]})

    @classmethod
    def create(cls, order_number, line_items, customer_info, payment_info, pricing):
        now = datetime.now(UTC)
        return cls(
            order_number=order_number,
            items=[OrderLineItem(**item) for item in line_items],
            customer_info=CustomerInfo(**customer_info),
            payment_info=PaymentInfo(**payment_info),
            pricing=OrderPricing(**pricing),
            created_at=now,
            updated_at=now,
        )

    def _assert_can_transition(self, target: OrderStatus) -> None:
        current = OrderStatus(self.status)
        if target not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target.value}"]})

    def record_payment(self, result: PaymentResult) -> None:
        """Settle the order on the payment outcome. Happens exactly once."""
        from checkout.order.events import OrderPlaced

        target = OrderStatus(result.status.value)
        self._assert_can_transition(target)

        with atomic_change(self):
            self.status = target.value
            self.transaction_id = result.transaction_id if result.approved else None
            self.notes = result.error_message
            self.updated_at = datetime.now(UTC)

        self.raise_(
            OrderPlaced(
                order_id=self.id,
                order_number=self.order_number,
                status=self.status,
                transaction_id=self.transaction_id,
                grand_total=self.pricing.grand_total,
                item_count=len(self.items),
                created_at=self.created_at,
            )
        )

    def mark_notified(self) -> bool:
        """Flip the notification flag. Returns False if it was already set."""
        from checkout.order.events import CustomerNotified

        if self.email_sent:
            return False

        self.email_sent = True
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CustomerNotified(
                order_id=self.id,
                order_number=self.order_number,
                notified_at=self.updated_at,
            )
        )
        return True
