"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from checkout.domain import checkout


@checkout.event(part_of="Order")
class OrderPlaced:
    """An order was stored with its final payment outcome."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    status = String(required=True)
    transaction_id = String()
    grand_total = Float(required=True)
    item_count = Integer(required=True)
    created_at = DateTime(required=True)


@checkout.event(part_of="Order")
class CustomerNotified:
    """The customer was emailed about the order outcome."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    notified_at = DateTime(required=True)
