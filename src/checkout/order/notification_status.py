"""Recording that the customer has been notified about an order."""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from checkout.domain import checkout
from checkout.order.order import Order


@checkout.command(part_of="Order")
class MarkOrderNotified:
    order_number = String(required=True, max_length=30)


@checkout.command_handler(part_of=Order)
class MarkOrderNotifiedHandler:
    @handle(MarkOrderNotified)
    def mark_notified(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_by_order_number(command.order_number)
        if order.mark_notified():
            repo.add(order)
        return order.order_number


def mark_notified(order_number: str) -> Order:
    """Set the notification flag. Safe to repeat; unknown numbers raise ObjectNotFoundError."""
    current_domain.process(MarkOrderNotified(order_number=order_number), asynchronous=False)
    return current_domain.repository_for(Order).get_by_order_number(order_number)
