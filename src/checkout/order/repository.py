"""Order lookups by the customer-facing order number."""

from protean.exceptions import ObjectNotFoundError

from checkout.domain import checkout
from checkout.order.order import Order

# Query results are paged, so a full listing asks for an explicit page size
LIST_LIMIT = 1000


@checkout.repository(part_of=Order)
class OrderRepository:
    def find_by_order_number(self, order_number: str) -> Order | None:
        results = self._dao.query.filter(order_number=order_number).all().items
        return results[0] if results else None

    def get_by_order_number(self, order_number: str) -> Order:
        order = self.find_by_order_number(order_number)
        if order is None:
            raise ObjectNotFoundError("Order not found")
        return order

    def order_number_taken(self, order_number: str) -> bool:
        return self.find_by_order_number(order_number) is not None

    def list_newest_first(self) -> list[Order]:
        orders = self._dao.query.limit(LIST_LIMIT).all().items
        return sorted(orders, key=lambda order: order.created_at, reverse=True)
