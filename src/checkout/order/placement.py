"""Order placement: command, handler and the locking entry point.

The handler runs the whole pipeline inside one unit of work:

1. validate items, customer and payment details (nothing touched yet)
2. check stock and snapshot name/price for each line item
3. price the order
4. allocate a fresh, unused order number
5. run the payment gateway and store the order with its outcome
6. decrement stock, only for approved orders

Any exception before the unit of work commits leaves no order and no stock
change behind. Declined and failed payments are not exceptions: the order
is stored with that status.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Text
from protean.utils.globals import current_domain

from checkout.domain import checkout
from checkout.inventory.ledger import inventory_ledger
from checkout.order import numbering
from checkout.order.order import Order, OrderStatus
from checkout.order.pricing import compute_totals, line_subtotal
from checkout.order.validation import (
    mask_card_number,
    validate_customer_info,
    validate_items,
    validate_payment_info,
)
from checkout.payment import get_gateway
from checkout.shared.exceptions import PersistenceError
from checkout.utils.logging import order_log_context

logger = structlog.get_logger(__name__)

MAX_ORDER_NUMBER_ATTEMPTS = 5


@checkout.command(part_of="Order")
class PlaceOrder:
    items = Text(required=True)  # JSON: list of line item dicts
    customer_info = Text(required=True)  # JSON: contact dict
    payment_info = Text(required=True)  # JSON: card dict


def _loads(value):
    return json.loads(value) if isinstance(value, str) else value


@checkout.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items = _loads(command.items)
        payment_info = _loads(command.payment_info)

        validate_items(items)
        customer_info = validate_customer_info(_loads(command.customer_info))
        validate_payment_info(payment_info)

        line_items, quantities = self._snapshot_line_items(items)
        totals = compute_totals(line_items)

        repo = current_domain.repository_for(Order)
        order_number = self._unused_order_number(repo)

        with order_log_context(order_number):
            result = get_gateway().charge(float(totals.total), payment_info["cvv"])
            order = Order.create(
                order_number=order_number,
                line_items=line_items,
                customer_info=customer_info,
                payment_info={
                    "card_number": mask_card_number(payment_info["card_number"]),
                    "expiry_date": payment_info["expiry_date"].strip(),
                    "simulation_code": payment_info["cvv"],
                },
                pricing={
                    "subtotal": float(totals.subtotal),
                    "shipping_cost": float(totals.shipping),
                    "tax_total": float(totals.tax),
                    "grand_total": float(totals.total),
                },
            )
            order.record_payment(result)
            repo.add(order)

            if order.status == OrderStatus.APPROVED.value:
                for product_id, quantity in quantities.items():
                    inventory_ledger.commit(product_id, quantity)

            logger.info("Order placed", status=order.status, total=order.pricing.grand_total)
        return order.order_number

    @staticmethod
    def _snapshot_line_items(items: list[dict]) -> tuple[list[dict], dict[str, int]]:
        """Copy product name/price onto each line and total the stock needed per product."""
        line_items = []
        quantities: dict[str, int] = {}
        for item in items:
            product_id = str(item["product_id"])
            quantity = item["quantity"]
            needed = quantities.get(product_id, 0) + quantity
            product = inventory_ledger.reserve(product_id, needed, product_name=item.get("product_name"))
            quantities[product_id] = needed

            line_items.append(
                {
                    "product_id": product_id,
                    "product_name": product.name,
                    "unit_price": product.price,
                    "quantity": quantity,
                    "selected_variants": json.dumps(item.get("selected_variants") or []),
                    "image": item.get("image") or product.image,
                    "subtotal": float(line_subtotal(product.price, quantity)),
                }
            )
        return line_items, quantities

    @staticmethod
    def _unused_order_number(repo) -> str:
        for attempt in range(1, MAX_ORDER_NUMBER_ATTEMPTS + 1):
            order_number = numbering.generate_order_number()
            if not repo.order_number_taken(order_number):
                return order_number
            logger.warning("Order number collision, retrying", order_number=order_number, attempt=attempt)
        raise PersistenceError("Could not allocate a unique order number")


def _is_order_number_clash(exc: ValidationError) -> bool:
    return isinstance(exc.messages, dict) and "order_number" in exc.messages


def place_order(items: list[dict], customer_info: dict, payment_info: dict) -> Order:
    """Submit an order and return it as stored.

    Holds the ledger lock of every product involved until the order and its
    stock decrement have been committed. If storage rejects the order number
    as a duplicate, the unit of work has rolled back and the whole command is
    processed again with a fresh number.
    """
    product_ids = [item["product_id"] for item in items if item.get("product_id")]
    command = PlaceOrder(
        items=json.dumps(items),
        customer_info=json.dumps(customer_info),
        payment_info=json.dumps(payment_info),
    )

    with inventory_ledger.hold(product_ids):
        for attempt in range(1, MAX_ORDER_NUMBER_ATTEMPTS + 1):
            try:
                order_number = current_domain.process(command, asynchronous=False)
                break
            except ValidationError as exc:
                if not _is_order_number_clash(exc):
                    raise
                logger.warning("Order number rejected by storage, retrying", attempt=attempt)
        else:
            raise PersistenceError("Could not allocate a unique order number")

    return current_domain.repository_for(Order).get_by_order_number(order_number)
