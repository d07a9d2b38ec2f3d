"""Manual stock decrement, exposed as ``PATCH /products/inventory``."""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from checkout.catalogue.product import Product
from checkout.domain import checkout
from checkout.inventory.ledger import inventory_ledger


@checkout.command(part_of="Product")
class DecrementStock:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@checkout.command_handler(part_of=Product)
class DecrementStockHandler:
    @handle(DecrementStock)
    def decrement_stock(self, command):
        product = inventory_ledger.commit(command.product_id, command.quantity)
        return product.inventory


def decrement_stock(product_id: str, quantity: int) -> Product:
    """Apply a conditional decrement under the product's ledger lock."""
    with inventory_ledger.hold([product_id]):
        current_domain.process(
            DecrementStock(product_id=product_id, quantity=quantity),
            asynchronous=False,
        )
    return current_domain.repository_for(Product).get(product_id)
