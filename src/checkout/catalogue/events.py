"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from checkout.domain import checkout


@checkout.event(part_of="Product")
class ProductCreated:
    """A product was added to the catalogue."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    inventory = Integer(required=True)
    created_at = DateTime(required=True)


@checkout.event(part_of="Product")
class StockDecremented:
    """Stock was committed against an approved order or a manual adjustment."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_inventory = Integer(required=True)
    new_inventory = Integer(required=True)
