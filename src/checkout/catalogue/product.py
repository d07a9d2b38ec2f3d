"""Product aggregate root with its VariantGroup entity.

Products are managed by the catalogue endpoints; the order pipeline only
reads them and lowers their stock through ``decrement_inventory``.
"""

import json
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Integer, String, Text

from checkout.domain import checkout
from checkout.shared.exceptions import InsufficientInventoryError


@checkout.entity(part_of="Product")
class VariantGroup:
    """A named choice offered on a product, such as color or size.

    ``options`` holds a JSON list of ``{label, value, in_stock, image}``
    objects in display order.
    """

    name: String(required=True, max_length=50)
    value: String(required=True, max_length=100)
    options: Text()

    @invariant.post
    def options_must_be_a_json_list(self):
        if not self.options:
            return
        try:
            options = json.loads(self.options)
        except (json.JSONDecodeError, TypeError):
            raise ValidationError({"options": ["Variant options must be valid JSON"]})
        if not isinstance(options, list):
            raise ValidationError({"options": ["Variant options must be a list"]})

    @property
    def option_list(self) -> list[dict]:
        return json.loads(self.options) if self.options else []


@checkout.aggregate
class Product:
    name: String(required=True, max_length=255)
    description: Text(required=True)
    price: Float(required=True, min_value=0.0)
    image: String(required=True, max_length=1000)
    variants: HasMany(VariantGroup)
    inventory: Integer(min_value=0, default=100)
    is_active: Boolean(default=True)
    created_at: DateTime(default=lambda: datetime.now(UTC))
    updated_at: DateTime(default=lambda: datetime.now(UTC))

    @classmethod
    def create(cls, name, description, price, image, inventory=100, is_active=True, variants=None):
        from checkout.catalogue.events import ProductCreated

        now = datetime.now(UTC)
        product = cls(
            name=name.strip() if isinstance(name, str) else name,
            description=description,
            price=price,
            image=image,
            inventory=inventory,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )
        for group in variants or []:
            product.add_variants(
                VariantGroup(
                    name=group["name"],
                    value=group["value"],
                    options=json.dumps(
                        [
                            {
                                "label": option.get("label"),
                                "value": option.get("value"),
                                "in_stock": option.get("in_stock", True),
                                "image": option.get("image"),
                            }
                            for option in group.get("options", [])
                        ]
                    ),
                )
            )

        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=product.name,
                price=product.price,
                inventory=product.inventory,
                created_at=now,
            )
        )
        return product

    def has_stock_for(self, quantity: int) -> bool:
        return self.is_active and self.inventory >= quantity

    def decrement_inventory(self, quantity: int) -> None:
        """Lower stock by ``quantity``, refusing to go below zero."""
        from checkout.catalogue.events import StockDecremented

        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be a positive whole number"]})
        if self.inventory < quantity:
            raise InsufficientInventoryError({"inventory": [f"Insufficient inventory for {self.name}"]})

        previous = self.inventory
        self.inventory = previous - quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockDecremented(
                product_id=self.id,
                quantity=quantity,
                previous_inventory=previous,
                new_inventory=self.inventory,
            )
        )
