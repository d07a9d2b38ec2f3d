"""Catalogue management: product creation, seeding and read helpers."""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, Float, Integer, String, Text
from protean.utils.globals import current_domain

from checkout.catalogue.product import Product
from checkout.catalogue.seed import SAMPLE_PRODUCTS
from checkout.domain import checkout

logger = structlog.get_logger(__name__)


@checkout.command(part_of="Product")
class CreateProduct:
    name = String(required=True, max_length=255)
    description = Text(required=True)
    price = Float(required=True, min_value=0.0)
    image = String(required=True, max_length=1000)
    inventory = Integer(min_value=0, default=100)
    is_active = Boolean(default=True)
    variants = Text()  # JSON: list of variant group dicts


@checkout.command(part_of="Product")
class SeedProducts:
    products = Text()  # JSON: list of product dicts, defaults to the sample catalogue


def _create(data: dict) -> Product:
    variants = data.get("variants")
    if isinstance(variants, str):
        variants = json.loads(variants)
    product = Product.create(
        name=data["name"],
        description=data["description"],
        price=data["price"],
        image=data["image"],
        inventory=data["inventory"] if data.get("inventory") is not None else 100,
        is_active=data["is_active"] if data.get("is_active") is not None else True,
        variants=variants,
    )
    current_domain.repository_for(Product).add(product)
    return product


@checkout.command_handler(part_of=Product)
class CatalogueCommandHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = _create(command.to_dict())
        logger.info("Product created", product_id=str(product.id), name=product.name)
        return str(product.id)

    @handle(SeedProducts)
    def seed_products(self, command):
        existing = current_domain.repository_for(Product)._dao.query.all().items
        if existing:
            raise ValidationError({"products": ["Products already exist"]})

        catalogue = json.loads(command.products) if command.products else SAMPLE_PRODUCTS
        product_ids = [str(_create(data).id) for data in catalogue]
        logger.info("Catalogue seeded", count=len(product_ids))
        return product_ids


def list_active_products() -> list[Product]:
    return current_domain.repository_for(Product)._dao.query.filter(is_active=True).all().items


def get_active_product(product_id: str) -> Product:
    try:
        product = current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        raise ObjectNotFoundError("Product not found") from None
    if not product.is_active:
        raise ObjectNotFoundError("Product not found")
    return product
