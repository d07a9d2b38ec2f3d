"""Inventory ledger: stock checks and decrements for the order pipeline.

Check-then-decrement must not interleave between concurrent orders for the
same product. Callers wrap the whole unit of work in ``hold()``, which takes
a lock per product (in sorted order, so overlapping orders cannot deadlock)
and keeps it until the unit of work has committed. ``commit`` then refuses
to take stock below zero, so a stale read can never oversell.
"""

import threading
from collections.abc import Iterable
from contextlib import contextmanager

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from checkout.catalogue.product import Product
from checkout.shared.exceptions import InsufficientInventoryError, ProductNotFoundError

logger = structlog.get_logger(__name__)


class InventoryLedger:
    def __init__(self) -> None:
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, product_id: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(product_id)
            if lock is None:
                lock = self._locks[product_id] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, product_ids: Iterable[str]):
        """Serialize stock work on ``product_ids`` for the duration of the block."""
        locks = [self._lock_for(product_id) for product_id in sorted({str(pid) for pid in product_ids})]
        acquired = []
        try:
            for lock in locks:
                lock.acquire()
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()

    def reserve(self, product_id: str, quantity: int, product_name: str | None = None) -> Product:
        """Check that ``quantity`` units are available and return the product.

        Nothing is written. Fails with ``ProductNotFoundError`` for missing or
        inactive products and ``InsufficientInventoryError`` when stock is short.
        """
        label = product_name or product_id
        try:
            product = current_domain.repository_for(Product).get(product_id)
        except ObjectNotFoundError:
            raise ProductNotFoundError({"product_id": [f"Product {label} not found"]}) from None

        if not product.is_active:
            raise ProductNotFoundError({"product_id": [f"Product {label} not found"]})

        if not product.has_stock_for(quantity):
            raise InsufficientInventoryError({"inventory": [f"Insufficient inventory for {product.name}"]})

        return product

    def commit(self, product_id: str, quantity: int) -> Product:
        """Decrement stock by ``quantity`` inside the caller's unit of work."""
        repo = current_domain.repository_for(Product)
        product = repo.get(product_id)
        product.decrement_inventory(quantity)
        repo.add(product)

        logger.info(
            "Stock committed",
            product_id=str(product_id),
            quantity=quantity,
            remaining=product.inventory,
        )
        return product


inventory_ledger = InventoryLedger()
