"""Application tests for the inventory ledger and manual stock decrements."""

import threading

import pytest
from checkout.catalogue.product import Product
from checkout.inventory.adjustment import decrement_stock
from checkout.inventory.ledger import InventoryLedger, inventory_ledger
from checkout.shared.exceptions import InsufficientInventoryError, ProductNotFoundError
from protean import current_domain
from protean.exceptions import ObjectNotFoundError


class TestReserve:
    def test_returns_product_when_stock_suffices(self, make_product):
        product = make_product(inventory=3)
        reserved = inventory_ledger.reserve(str(product.id), 3)
        assert reserved.id == product.id

    def test_reserve_does_not_write(self, make_product):
        product = make_product(inventory=3)
        inventory_ledger.reserve(str(product.id), 2)
        assert current_domain.repository_for(Product).get(product.id).inventory == 3

    def test_missing_product(self):
        with pytest.raises(ProductNotFoundError) as exc:
            inventory_ledger.reserve("missing-id", 1, product_name="Ghost")
        assert exc.value.messages == {"product_id": ["Product Ghost not found"]}

    def test_inactive_product(self, make_product):
        product = make_product(is_active=False)
        with pytest.raises(ProductNotFoundError):
            inventory_ledger.reserve(str(product.id), 1)

    def test_insufficient(self, make_product):
        product = make_product(inventory=1)
        with pytest.raises(InsufficientInventoryError):
            inventory_ledger.reserve(str(product.id), 2)


class TestDecrementStock:
    def test_decrements(self, make_product):
        product = make_product(inventory=5)
        updated = decrement_stock(str(product.id), 2)
        assert updated.inventory == 3

    def test_refuses_to_oversell(self, make_product):
        product = make_product(inventory=1)
        with pytest.raises(InsufficientInventoryError):
            decrement_stock(str(product.id), 2)
        assert current_domain.repository_for(Product).get(product.id).inventory == 1

    def test_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            decrement_stock("missing-id", 1)


class TestHold:
    def test_same_product_is_serialized(self):
        ledger = InventoryLedger()
        entered = threading.Event()
        release = threading.Event()
        second_entered = threading.Event()

        def first():
            with ledger.hold(["p-1"]):
                entered.set()
                release.wait(timeout=5)

        def second():
            with ledger.hold(["p-1"]):
                second_entered.set()

        t1 = threading.Thread(target=first)
        t1.start()
        entered.wait(timeout=5)
        t2 = threading.Thread(target=second)
        t2.start()

        assert not second_entered.wait(timeout=0.2)
        release.set()
        t1.join(timeout=5)
        t2.join(timeout=5)
        assert second_entered.is_set()

    def test_overlapping_sets_do_not_deadlock(self):
        ledger = InventoryLedger()
        done = []

        def worker(ids):
            for _ in range(200):
                with ledger.hold(ids):
                    pass
            done.append(ids)

        threads = [
            threading.Thread(target=worker, args=(["a", "b"],)),
            threading.Thread(target=worker, args=(["b", "a"],)),
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)

        assert len(done) == 2

    def test_locks_released_after_error(self):
        ledger = InventoryLedger()
        with pytest.raises(RuntimeError):
            with ledger.hold(["p-1"]):
                raise RuntimeError("boom")

        with ledger.hold(["p-1"]):
            pass
