"""BDD tests for order totals."""

from pytest_bdd import scenarios

scenarios("features/order_totals.feature")
