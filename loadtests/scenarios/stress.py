"""Stress test scenarios for the order submission path.

HotProductUser hammers a single shared product so that every request
contends for the same stock lock. SpikeUser simulates sudden bursts of
independent submissions.
"""

from locust import HttpUser, constant_pacing, task

from loadtests.data_generators import APPROVED_CODE, order_data, product_data


class HotProductUser(HttpUser):
    """Stress test: concurrent purchases of one product.

    The product is created once per user with a small stock level. Once
    stock is gone every submission must be rejected with 400; a 201 after
    that point would mean oversell.
    """

    wait_time = constant_pacing(0.1)

    def on_start(self):
        resp = self.client.post("/products", json=product_data(inventory=50), name="[STRESS] POST /products")
        self.product = resp.json()["data"] if resp.status_code == 201 else None

    @task
    def buy_one(self):
        if self.product is None:
            return
        with self.client.post(
            "/orders",
            json=order_data(self.product, quantity=1, code=APPROVED_CODE),
            catch_response=True,
            name="[STRESS] POST /orders (hot product)",
        ) as resp:
            if resp.status_code in (201, 400):
                resp.success()


class SpikeUser(HttpUser):
    """Burst traffic: each task creates its own product then orders from it."""

    wait_time = constant_pacing(0.05)

    @task
    def create_and_order(self):
        resp = self.client.post("/products", json=product_data(), name="[STRESS] POST /products")
        if resp.status_code != 201:
            return
        self.client.post(
            "/orders",
            json=order_data(resp.json()["data"]),
            name="[STRESS] POST /orders",
        )
