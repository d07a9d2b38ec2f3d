"""Checkout load test scenarios.

Stateful SequentialTaskSet journeys covering the full checkout path:
browse the catalogue, submit an order, read it back and dispatch the
notification email.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import APPROVED_CODE, order_data, product_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import CheckoutState, ShopperState


class CheckoutJourney(SequentialTaskSet):
    """Create Product -> Place Order -> Get Order -> Send Email -> Confirm Flag.

    Each iteration creates its own product so that stock is never the
    bottleneck. The simulation code mix yields approved, declined and
    failed orders.
    """

    def on_start(self):
        self.state = CheckoutState()

    @task
    def create_product(self):
        with self.client.post(
            "/products",
            json=product_data(),
            catch_response=True,
            name="POST /products",
        ) as resp:
            if resp.status_code == 201:
                self.state.product = resp.json()["data"]
            else:
                resp.failure(f"Create product failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def place_order(self):
        with self.client.post(
            "/orders",
            json=order_data(self.state.product),
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                data = resp.json()["data"]
                self.state.order_number = data["orderNumber"]
                self.state.status = data["status"]
            else:
                resp.failure(f"Place order failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def get_order(self):
        with self.client.get(
            f"/orders/{self.state.order_number}",
            catch_response=True,
            name="GET /orders/{orderNumber}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Get order failed: {resp.status_code} {extract_error_detail(resp)}")
            elif resp.json()["data"]["status"] != self.state.status:
                resp.failure("Stored status differs from submission response")

    @task
    def send_email(self):
        with self.client.post(
            "/email/send-order-email",
            json={"orderNumber": self.state.order_number},
            catch_response=True,
            name="POST /email/send-order-email",
        ) as resp:
            if resp.status_code == 200:
                self.state.email_sent = not resp.json()["data"].get("simulatedOnly", False)
            else:
                resp.failure(f"Send email failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def mark_email_sent(self):
        if self.state.email_sent:
            return
        with self.client.patch(
            f"/orders/{self.state.order_number}/email-status",
            catch_response=True,
            name="PATCH /orders/{orderNumber}/email-status",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Mark email sent failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class BrowseAndBuyJourney(SequentialTaskSet):
    """List Products -> View Product -> Place Approved Order -> List Orders.

    Models a shopper reading the catalogue before buying one unit.
    """

    def on_start(self):
        self.state = ShopperState()

    @task
    def list_products(self):
        with self.client.get("/products", catch_response=True, name="GET /products") as resp:
            if resp.status_code == 200:
                self.state.products = [p for p in resp.json()["data"] if p["inventory"] > 0]
                if not self.state.products:
                    self.interrupt()
            else:
                resp.failure(f"List products failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def view_product(self):
        product = random.choice(self.state.products)
        with self.client.get(
            f"/products/{product['id']}",
            catch_response=True,
            name="GET /products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Get product failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def buy(self):
        product = random.choice(self.state.products)
        with self.client.post(
            "/orders",
            json=order_data(product, quantity=1, code=APPROVED_CODE),
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_numbers.append(resp.json()["data"]["orderNumber"])
            elif resp.status_code == 400:
                # Stock ran out under contention; an expected outcome
                resp.success()
            else:
                resp.failure(f"Buy failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def list_orders(self):
        with self.client.get("/orders", catch_response=True, name="GET /orders") as resp:
            if resp.status_code != 200:
                resp.failure(f"List orders failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class CheckoutUser(HttpUser):
    """Runs the full checkout journey."""

    tasks = [CheckoutJourney]
    wait_time = between(0.5, 2.0)


class ShopperUser(HttpUser):
    """Browses the catalogue and buys."""

    tasks = [BrowseAndBuyJourney]
    wait_time = between(1.0, 3.0)
