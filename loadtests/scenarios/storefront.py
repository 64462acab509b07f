"""Storefront load test scenarios.

Three user classes:

- ``CatalogueBrowser`` hammers the cached read endpoints.
- ``CheckoutJourney`` walks register -> order -> pay, and cancels some orders.
- ``FlashSaleUser`` races many shoppers for a product with little stock; the
  sum of accepted quantities must never exceed the stock it started with.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import category_data, order_data, product_data, search_term, user_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import FlashSaleState, ShopperState


class CatalogueBrowser(HttpUser):
    """Read-mostly traffic against products, categories and search."""

    wait_time = between(0.1, 0.5)

    def on_start(self):
        self.product_ids = []
        self.category_id = None

        resp = self.client.post("/categories", json=category_data(), name="POST /categories")
        if resp.status_code == 201:
            self.category_id = resp.json()["category_id"]

        for _ in range(5):
            resp = self.client.post("/products", json=product_data(category_id=self.category_id), name="POST /products")
            if resp.status_code == 201:
                self.product_ids.append(resp.json()["product_id"])

    @task(5)
    def list_products(self):
        self.client.get("/products", name="GET /products")

    @task(5)
    def get_product(self):
        if self.product_ids:
            self.client.get(f"/products/{random.choice(self.product_ids)}", name="GET /products/{id}")

    @task(3)
    def search(self):
        self.client.get("/products/search", params={"q": search_term()}, name="GET /products/search")

    @task(1)
    def category_tree(self):
        if self.category_id:
            self.client.get(f"/categories/{self.category_id}/tree", name="GET /categories/{id}/tree")

    @task(1)
    def reprice(self):
        if self.product_ids:
            product_id = random.choice(self.product_ids)
            self.client.put(
                f"/products/{product_id}",
                json={"price": product_data()["price"]},
                name="PUT /products/{id}",
            )


class CheckoutSequence(SequentialTaskSet):
    """Register -> Place Order -> Pay (or Cancel)."""

    def on_start(self):
        self.state = ShopperState()

    @task
    def register(self):
        with self.client.post("/users", json=user_data(), catch_response=True, name="POST /users") as resp:
            if resp.status_code == 201:
                self.state.user_id = resp.json()["user_id"]
            else:
                resp.failure(f"Register failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def stock_products(self):
        for _ in range(3):
            resp = self.client.post("/products", json=product_data(stock=50), name="POST /products")
            if resp.status_code == 201:
                self.state.product_ids.append(resp.json()["product_id"])
        if not self.state.product_ids:
            self.interrupt()

    @task
    def place_order(self):
        payload = order_data(self.state.user_id, self.state.product_ids)
        with self.client.post("/orders", json=payload, catch_response=True, name="POST /orders") as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["id"]
            else:
                resp.failure(f"Place order failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def pay_or_cancel(self):
        if random.random() < 0.2:
            with self.client.post(
                f"/orders/{self.state.order_id}/cancel",
                catch_response=True,
                name="POST /orders/{id}/cancel",
            ) as resp:
                if resp.status_code != 200:
                    resp.failure(f"Cancel failed: {resp.status_code}: {extract_error_detail(resp)}")
            return

        with self.client.post(
            f"/orders/{self.state.order_id}/pay",
            catch_response=True,
            name="POST /orders/{id}/pay",
        ) as resp:
            # 503 means the gateway stayed down for every attempt; the order is still payable
            if resp.status_code == 503:
                resp.success()
            elif resp.status_code != 200:
                resp.failure(f"Pay failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class CheckoutJourney(HttpUser):
    wait_time = between(0.5, 2)
    tasks = [CheckoutSequence]


class FlashSaleUser(HttpUser):
    """Many shoppers ordering one unit each of a product with 10 in stock."""

    wait_time = between(0, 0.1)

    def on_start(self):
        self.state = FlashSaleState()
        resp = self.client.post("/users", json=user_data(), name="POST /users")
        if resp.status_code == 201:
            self.state.user_id = resp.json()["user_id"]

        resp = self.client.post("/products", json=product_data(stock=10), name="POST /products")
        if resp.status_code == 201:
            self.state.product_id = resp.json()["product_id"]
            self.state.initial_stock = 10

    @task
    def grab_one(self):
        if not (self.state.user_id and self.state.product_id):
            return

        payload = {"user_id": self.state.user_id, "items": [{"product_id": self.state.product_id, "quantity": 1}]}
        with self.client.post("/orders", json=payload, catch_response=True, name="POST /orders (flash sale)") as resp:
            if resp.status_code == 201:
                self.state.orders_won += 1
            elif resp.status_code == 400 and "Insufficient stock" in extract_error_detail(resp):
                self.state.orders_rejected += 1
                resp.success()
            else:
                resp.failure(f"Flash sale order failed: {resp.status_code}: {extract_error_detail(resp)}")

        if self.state.orders_won > self.state.initial_stock:
            self.environment.events.request.fire(
                request_type="CHECK",
                name="oversold",
                response_time=0,
                response_length=0,
                exception=AssertionError(f"Sold {self.state.orders_won} of {self.state.initial_stock} units"),
            )
