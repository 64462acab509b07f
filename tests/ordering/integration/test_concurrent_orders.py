"""Concurrent order placement against shared stock.

Each worker thread pushes its own domain context and shares the in-memory
store with the test. Stock is only withdrawn by commits whose version check
passed, so the product can never be oversold.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

from protean.utils.globals import current_domain
from storefront.domain import storefront
from storefront.inventory.ledger import InsufficientStock
from storefront.order.cancellation import CancelOrder
from storefront.order.order import Order
from storefront.product.product import Product


def _run_concurrently(workers, task):
    barrier = threading.Barrier(workers)

    def run(index):
        with storefront.domain_context():
            barrier.wait()
            try:
                return ("ok", task(index))
            except Exception as exc:  # collected for assertions
                return ("error", exc)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(run, range(workers)))


class TestConcurrentPlacement:
    def test_last_unit_is_sold_once(self, create_user, create_product, place_order):
        user_id = create_user()
        product_id = create_product(stock=1)

        results = _run_concurrently(2, lambda _: place_order(user_id, (product_id, 1)))

        outcomes = sorted(kind for kind, _ in results)
        assert outcomes == ["error", "ok"]
        failure = next(value for kind, value in results if kind == "error")
        assert isinstance(failure, InsufficientStock)

        assert current_domain.repository_for(Product).get(product_id).stock == 0
        assert current_domain.repository_for(Order).query.all().total == 1

    def test_stock_never_goes_negative_under_contention(self, create_user, create_product, place_order):
        user_id = create_user()
        product_id = create_product(stock=3)

        results = _run_concurrently(6, lambda _: place_order(user_id, (product_id, 1)))

        successes = [value for kind, value in results if kind == "ok"]
        stock = current_domain.repository_for(Product).get(product_id).stock
        assert stock >= 0
        assert stock == 3 - len(successes)
        assert current_domain.repository_for(Order).query.all().total == len(successes)
        assert len(successes) == 3

    def test_concurrent_cancel_restocks_once(self, create_user, create_product, place_order):
        user_id = create_user()
        product_id = create_product(stock=5)
        order_id = place_order(user_id, (product_id, 2))

        results = _run_concurrently(
            3,
            lambda _: current_domain.process(CancelOrder(order_id=order_id), asynchronous=False),
        )

        assert [kind for kind, _ in results].count("ok") == 1
        assert current_domain.repository_for(Product).get(product_id).stock == 5
