"""Application tests for all-or-nothing order placement."""

import json
from decimal import Decimal

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain
from storefront.cache import get_cache
from storefront.cache.keys import product_key
from storefront.inventory.ledger import InsufficientStock
from storefront.order.order import Order, OrderStatus
from storefront.order.placement import PlaceOrder, parse_lines
from storefront.product.product import Product
from storefront.product.queries import get_product


def _stock(product_id):
    return current_domain.repository_for(Product).get(product_id).stock


def _order_count():
    return current_domain.repository_for(Order).query.all().total


class TestParseLines:
    def test_parses_json(self):
        lines = parse_lines('[{"product_id": "p1", "quantity": 2}]')
        assert [(line.product_id, line.quantity) for line in lines] == [("p1", 2)]

    @pytest.mark.parametrize(
        "payload",
        [
            "[]",
            "{}",
            [{"quantity": 1}],
            [{"product_id": "p1", "quantity": 0}],
            [{"product_id": "p1", "quantity": -2}],
            [{"product_id": "p1", "quantity": "2"}],
            [{"product_id": "p1", "quantity": True}],
            ["p1"],
        ],
    )
    def test_rejects_malformed_lines(self, payload):
        with pytest.raises(ValidationError):
            parse_lines(payload)


class TestPlaceOrder:
    def test_places_order_and_withdraws_stock(self, create_user, create_product, place_order):
        user_id = create_user()
        product_id = create_product(name="Widget", price="9.99", stock=5)

        order_id = place_order(user_id, (product_id, 2))

        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == OrderStatus.PENDING.value
        assert order.total == Decimal("19.98")
        assert [(item.product_name, item.quantity) for item in order.items] == [("Widget", 2)]
        assert _stock(product_id) == 3

    def test_line_price_is_a_snapshot(self, create_user, create_product, place_order):
        from storefront.product.management import UpdateProduct

        user_id = create_user()
        product_id = create_product(price="9.99")
        order_id = place_order(user_id, (product_id, 1))

        current_domain.process(UpdateProduct(product_id=product_id, price=Decimal("20.00")), asynchronous=False)

        order = current_domain.repository_for(Order).get(order_id)
        assert order.items[0].price == Decimal("9.99")

    def test_failure_on_last_line_rolls_everything_back(self, create_user, create_product, place_order):
        user_id = create_user()
        first = create_product(name="Widget", stock=5)
        second = create_product(name="Gadget", stock=1)

        with pytest.raises(InsufficientStock):
            place_order(user_id, (first, 2), (second, 3))

        assert _stock(first) == 5
        assert _stock(second) == 1
        assert _order_count() == 0

    def test_unknown_product_rolls_back(self, create_user, create_product, place_order):
        user_id = create_user()
        product_id = create_product(stock=5)

        with pytest.raises(ObjectNotFoundError):
            place_order(user_id, (product_id, 1), ("missing", 1))

        assert _stock(product_id) == 5
        assert _order_count() == 0

    def test_unknown_user(self, create_product, place_order):
        product_id = create_product(stock=5)

        with pytest.raises(ObjectNotFoundError):
            place_order("missing", (product_id, 1))

        assert _stock(product_id) == 5

    def test_duplicate_lines_draw_on_the_same_stock(self, create_user, create_product, place_order):
        user_id = create_user()
        product_id = create_product(stock=5)

        place_order(user_id, (product_id, 2), (product_id, 3))

        assert _stock(product_id) == 0

    def test_duplicate_lines_cannot_oversell(self, create_user, create_product, place_order):
        user_id = create_user()
        product_id = create_product(stock=5)

        with pytest.raises(InsufficientStock):
            place_order(user_id, (product_id, 3), (product_id, 3))

        assert _stock(product_id) == 5

    def test_empty_order_rejected(self, create_user):
        user_id = create_user()

        with pytest.raises(ValidationError):
            current_domain.process(PlaceOrder(user_id=user_id, lines=json.dumps([])), asynchronous=False)

    def test_placement_invalidates_cached_stock(self, create_user, create_product, place_order):
        user_id = create_user()
        product_id = create_product(stock=5)
        assert get_product(product_id)["stock"] == 5

        place_order(user_id, (product_id, 2))

        assert product_key(product_id) not in get_cache()
        assert get_product(product_id)["stock"] == 3

    def test_failed_placement_keeps_cached_stock_valid(self, create_user, create_product, place_order):
        user_id = create_user()
        product_id = create_product(stock=1)
        get_product(product_id)

        with pytest.raises(InsufficientStock):
            place_order(user_id, (product_id, 2))

        assert get_product(product_id)["stock"] == 1
