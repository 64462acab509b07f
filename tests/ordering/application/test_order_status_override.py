import pytest
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from storefront.order.order import Order
from storefront.order.status import OverrideOrderStatus
from storefront.product.product import Product


@pytest.fixture()
def order_id(create_user, create_product, place_order):
    return place_order(create_user(), (create_product(stock=5), 1))


class TestOverrideOrderStatus:
    def test_sets_any_known_status(self, order_id):
        current_domain.process(OverrideOrderStatus(order_id=order_id, status="confirmed"), asynchronous=False)
        assert current_domain.repository_for(Order).get(order_id).status == "confirmed"

        current_domain.process(OverrideOrderStatus(order_id=order_id, status="pending"), asynchronous=False)
        assert current_domain.repository_for(Order).get(order_id).status == "pending"

    def test_override_does_not_move_stock(self, order_id):
        product_id = current_domain.repository_for(Order).get(order_id).items[0].product_id

        current_domain.process(OverrideOrderStatus(order_id=order_id, status="cancelled"), asynchronous=False)

        assert current_domain.repository_for(Product).get(product_id).stock == 4

    def test_unknown_status_rejected(self, order_id):
        with pytest.raises(ValidationError):
            current_domain.process(OverrideOrderStatus(order_id=order_id, status="shipped"), asynchronous=False)

        assert current_domain.repository_for(Order).get(order_id).status == "pending"
