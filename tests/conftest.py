from decimal import Decimal
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture
from protean.utils.globals import current_domain


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    from storefront.cache import reset_cache
    from storefront.payment.gateway import reset_gateway

    reset_cache()
    with storefront_bed.domain_context():
        yield
    reset_cache()
    reset_gateway()


@pytest.fixture()
def fake_gateway():
    from storefront.payment.gateway import set_gateway
    from storefront.payment.gateway.fake_adapter import FakeGateway

    gateway = FakeGateway()
    set_gateway(gateway)
    return gateway


@pytest.fixture()
def create_user():
    from storefront.user.registration import RegisterUser

    def _create(email="jane@example.com", name="Jane Doe"):
        return current_domain.process(RegisterUser(email=email, name=name), asynchronous=False)

    return _create


@pytest.fixture()
def create_category():
    from storefront.category.management import CreateCategory

    def _create(name="Gadgets", description=None, parent_id=None):
        command = CreateCategory(name=name, description=description, parent_id=parent_id)
        return current_domain.process(command, asynchronous=False)

    return _create


@pytest.fixture()
def create_product():
    from storefront.product.management import CreateProduct

    def _create(name="Widget", price="9.99", stock=5, description=None, category_id=None):
        command = CreateProduct(
            name=name,
            description=description,
            price=Decimal(price),
            stock=stock,
            category_id=category_id,
        )
        return current_domain.process(command, asynchronous=False)

    return _create


@pytest.fixture()
def place_order():
    import json

    from storefront.order.placement import PlaceOrder

    def _place(user_id, *lines):
        """``lines`` are ``(product_id, quantity)`` pairs."""
        payload = json.dumps([{"product_id": pid, "quantity": qty} for pid, qty in lines])
        return current_domain.process(PlaceOrder(user_id=user_id, lines=payload), asynchronous=False)

    return _place
