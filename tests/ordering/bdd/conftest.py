"""Shared BDD fixtures and step definitions for ordering."""

import json
from decimal import Decimal

import pytest
from protean.exceptions import InvalidStateError
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, then, when
from storefront.order.cancellation import CancelOrder
from storefront.order.order import Order
from storefront.order.placement import PlaceOrder
from storefront.payment.retry import PaymentRetryExecutor, PaymentUnavailable
from storefront.product.management import CreateProduct
from storefront.product.product import Product
from storefront.user.registration import RegisterUser


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for the exception a When step ran into."""
    return {"exc": None}


@pytest.fixture()
def products():
    """Product ids by name."""
    return {}


@pytest.fixture()
def placed():
    return {"order_id": None}


def _place(user_id, products, lines, placed, error):
    payload = json.dumps([{"product_id": products[name], "quantity": qty} for name, qty in lines])
    try:
        placed["order_id"] = current_domain.process(PlaceOrder(user_id=user_id, lines=payload), asynchronous=False)
    except Exception as exc:  # asserted by Then steps
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a registered user "{email}"'), target_fixture="user_id")
def registered_user(email):
    return current_domain.process(RegisterUser(email=email, name="Test User"), asynchronous=False)


@given(parsers.cfparse('a product "{name}" priced {price} with {stock:d} in stock'))
def product_in_stock(products, name, price, stock):
    command = CreateProduct(name=name, price=Decimal(price), stock=stock)
    products[name] = current_domain.process(command, asynchronous=False)


@given(parsers.cfparse('the user has ordered {quantity:d} "{name}"'))
def user_has_ordered(user_id, products, placed, error, quantity, name):
    _place(user_id, products, [(name, quantity)], placed, error)
    assert error["exc"] is None


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the user orders {quantity:d} "{name:w}"'))
def user_orders(user_id, products, placed, error, quantity, name):
    _place(user_id, products, [(name, quantity)], placed, error)


@when(parsers.cfparse('the user orders {first_qty:d} "{first}" and {second_qty:d} "{second}"'))
def user_orders_two(user_id, products, placed, error, first_qty, first, second_qty, second):
    _place(user_id, products, [(first, first_qty), (second, second_qty)], placed, error)


@when("the order is paid")
def order_is_paid(placed, error, fake_gateway):
    executor = PaymentRetryExecutor(gateway=fake_gateway, sleep=lambda seconds: None)
    try:
        executor.pay(placed["order_id"])
    except (PaymentUnavailable, InvalidStateError) as exc:
        error["exc"] = exc


@when("the order is cancelled")
def order_is_cancelled(placed, error):
    try:
        current_domain.process(CancelOrder(order_id=placed["order_id"]), asynchronous=False)
    except InvalidStateError as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order is "{status}" with total {total}'))
def order_status_and_total(placed, status, total):
    order = current_domain.repository_for(Order).get(placed["order_id"])
    assert order.status == status
    assert order.total == Decimal(total)


@then(parsers.cfparse('the order is "{status}"'))
def order_status(placed, status):
    assert current_domain.repository_for(Order).get(placed["order_id"]).status == status


@then(parsers.cfparse('"{name}" has {stock:d} in stock'))
def product_stock(products, name, stock):
    assert current_domain.repository_for(Product).get(products[name]).stock == stock


@then("the action fails with an invalid state error")
def fails_with_invalid_state(error):
    assert isinstance(error["exc"], InvalidStateError)


@then("no order exists")
def no_order_exists():
    assert current_domain.repository_for(Order).query.all().total == 0
