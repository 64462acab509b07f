"""Storefront domain: users, catalogue, inventory and orders.

A single domain holds every aggregate the order flow touches, so that placing
or cancelling an order (user lookup, stock reservation, order header and line
items) commits in one UnitOfWork.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging

configure_logging()

storefront = Domain(name="storefront")
