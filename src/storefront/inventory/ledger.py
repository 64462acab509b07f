"""Inventory ledger: the only path through which orders move product stock.

Reservations and releases run inside the caller's unit of work. The product
is read into the unit's session, changed there, and written back through the
repository, which bumps the aggregate version. At commit the provider compares
that version with the stored one under its lock, so of two overlapping
reservations on the same product only the first commit lands; the other fails
with ``ExpectedVersionError`` and its command is re-run against fresh stock.
Nothing a reservation does is visible outside the unit until it commits.
"""

import structlog
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.product.product import Product

logger = structlog.get_logger(__name__)


class InsufficientStock(ValidationError):
    """Requested quantity exceeds the product's current stock."""

    def __init__(self, product_name, requested=None, available=None):
        self.product_name = product_name
        self.requested = requested
        self.available = available
        super().__init__({"stock": [f"Insufficient stock for {product_name}"]})


class InventoryLedger:
    def __init__(self, repository=None):
        self._repository = repository

    @property
    def repository(self):
        if self._repository is None:
            self._repository = current_domain.repository_for(Product)
        return self._repository

    def reserve(self, product_id, quantity):
        """Withdraw ``quantity`` units of a product and return the product.

        Raises ``ObjectNotFoundError`` for an unknown product and
        ``InsufficientStock`` when the product cannot cover the quantity, in
        which case stock is left untouched.
        """
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be a positive integer"]})

        product = self.repository.get(product_id)
        if quantity > product.stock:
            logger.info(
                "stock_reservation_rejected",
                product_id=str(product.id),
                requested=quantity,
                available=product.stock,
            )
            raise InsufficientStock(product.name, requested=quantity, available=product.stock)

        product.withdraw_stock(quantity)
        self.repository.add(product)
        return product

    def release(self, product_id, quantity):
        """Put ``quantity`` units back on the shelf."""
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be a positive integer"]})

        product = self.repository.get(product_id)
        product.restock(quantity)
        self.repository.add(product)
        return product
