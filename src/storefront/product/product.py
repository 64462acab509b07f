"""Product aggregate: catalogue entry and its on-hand stock."""

from datetime import datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Decimal, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.aggregate
class Product:
    """A sellable product.

    ``stock`` is changed by orders only through ``withdraw_stock`` and
    ``restock``, which the inventory ledger calls. ``set_stock`` is the
    administrative absolute assignment.
    """

    name: String(required=True, max_length=255)
    description: Text(default="")
    price: Decimal(required=True, min_value=0, precision=12, scale=2)
    stock: Integer(default=0, min_value=0)
    is_available: Boolean(default=True)
    category_id: Identifier()
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def stock_cannot_be_negative(self):
        if self.stock is not None and self.stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

    @classmethod
    def create(cls, name, price, description=None, stock=0, category_id=None):
        from storefront.product.events import ProductCreated

        now = datetime.now()
        product = cls(
            name=name,
            description=description or "",
            price=price,
            stock=stock if stock is not None else 0,
            category_id=category_id,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=product.name,
                price=product.price,
                stock=product.stock,
                category_id=product.category_id,
            )
        )
        return product

    def update_details(self, name=None, description=None, price=None, is_available=None):
        from storefront.product.events import ProductUpdated

        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if price is not None:
            self.price = price
        if is_available is not None:
            self.is_available = is_available
        self.updated_at = datetime.now()

        self.raise_(
            ProductUpdated(
                product_id=self.id,
                name=self.name,
                price=self.price,
                is_available=self.is_available,
            )
        )

    def set_stock(self, quantity):
        from storefront.product.events import StockSet

        if quantity is None or quantity < 0:
            raise ValidationError({"quantity": ["Stock cannot be negative"]})

        previous = self.stock
        self.stock = quantity
        self.updated_at = datetime.now()
        self.raise_(StockSet(product_id=self.id, previous=previous, quantity=quantity))

    def touch(self):
        from storefront.product.events import ProductTouched

        self.updated_at = datetime.now()
        self.raise_(ProductTouched(product_id=self.id, touched_at=self.updated_at))

    def mark_removed(self):
        from storefront.product.events import ProductRemoved

        self.raise_(ProductRemoved(product_id=self.id, name=self.name))

    def withdraw_stock(self, quantity):
        """Take ``quantity`` units off the shelf. Callers check availability first."""
        self.stock = self.stock - quantity
        self.updated_at = datetime.now()

    def restock(self, quantity):
        self.stock = self.stock + quantity
        self.updated_at = datetime.now()
