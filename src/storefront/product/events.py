"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Decimal, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """A product was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    price: Decimal(required=True)
    stock: Integer(required=True)
    category_id: Identifier()


@storefront.event(part_of="Product")
class ProductUpdated:
    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    price: Decimal(required=True)
    is_available: Boolean(required=True)


@storefront.event(part_of="Product")
class StockSet:
    """Stock was assigned an absolute value outside the order flow."""

    __version__ = 1

    product_id: Identifier(required=True)
    previous: Integer(required=True)
    quantity: Integer(required=True)


@storefront.event(part_of="Product")
class ProductTouched:
    __version__ = 1

    product_id: Identifier(required=True)
    touched_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductRemoved:
    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
