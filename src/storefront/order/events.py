"""Domain events for the Order aggregate.

Line payloads are JSON text: ``[{product_id, quantity, price}]``.
"""

from protean.fields import DateTime, Decimal, Identifier, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """An order was created and stock reserved for every line."""

    __version__ = 1

    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    total: Decimal(required=True)
    lines: Text(required=True)
    placed_at: DateTime(required=True)


@storefront.event(part_of="Order")
class PaymentConfirmed:
    __version__ = 1

    order_id: Identifier(required=True)
    transaction_id: String(required=True)
    total: Decimal(required=True)
    confirmed_at: DateTime(required=True)


@storefront.event(part_of="Order")
class OrderCancelled:
    """A pending order was cancelled and its stock put back."""

    __version__ = 1

    order_id: Identifier(required=True)
    lines: Text(required=True)
    cancelled_at: DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id: Identifier(required=True)
    previous_status: String(required=True)
    status: String(required=True)
    changed_at: DateTime(required=True)
