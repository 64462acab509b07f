"""Order aggregate with its line items.

State Machine:
    PENDING → CONFIRMED   (payment captured)
    PENDING → CANCELLED   (stock released)

Both CONFIRMED and CANCELLED are terminal for the business transitions. The
administrative status override bypasses the state machine.
"""

import json
from datetime import datetime
from decimal import Decimal as D
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import InvalidStateError, ValidationError
from protean.fields import DateTime, Decimal, HasMany, Identifier, Integer, String

from storefront.domain import storefront


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


@storefront.entity(part_of="Order")
class OrderItem:
    """One order line. Name and price are snapshots taken when the order was placed."""

    product_id: Identifier(required=True)
    product_name: String(required=True, max_length=255)
    quantity: Integer(required=True, min_value=1)
    price: Decimal(required=True, min_value=0, precision=12, scale=2)

    @property
    def subtotal(self):
        return self.price * self.quantity


@storefront.aggregate
class Order:
    user_id: Identifier(required=True)
    status: String(max_length=20, choices=OrderStatus, default=OrderStatus.PENDING.value)
    total: Decimal(default=D("0"), min_value=0, precision=14, scale=2)
    items: HasMany(OrderItem)
    transaction_id: String(max_length=100)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def total_must_match_items(self):
        expected = sum((item.subtotal for item in self.items or []), D("0"))
        if (self.total or D("0")) != expected:
            raise ValidationError({"total": [f"Order total {self.total} does not match line items ({expected})"]})

    @classmethod
    def open(cls, user_id):
        """Start a pending order with no lines and a zero total."""
        now = datetime.now()
        return cls(
            user_id=user_id,
            status=OrderStatus.PENDING.value,
            total=D("0"),
            created_at=now,
            updated_at=now,
        )

    def add_line(self, product, quantity):
        """Append a line priced at the product's current price."""
        item = OrderItem(
            product_id=product.id,
            product_name=product.name,
            quantity=quantity,
            price=product.price,
        )
        with atomic_change(self):
            self.add_items(item)
            self.total = (self.total or D("0")) + item.subtotal
        return item

    def lines_payload(self) -> str:
        return json.dumps(
            [
                {
                    "product_id": str(item.product_id),
                    "quantity": item.quantity,
                    "price": str(item.price),
                }
                for item in self.items
            ]
        )

    def submit(self):
        from storefront.order.events import OrderPlaced

        if not self.items:
            raise ValidationError({"items": ["An order needs at least one line"]})

        self.raise_(
            OrderPlaced(
                order_id=self.id,
                user_id=self.user_id,
                total=self.total,
                lines=self.lines_payload(),
                placed_at=self.created_at,
            )
        )

    def _assert_pending(self, action):
        if self.status != OrderStatus.PENDING.value:
            raise InvalidStateError(f"Cannot {action} order {self.id} in {self.status} state")

    def confirm_payment(self, transaction_id):
        from storefront.order.events import PaymentConfirmed

        self._assert_pending("confirm payment for")
        self.status = OrderStatus.CONFIRMED.value
        self.transaction_id = transaction_id
        self.updated_at = datetime.now()
        self.raise_(
            PaymentConfirmed(
                order_id=self.id,
                transaction_id=transaction_id,
                total=self.total,
                confirmed_at=self.updated_at,
            )
        )

    def cancel(self):
        from storefront.order.events import OrderCancelled

        self._assert_pending("cancel")
        self.status = OrderStatus.CANCELLED.value
        self.updated_at = datetime.now()
        self.raise_(
            OrderCancelled(
                order_id=self.id,
                lines=self.lines_payload(),
                cancelled_at=self.updated_at,
            )
        )

    def override_status(self, status):
        """Set any known status, skipping the transition rules."""
        from storefront.order.events import OrderStatusChanged

        try:
            new_status = OrderStatus(status)
        except ValueError:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise ValidationError({"status": [f"Unknown status {status!r}. Expected one of: {allowed}"]}) from None

        previous = self.status
        self.status = new_status.value
        self.updated_at = datetime.now()
        self.raise_(
            OrderStatusChanged(
                order_id=self.id,
                previous_status=previous,
                status=new_status.value,
                changed_at=self.updated_at,
            )
        )
