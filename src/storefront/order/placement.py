"""Order placement: command and handler.

The handler runs in a single unit of work. The user lookup, every stock
reservation and the order write either commit together or roll back
together; a failure on any line leaves no order and no stock change behind.
"""

import json
from dataclasses import dataclass

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.inventory.ledger import InventoryLedger
from storefront.order.order import Order
from storefront.user.user import User

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class OrderLine:
    product_id: str
    quantity: int


def parse_lines(raw) -> list[OrderLine]:
    """Validate a JSON (or already decoded) list of ``{product_id, quantity}``."""
    data = json.loads(raw) if isinstance(raw, str) else raw
    if not isinstance(data, list) or not data:
        raise ValidationError({"items": ["An order needs at least one line"]})

    lines = []
    for position, entry in enumerate(data, start=1):
        if not isinstance(entry, dict):
            raise ValidationError({"items": [f"Line {position} must be an object"]})

        product_id = entry.get("product_id")
        quantity = entry.get("quantity")
        if not product_id:
            raise ValidationError({"product_id": [f"Line {position} is missing a product id"]})
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValidationError({"quantity": [f"Line {position} quantity must be a positive integer"]})

        lines.append(OrderLine(product_id=str(product_id), quantity=quantity))
    return lines


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id: Identifier(required=True)
    lines: Text(required=True)  # JSON: [{product_id, quantity}]


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        lines = parse_lines(command.lines)

        # Read through the unit of work, never the cache
        current_domain.repository_for(User).get(command.user_id)

        order = Order.open(user_id=command.user_id)
        ledger = InventoryLedger()
        for line in lines:
            product = ledger.reserve(line.product_id, line.quantity)
            order.add_line(product, line.quantity)

        order.submit()
        current_domain.repository_for(Order).add(order)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            user_id=str(order.user_id),
            lines=len(lines),
            total=str(order.total),
        )
        return str(order.id)
