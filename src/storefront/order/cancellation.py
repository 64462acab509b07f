"""Order cancellation: command and handler.

The status flip and the stock release share one unit of work. Only a pending
order can be cancelled, so a second cancellation fails before any stock moves.
"""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.inventory.ledger import InventoryLedger
from storefront.order.order import Order


@storefront.command(part_of="Order")
class CancelOrder:
    order_id: Identifier(required=True)


@storefront.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.cancel()

        ledger = InventoryLedger()
        for item in order.items:
            ledger.release(item.product_id, item.quantity)

        repo.add(order)
        return str(order.id)
