"""Administrative order status override."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order


@storefront.command(part_of="Order")
class OverrideOrderStatus:
    order_id: Identifier(required=True)
    status: String(required=True, max_length=20)


@storefront.command_handler(part_of=Order)
class OverrideOrderStatusHandler:
    @handle(OverrideOrderStatus)
    def override_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.override_status(command.status)
        repo.add(order)
        return str(order.id)
