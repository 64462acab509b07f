"""Payment confirmation: command and handler.

Issued by the payment executor once the gateway has captured the charge.
"""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order


@storefront.command(part_of="Order")
class ConfirmPayment:
    order_id: Identifier(required=True)
    transaction_id: String(required=True, max_length=100)


@storefront.command_handler(part_of=Order)
class ConfirmPaymentHandler:
    @handle(ConfirmPayment)
    def confirm_payment(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.confirm_payment(command.transaction_id)
        repo.add(order)
        return str(order.id)
