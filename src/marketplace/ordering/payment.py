"""ConfirmOrderPayment command + handler: the durable half of a payment callback."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.errors import BadRequestError
from marketplace.ordering.order import Order
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


@marketplace.command(part_of="Order")
class ConfirmOrderPayment:
    order_id = Identifier(required=True)
    checkout_session_id = String(max_length=255)


@marketplace.command_handler(part_of=Order)
class ConfirmOrderPaymentHandler:
    @handle(ConfirmOrderPayment)
    def confirm_payment(self, command):
        """Returns True when this call moved the order to paid, False on a repeated delivery."""
        repo = current_domain.repository_for(Order)
        try:
            order = repo.get(command.order_id)
        except ObjectNotFoundError:
            raise BadRequestError(f"No order with ID {command.order_id}.") from None

        changed = order.mark_paid(checkout_session_id=command.checkout_session_id)
        if changed:
            repo.add(order)
            logger.info("order_paid", order_id=str(order.id), seller_id=str(order.seller_id))
        else:
            logger.info("order_payment_already_recorded", order_id=str(order.id), status=order.status)
        return changed
