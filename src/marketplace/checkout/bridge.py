"""Checkout session bridge between orders and the hosted payment page.

Opening a checkout turns an order into provider line items; the provider then
calls back on success or cancel. Marking the order paid is committed before
anything else happens, and the seller email is sent from the resulting
OrderPaid event.
"""

from dataclasses import dataclass

from protean.utils.globals import current_domain

from marketplace.catalogue.lookup import find_product
from marketplace.config import Settings
from marketplace.errors import BadRequestError, NotFoundError
from marketplace.identity.lookup import find_seller
from marketplace.ordering.order import Order
from marketplace.ordering.payment import ConfirmOrderPayment
from marketplace.payments.currency import to_minor_units
from marketplace.payments.gateway.port import CheckoutLineItem, PaymentGateway
from marketplace.stores.lookup import find_store_for_owner
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)

CANCEL_MESSAGE = "Checkout cancelled. Return to your cart to review the order and try again."


@dataclass(frozen=True)
class PaymentConfirmation:
    order_id: str
    message: str
    newly_paid: bool


class CheckoutBridge:
    def __init__(self, settings: Settings, gateway: PaymentGateway):
        self.settings = settings
        self.gateway = gateway

    def open_checkout(self, buyer_id, order_id) -> str:
        """Open a hosted checkout session for one of the buyer's orders and return its URL."""
        order = current_domain.repository_for(Order).find_owned(order_id, buyer_id)
        if order is None:
            raise NotFoundError(f"No order with ID {order_id}.")

        items = order.ordered_items
        missing = [str(item.product_id) for item in items if find_product(item.product_id) is None]
        if missing:
            raise BadRequestError(f"Products no longer available: {', '.join(missing)}.")

        line_items = [
            CheckoutLineItem(
                name=item.product_name,
                unit_amount=to_minor_units(item.unit_price, self.settings.exchange_rate),
                quantity=item.quantity,
            )
            for item in items
        ]
        session = self.gateway.create_checkout_session(
            line_items=line_items,
            currency=self.settings.settlement_currency,
            success_url=self.settings.success_url,
            cancel_url=self.settings.cancel_url,
            metadata={"order_id": str(order.id), "seller_id": str(order.seller_id)},
        )
        logger.info("checkout_opened", order_id=str(order.id), session_id=session.session_id)
        return session.url

    def handle_payment_success(self, session_id: str | None) -> PaymentConfirmation:
        if not session_id:
            raise BadRequestError("Missing checkout session id.")

        session = self.gateway.retrieve_checkout_session(session_id)
        order_id = session.metadata.get("order_id")
        seller_id = session.metadata.get("seller_id")
        if not order_id or not seller_id:
            raise BadRequestError("Checkout session is missing the order or seller reference.")
        if not session.is_paid:
            raise BadRequestError("Checkout session has not been paid.")

        newly_paid = current_domain.process(
            ConfirmOrderPayment(order_id=order_id, checkout_session_id=session_id),
            asynchronous=False,
        )

        seller = find_seller(seller_id)
        if seller is None:
            raise NotFoundError(f"No seller with ID {seller_id}.")
        store = find_store_for_owner(seller_id)
        if store is None:
            raise NotFoundError("The seller has no store.")

        message = (
            f"Payment confirmed and {seller.name} has been notified. "
            f"Your products will arrive within {self.settings.delivery_window_days} days. "
            f"If they do not, contact the store by phone at {store.phone} or by email at {store.email}."
        )
        return PaymentConfirmation(order_id=str(order_id), message=message, newly_paid=bool(newly_paid))

    def handle_payment_cancel(self) -> str:
        return CANCEL_MESSAGE
