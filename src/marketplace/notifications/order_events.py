"""Seller emails driven by order events.

Runs after the order change has been committed, so a mail problem can never
undo an order or its payment. A seller that cannot be resolved is logged and
skipped.
"""

import json

import structlog
from protean import handle
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.identity.lookup import find_seller
from marketplace.notifications.notification import NotificationType
from marketplace.notifications.sending import notify
from marketplace.ordering.events import OrderPaid, OrderPlaced
from marketplace.ordering.order import Order

logger = structlog.get_logger(__name__)


@marketplace.event_handler(part_of=Order)
class OrderNotificationsHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        seller = find_seller(event.seller_id)
        if seller is None:
            logger.warning("Seller not found, new order email skipped", order_id=str(event.order_id))
            return

        notify(
            NotificationType.NEW_ORDER.value,
            recipient=seller.email,
            recipient_id=str(seller.id),
            context={
                "order_id": str(event.order_id),
                "seller_name": seller.name,
                "customer_name": event.customer_name or "",
                "customer_phone": event.customer_phone or "",
                "customer_address": event.customer_address or "",
                "items": json.loads(event.items),
                "total_amount": event.total_amount,
            },
            source_event_type="Marketplace.OrderPlaced.v1",
        )

    @handle(OrderPaid)
    def on_order_paid(self, event: OrderPaid) -> None:
        seller = find_seller(event.seller_id)
        if seller is None:
            logger.warning("Seller not found, payment confirmation email skipped", order_id=str(event.order_id))
            return

        order = current_domain.repository_for(Order).get(event.order_id)
        notify(
            NotificationType.PAYMENT_CONFIRMATION.value,
            recipient=seller.email,
            recipient_id=str(seller.id),
            context={
                "order_id": str(order.id),
                "seller_name": seller.name,
                "customer_name": order.customer_name or "",
                "customer_phone": order.customer_phone or "",
                "customer_address": order.customer_address or "",
                "status": order.status,
                "total_amount": order.total_amount,
            },
            source_event_type="Marketplace.OrderPaid.v1",
        )
