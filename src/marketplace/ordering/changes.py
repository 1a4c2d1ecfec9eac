"""Buyer-side changes to an existing order: update and delete."""

import json

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.errors import NotFoundError
from marketplace.ordering.order import Order
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)

_DELIVERY_FIELDS = ("customer_name", "customer_phone", "customer_address")


@marketplace.command(part_of="Order")
class UpdateOrder:
    """Partial update. Fields left as ``None`` are not touched; the total is never taken from the caller."""

    order_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    items = Text()  # JSON, replaces the whole item list
    customer_name = String(max_length=100)
    customer_phone = String(max_length=30)
    customer_address = String(max_length=500)
    status = String(max_length=20)


@marketplace.command(part_of="Order")
class DeleteOrder:
    order_id = Identifier(required=True)
    buyer_id = Identifier(required=True)


def _load_owned(order_id, buyer_id) -> Order:
    order = current_domain.repository_for(Order).find_owned(order_id, buyer_id)
    if order is None:
        raise NotFoundError(f"No order with ID {order_id}.")
    return order


@marketplace.command_handler(part_of=Order)
class OrderChangesHandler:
    @handle(UpdateOrder)
    def update_order(self, command):
        order = _load_owned(command.order_id, command.buyer_id)

        if command.items is not None:
            order.replace_items(json.loads(command.items))

        delivery = {
            field_name: getattr(command, field_name)
            for field_name in _DELIVERY_FIELDS
            if getattr(command, field_name) is not None
        }
        if delivery:
            order.update_delivery_details(**delivery)

        if command.status is not None:
            order.change_status(command.status)

        current_domain.repository_for(Order).add(order)
        return str(order.id)

    @handle(DeleteOrder)
    def delete_order(self, command):
        order = _load_owned(command.order_id, command.buyer_id)
        current_domain.repository_for(Order)._dao.delete(order)
        logger.info("order_deleted", order_id=str(order.id), status=order.status)
