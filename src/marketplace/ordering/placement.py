"""PlaceOrder command + handler: persist a new pending order."""

import json

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.ordering.order import Order


@marketplace.command(part_of="Order")
class PlaceOrder:
    buyer_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    customer_name = String(max_length=100)
    customer_phone = String(max_length=30)
    customer_address = String(max_length=500)
    items = Text(required=True)  # JSON: list of {product_id, product_name, quantity, unit_price}
    payment_intent_id = String(required=True, max_length=255)


@marketplace.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items

        order = Order.place(
            buyer_id=command.buyer_id,
            seller_id=command.seller_id,
            items_data=items_data,
            payment_intent_id=command.payment_intent_id,
            customer_name=command.customer_name,
            customer_phone=command.customer_phone,
            customer_address=command.customer_address,
        )
        current_domain.repository_for(Order).add(order)
        return str(order.id)
