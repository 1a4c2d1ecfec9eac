"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="Order")
class OrderPlaced:
    """A buyer placed an order and a payment intent was opened for it."""

    __version__ = 1

    order_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    customer_name = String()
    customer_phone = String()
    customer_address = String()
    items = Text(required=True)  # JSON
    total_amount = Float(required=True)
    payment_intent_id = String()
    placed_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderItemsReplaced:
    __version__ = 1

    order_id = Identifier(required=True)
    items = Text(required=True)  # JSON
    total_amount = Float(required=True)


@marketplace.event(part_of="Order")
class DeliveryDetailsChanged:
    __version__ = 1

    order_id = Identifier(required=True)
    customer_name = String()
    customer_phone = String()
    customer_address = String()


@marketplace.event(part_of="Order")
class OrderStatusChanged:
    """The buyer cancelled the order, or it was shipped."""

    __version__ = 1

    order_id = Identifier(required=True)
    from_status = String(required=True)
    to_status = String(required=True)
    changed_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderPaid:
    """The payment provider confirmed the checkout for this order."""

    __version__ = 1

    order_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    previous_status = String(required=True)
    checkout_session_id = String()
    paid_at = DateTime(required=True)
