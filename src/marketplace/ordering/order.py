"""Order aggregate (CQRS): a buyer's purchase from one seller.

Items are a snapshot of the catalogue at the time of ordering; later price or
name changes in the catalogue do not touch existing orders.

State Machine:
    PENDING → PAID        (payment confirmation only)
    PENDING → CANCELLED
    PAID → SHIPPED
    CANCELLED → PAID      (payment confirmation that arrives after a cancel)
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from marketplace.domain import marketplace
from marketplace.ordering.events import (
    DeliveryDetailsChanged,
    OrderItemsReplaced,
    OrderPaid,
    OrderPlaced,
    OrderStatusChanged,
)

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


class OrderStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"
    SHIPPED = "shipped"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PAID, OrderStatus.CANCELLED},
    OrderStatus.PAID: {OrderStatus.SHIPPED},
    OrderStatus.CANCELLED: {OrderStatus.PAID},
    OrderStatus.SHIPPED: set(),  # Terminal
}

# Statuses a confirmed payment has already reached or passed
_SETTLED = {OrderStatus.PAID, OrderStatus.SHIPPED}


def order_total(items_data) -> float:
    """Σ quantity × unit_price over plain item dicts."""
    return sum(item["quantity"] * item["unit_price"] for item in items_data)


@marketplace.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    position = Integer(default=0)

    @property
    def subtotal(self) -> float:
        return self.quantity * self.unit_price

    def to_snapshot(self) -> dict:
        return {
            "product_id": str(self.product_id),
            "product_name": self.product_name,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
        }


@marketplace.aggregate
class Order:
    buyer_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    customer_name = String(max_length=100)
    customer_phone = String(max_length=30)
    customer_address = String(max_length=500)
    items = HasMany(OrderItem)
    total_amount = Float(default=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_intent_id = String(max_length=255)
    checkout_session_id = String(max_length=255)
    paid_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    @property
    def ordered_items(self) -> list[OrderItem]:
        return sorted(self.items, key=lambda item: item.position or 0)

    def items_snapshot(self) -> list[dict]:
        return [item.to_snapshot() for item in self.ordered_items]

    @staticmethod
    def _build_items(items_data) -> list[OrderItem]:
        if not items_data:
            raise ValidationError({"items": ["An order needs at least one item"]})
        return [
            OrderItem(
                product_id=item_data["product_id"],
                product_name=item_data["product_name"],
                quantity=item_data["quantity"],
                unit_price=item_data["unit_price"],
                position=position,
            )
            for position, item_data in enumerate(items_data)
        ]

    def _recalculate_total(self) -> None:
        self.total_amount = sum(item.subtotal for item in self.items)

    @classmethod
    def place(
        cls,
        buyer_id,
        seller_id,
        items_data: list[dict],
        payment_intent_id: str,
        customer_name=None,
        customer_phone=None,
        customer_address=None,
    ):
        """Create a pending order; the total is always computed from the items."""
        items = cls._build_items(items_data)
        now = datetime.now(UTC)

        order = cls(
            buyer_id=buyer_id,
            seller_id=seller_id,
            customer_name=customer_name,
            customer_phone=customer_phone,
            customer_address=customer_address,
            status=OrderStatus.PENDING.value,
            payment_intent_id=payment_intent_id,
            created_at=now,
            updated_at=now,
        )
        for item in items:
            order.add_items(item)
        order._recalculate_total()

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                buyer_id=str(buyer_id),
                seller_id=str(seller_id),
                customer_name=customer_name,
                customer_phone=customer_phone,
                customer_address=customer_address,
                items=json.dumps(order.items_snapshot()),
                total_amount=order.total_amount,
                payment_intent_id=payment_intent_id,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Changes requested by the buyer
    # -------------------------------------------------------------------
    def _assert_pending(self, what: str) -> None:
        if OrderStatus(self.status) != OrderStatus.PENDING:
            raise ValidationError({"status": [f"{what} can only be changed while the order is pending"]})

    def _assert_can_transition(self, target_status: OrderStatus) -> None:
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def replace_items(self, items_data: list[dict]) -> None:
        self._assert_pending("Items")
        new_items = self._build_items(items_data)

        for item in list(self.items):
            self.remove_items(item)
        for item in new_items:
            self.add_items(item)
        self._recalculate_total()
        self.updated_at = datetime.now(UTC)

        self.raise_(
            OrderItemsReplaced(
                order_id=str(self.id),
                items=json.dumps(self.items_snapshot()),
                total_amount=self.total_amount,
            )
        )

    def update_delivery_details(self, customer_name=_UNSET, customer_phone=_UNSET, customer_address=_UNSET) -> None:
        self._assert_pending("Delivery details")

        if customer_name is not _UNSET:
            self.customer_name = customer_name
        if customer_phone is not _UNSET:
            self.customer_phone = customer_phone
        if customer_address is not _UNSET:
            self.customer_address = customer_address
        self.updated_at = datetime.now(UTC)

        self.raise_(
            DeliveryDetailsChanged(
                order_id=str(self.id),
                customer_name=self.customer_name,
                customer_phone=self.customer_phone,
                customer_address=self.customer_address,
            )
        )

    def change_status(self, target: str) -> None:
        """Status change requested through an order update."""
        try:
            target_status = OrderStatus(target)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status: {target}"]}) from None

        current = OrderStatus(self.status)
        if target_status == current:
            return
        if target_status == OrderStatus.PAID:
            raise ValidationError({"status": ["Orders are marked paid only by payment confirmation"]})
        self._assert_can_transition(target_status)

        now = datetime.now(UTC)
        self.status = target_status.value
        self.updated_at = now
        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                from_status=current.value,
                to_status=target_status.value,
                changed_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Payment confirmation
    # -------------------------------------------------------------------
    def mark_paid(self, checkout_session_id=None) -> bool:
        """Record a confirmed payment. Returns False when the order was already settled."""
        current = OrderStatus(self.status)
        if current in _SETTLED:
            return False
        self._assert_can_transition(OrderStatus.PAID)

        now = datetime.now(UTC)
        self.status = OrderStatus.PAID.value
        self.checkout_session_id = checkout_session_id
        self.paid_at = now
        self.updated_at = now

        self.raise_(
            OrderPaid(
                order_id=str(self.id),
                buyer_id=str(self.buyer_id),
                seller_id=str(self.seller_id),
                previous_status=current.value,
                checkout_session_id=checkout_session_id,
                paid_at=now,
            )
        )
        return True


@marketplace.repository(part_of=Order)
class OrderRepository:
    def find_owned(self, order_id, buyer_id) -> Order | None:
        """Ownership filter: someone else's order is indistinguishable from a missing one."""
        orders = self._dao.query.filter(id=order_id, buyer_id=buyer_id).all().items
        return orders[0] if orders else None

    def placed_by(self, buyer_id) -> list[Order]:
        orders = self._dao.query.filter(buyer_id=buyer_id).all().items
        return sorted(orders, key=lambda order: order.created_at)

    def received_by(self, seller_id) -> list[Order]:
        """A seller's orders, newest first."""
        orders = self._dao.query.filter(seller_id=seller_id).all().items
        return sorted(orders, key=lambda order: order.created_at, reverse=True)
