"""Order lifecycle: the buyer-facing operations on orders.

``OrderLifecycle`` is built per request with the process settings and the
payment gateway; it never looks either of them up on its own.
"""

import json
from dataclasses import dataclass

from protean.utils.globals import current_domain

from marketplace.catalogue.lookup import find_product
from marketplace.config import Settings
from marketplace.errors import BadRequestError, NotFoundError
from marketplace.identity.lookup import find_seller
from marketplace.ordering.changes import DeleteOrder, UpdateOrder
from marketplace.ordering.order import Order, order_total
from marketplace.ordering.placement import PlaceOrder
from marketplace.payments.currency import to_minor_units
from marketplace.payments.gateway.port import PaymentGateway
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PlacedOrder:
    order_id: str
    client_secret: str


class OrderLifecycle:
    def __init__(self, settings: Settings, gateway: PaymentGateway):
        self.settings = settings
        self.gateway = gateway

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    @staticmethod
    def _snapshot_items(items: list[dict] | None) -> list[dict]:
        """Validate cart lines and fill in missing product names from the catalogue."""
        if not items:
            raise BadRequestError("An order needs at least one item.")

        snapshot = []
        for item in items:
            product_id = item.get("product_id")
            quantity = item.get("quantity")
            unit_price = item.get("unit_price")

            if not product_id:
                raise BadRequestError("Every item needs a product_id.")
            if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
                raise BadRequestError(f"Quantity for product {product_id} must be a positive whole number.")
            if isinstance(unit_price, bool) or not isinstance(unit_price, int | float) or unit_price < 0:
                raise BadRequestError(f"Unit price for product {product_id} cannot be negative.")

            product_name = item.get("product_name")
            if not product_name:
                product = find_product(product_id)
                if product is None:
                    raise BadRequestError(f"Product {product_id} is not in the catalogue.")
                product_name = product.name

            snapshot.append(
                {
                    "product_id": str(product_id),
                    "product_name": product_name,
                    "quantity": quantity,
                    "unit_price": float(unit_price),
                }
            )
        return snapshot

    @staticmethod
    def _repository():
        return current_domain.repository_for(Order)

    # -------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------
    def place_order(
        self,
        buyer_id,
        seller_id,
        items: list[dict],
        customer_name=None,
        customer_phone=None,
        customer_address=None,
    ) -> PlacedOrder:
        """Open a payment intent for the cart and persist the order as pending.

        The seller is resolved first so that no intent is opened for an order
        that could never be fulfilled.
        """
        snapshot = self._snapshot_items(items)

        if find_seller(seller_id) is None:
            raise NotFoundError(f"No seller with ID {seller_id}.")

        total = order_total(snapshot)
        amount = to_minor_units(total, self.settings.exchange_rate)
        intent = self.gateway.create_payment_intent(
            amount=amount,
            currency=self.settings.settlement_currency,
            metadata={"buyer_id": str(buyer_id), "seller_id": str(seller_id)},
        )

        order_id = current_domain.process(
            PlaceOrder(
                buyer_id=buyer_id,
                seller_id=seller_id,
                customer_name=customer_name,
                customer_phone=customer_phone,
                customer_address=customer_address,
                items=json.dumps(snapshot),
                payment_intent_id=intent.intent_id,
            ),
            asynchronous=False,
        )
        logger.info(
            "order_placed",
            order_id=order_id,
            seller_id=str(seller_id),
            total_amount=total,
            settlement_amount=amount,
            currency=self.settings.settlement_currency,
        )
        return PlacedOrder(order_id=order_id, client_secret=intent.client_secret)

    def get_order(self, buyer_id, order_id) -> Order:
        order = self._repository().find_owned(order_id, buyer_id)
        if order is None:
            raise NotFoundError(f"No order with ID {order_id}.")
        return order

    def list_for_buyer(self, buyer_id) -> list[Order]:
        return self._repository().placed_by(buyer_id)

    def list_for_seller(self, seller_id) -> list[Order]:
        if not seller_id:
            raise BadRequestError("Please provide the seller id.")
        return self._repository().received_by(seller_id)

    def update_order(
        self,
        buyer_id,
        order_id,
        items: list[dict] | None = None,
        customer_name=None,
        customer_phone=None,
        customer_address=None,
        status=None,
    ) -> Order:
        # Ownership is checked before the cart is validated against the catalogue
        self.get_order(buyer_id, order_id)
        snapshot = self._snapshot_items(items) if items is not None else None

        current_domain.process(
            UpdateOrder(
                order_id=order_id,
                buyer_id=buyer_id,
                items=json.dumps(snapshot) if snapshot is not None else None,
                customer_name=customer_name,
                customer_phone=customer_phone,
                customer_address=customer_address,
                status=status,
            ),
            asynchronous=False,
        )
        return self.get_order(buyer_id, order_id)

    def delete_order(self, buyer_id, order_id) -> None:
        current_domain.process(DeleteOrder(order_id=order_id, buyer_id=buyer_id), asynchronous=False)
