"""FastAPI routes for orders.

Thin adapters over ``OrderLifecycle``; the buyer is always the authenticated
caller, never a value from the request body.
"""

from fastapi import APIRouter, Depends

from marketplace.dependencies import order_lifecycle, require
from marketplace.errors import ForbiddenError
from marketplace.identity.authorization import Capability, Principal
from marketplace.ordering.api.schemas import (
    CreateOrderRequest,
    OrderItemResponse,
    OrderListResponse,
    OrderResponse,
    PlacedOrderResponse,
    StatusResponse,
    UpdateOrderRequest,
)
from marketplace.ordering.lifecycle import OrderLifecycle
from marketplace.ordering.order import Order

router = APIRouter(prefix="/orders", tags=["orders"])

_own_orders = require(Capability.MANAGE_OWN_ORDERS)


def order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        order_id=str(order.id),
        buyer_id=str(order.buyer_id),
        seller_id=str(order.seller_id),
        customer_name=order.customer_name,
        customer_phone=order.customer_phone,
        customer_address=order.customer_address,
        items=[OrderItemResponse(**item) for item in order.items_snapshot()],
        total_amount=order.total_amount,
        status=order.status,
        payment_intent_id=order.payment_intent_id,
        created_at=str(order.created_at) if order.created_at else None,
        updated_at=str(order.updated_at) if order.updated_at else None,
    )


@router.post("", status_code=201, response_model=PlacedOrderResponse)
def create_order(
    body: CreateOrderRequest,
    principal: Principal = Depends(require(Capability.PLACE_ORDERS)),
    lifecycle: OrderLifecycle = Depends(order_lifecycle),
) -> PlacedOrderResponse:
    placed = lifecycle.place_order(
        buyer_id=principal.user_id,
        seller_id=body.seller_id,
        items=[item.model_dump() for item in body.items],
        customer_name=body.customer_name,
        customer_phone=body.customer_phone,
        customer_address=body.customer_address,
    )
    return PlacedOrderResponse(order_id=placed.order_id, client_secret=placed.client_secret)


@router.get("", response_model=OrderListResponse)
def list_my_orders(
    principal: Principal = Depends(_own_orders),
    lifecycle: OrderLifecycle = Depends(order_lifecycle),
) -> OrderListResponse:
    orders = lifecycle.list_for_buyer(principal.user_id)
    return OrderListResponse(orders=[order_response(o) for o in orders])


@router.get("/seller", response_model=OrderListResponse)
def list_seller_orders(
    seller_id: str | None = None,
    principal: Principal = Depends(require(Capability.VIEW_SELLER_ORDERS)),
    lifecycle: OrderLifecycle = Depends(order_lifecycle),
) -> OrderListResponse:
    """A seller's incoming orders, newest first."""
    if seller_id and seller_id != principal.user_id and not principal.is_admin:
        raise ForbiddenError("Access denied: you can only list orders placed with you.")
    orders = lifecycle.list_for_seller(seller_id)
    return OrderListResponse(orders=[order_response(o) for o in orders])


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: str,
    principal: Principal = Depends(_own_orders),
    lifecycle: OrderLifecycle = Depends(order_lifecycle),
) -> OrderResponse:
    return order_response(lifecycle.get_order(principal.user_id, order_id))


@router.patch("/{order_id}", response_model=OrderResponse)
def update_order(
    order_id: str,
    body: UpdateOrderRequest,
    principal: Principal = Depends(_own_orders),
    lifecycle: OrderLifecycle = Depends(order_lifecycle),
) -> OrderResponse:
    order = lifecycle.update_order(
        buyer_id=principal.user_id,
        order_id=order_id,
        items=[item.model_dump() for item in body.items] if body.items is not None else None,
        customer_name=body.customer_name,
        customer_phone=body.customer_phone,
        customer_address=body.customer_address,
        status=body.status,
    )
    return order_response(order)


@router.delete("/{order_id}", response_model=StatusResponse)
def delete_order(
    order_id: str,
    principal: Principal = Depends(_own_orders),
    lifecycle: OrderLifecycle = Depends(order_lifecycle),
) -> StatusResponse:
    lifecycle.delete_order(principal.user_id, order_id)
    return StatusResponse(status="deleted")
