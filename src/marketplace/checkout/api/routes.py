"""FastAPI routes for the hosted checkout and its provider callbacks.

``/success`` and ``/cancel`` are called by the browser redirect from the
payment provider, so they carry no bearer token.
"""

from fastapi import APIRouter, Depends

from marketplace.checkout.api.schemas import (
    CheckoutUrlResponse,
    MessageResponse,
    OpenCheckoutRequest,
    PaymentConfirmedResponse,
)
from marketplace.checkout.bridge import CheckoutBridge
from marketplace.dependencies import checkout_bridge, require
from marketplace.identity.authorization import Capability, Principal

router = APIRouter(tags=["checkout"])


@router.post("/checkout", response_model=CheckoutUrlResponse)
def open_checkout(
    body: OpenCheckoutRequest,
    principal: Principal = Depends(require(Capability.MANAGE_OWN_ORDERS)),
    bridge: CheckoutBridge = Depends(checkout_bridge),
) -> CheckoutUrlResponse:
    return CheckoutUrlResponse(url=bridge.open_checkout(principal.user_id, body.order_id))


@router.get("/success", response_model=PaymentConfirmedResponse)
def payment_success(
    session_id: str | None = None,
    bridge: CheckoutBridge = Depends(checkout_bridge),
) -> PaymentConfirmedResponse:
    confirmation = bridge.handle_payment_success(session_id)
    return PaymentConfirmedResponse(order_id=confirmation.order_id, message=confirmation.message)


@router.get("/cancel", response_model=MessageResponse)
def payment_cancel(bridge: CheckoutBridge = Depends(checkout_bridge)) -> MessageResponse:
    return MessageResponse(message=bridge.handle_payment_cancel())
