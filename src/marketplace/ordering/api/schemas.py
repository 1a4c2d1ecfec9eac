"""Pydantic request/response models for the order API.

Totals are never accepted from the client: ``total_amount`` is tolerated in
requests for compatibility and ignored.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Request Models
# ---------------------------------------------------------------------------
class OrderItemRequest(BaseModel):
    product_id: str
    product_name: str | None = Field(default=None, max_length=255)
    quantity: int = Field(..., gt=0)
    unit_price: float = Field(..., ge=0, description="Unit price in Kwanza at the time of ordering")


class CreateOrderRequest(BaseModel):
    seller_id: str
    customer_name: str | None = Field(default=None, max_length=100)
    customer_phone: str | None = Field(default=None, max_length=30)
    customer_address: str | None = Field(default=None, max_length=500)
    items: list[OrderItemRequest] = Field(..., min_length=1)
    total_amount: float | None = None


class UpdateOrderRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    items: list[OrderItemRequest] | None = Field(default=None, min_length=1)
    customer_name: str | None = Field(default=None, max_length=100)
    customer_phone: str | None = Field(default=None, max_length=30)
    customer_address: str | None = Field(default=None, max_length=500)
    status: Literal["pending", "paid", "cancelled", "shipped"] | None = None
    total_amount: float | None = None


# ---------------------------------------------------------------------------
# Response Models
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"


class PlacedOrderResponse(BaseModel):
    order_id: str
    client_secret: str


class OrderItemResponse(BaseModel):
    product_id: str
    product_name: str
    quantity: int
    unit_price: float


class OrderResponse(BaseModel):
    order_id: str
    buyer_id: str
    seller_id: str
    customer_name: str | None = None
    customer_phone: str | None = None
    customer_address: str | None = None
    items: list[OrderItemResponse]
    total_amount: float
    status: str
    payment_intent_id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]
