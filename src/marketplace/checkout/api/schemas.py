"""Pydantic request/response models for the checkout API."""

from pydantic import BaseModel


class OpenCheckoutRequest(BaseModel):
    order_id: str


class CheckoutUrlResponse(BaseModel):
    url: str


class PaymentConfirmedResponse(BaseModel):
    order_id: str
    message: str


class MessageResponse(BaseModel):
    message: str
