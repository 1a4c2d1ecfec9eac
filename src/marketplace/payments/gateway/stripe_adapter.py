"""Stripe payment gateway adapter.

Uses the stripe-python SDK with a per-call API key, so several gateways with
different keys can coexist in one process.
"""

import stripe

from marketplace.payments.gateway.port import (
    CheckoutLineItem,
    CheckoutSession,
    PaymentGateway,
    PaymentGatewayError,
    PaymentIntent,
)


class StripeGateway(PaymentGateway):
    """Production Stripe gateway adapter."""

    def __init__(self, api_key: str, payment_method_types: tuple[str, ...] = ("card",)) -> None:
        self.api_key = api_key
        self.payment_method_types = list(payment_method_types)

    def create_payment_intent(self, amount: int, currency: str, metadata: dict) -> PaymentIntent:
        try:
            intent = stripe.PaymentIntent.create(
                api_key=self.api_key,
                amount=amount,
                currency=currency,
                metadata=metadata,
            )
        except stripe.StripeError as exc:
            raise PaymentGatewayError(str(exc)) from exc

        return PaymentIntent(
            intent_id=intent.id,
            client_secret=intent.client_secret,
            amount=intent.amount,
            currency=intent.currency,
        )

    def create_checkout_session(
        self,
        line_items: list[CheckoutLineItem],
        currency: str,
        success_url: str,
        cancel_url: str,
        metadata: dict,
    ) -> CheckoutSession:
        try:
            session = stripe.checkout.Session.create(
                api_key=self.api_key,
                payment_method_types=self.payment_method_types,
                mode="payment",
                line_items=[
                    {
                        "price_data": {
                            "currency": currency,
                            "product_data": {"name": item.name},
                            "unit_amount": item.unit_amount,
                        },
                        "quantity": item.quantity,
                    }
                    for item in line_items
                ],
                success_url=success_url,
                cancel_url=cancel_url,
                metadata=metadata,
            )
        except stripe.StripeError as exc:
            raise PaymentGatewayError(str(exc)) from exc

        return self._to_session(session)

    def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        try:
            session = stripe.checkout.Session.retrieve(session_id, api_key=self.api_key)
        except stripe.StripeError as exc:
            raise PaymentGatewayError(str(exc)) from exc

        return self._to_session(session)

    @staticmethod
    def _to_session(session) -> CheckoutSession:
        return CheckoutSession(
            session_id=session.id,
            url=session.url,
            metadata=dict(session.metadata or {}),
            payment_status=session.payment_status,
        )
