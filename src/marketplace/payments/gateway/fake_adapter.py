"""Configurable fake payment gateway for development and testing.

No external calls: intents and sessions live in memory. Sessions start
``unpaid``; ``complete_session`` plays the part of the buyer finishing the
hosted checkout page.
"""

from uuid import uuid4

from marketplace.payments.gateway.port import (
    CheckoutLineItem,
    CheckoutSession,
    PaymentGateway,
    PaymentGatewayError,
    PaymentIntent,
)


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Card declined"
        self.calls: list[dict] = []
        self.sessions: dict[str, CheckoutSession] = {}

    def configure(self, should_succeed: bool, failure_reason: str = "Card declined") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def _fail_if_configured(self):
        if not self.should_succeed:
            raise PaymentGatewayError(self.failure_reason)

    def calls_to(self, method: str) -> list[dict]:
        return [call for call in self.calls if call["method"] == method]

    def create_payment_intent(self, amount: int, currency: str, metadata: dict) -> PaymentIntent:
        self.calls.append(
            {
                "method": "create_payment_intent",
                "amount": amount,
                "currency": currency,
                "metadata": dict(metadata),
            }
        )
        self._fail_if_configured()

        intent_id = f"pi_fake_{uuid4().hex[:16]}"
        return PaymentIntent(
            intent_id=intent_id,
            client_secret=f"{intent_id}_secret_{uuid4().hex[:12]}",
            amount=amount,
            currency=currency,
        )

    def create_checkout_session(
        self,
        line_items: list[CheckoutLineItem],
        currency: str,
        success_url: str,
        cancel_url: str,
        metadata: dict,
    ) -> CheckoutSession:
        self.calls.append(
            {
                "method": "create_checkout_session",
                "line_items": list(line_items),
                "currency": currency,
                "success_url": success_url,
                "cancel_url": cancel_url,
                "metadata": dict(metadata),
            }
        )
        self._fail_if_configured()

        session_id = f"cs_fake_{uuid4().hex[:16]}"
        session = CheckoutSession(
            session_id=session_id,
            url=f"https://checkout.fake.test/pay/{session_id}",
            metadata=dict(metadata),
        )
        self.sessions[session_id] = session
        return session

    def complete_session(self, session_id: str) -> CheckoutSession:
        """Mark a session as paid, as if the buyer had finished the checkout page."""
        session = self.sessions[session_id]
        paid = CheckoutSession(
            session_id=session.session_id,
            url=session.url,
            metadata=session.metadata,
            payment_status="paid",
        )
        self.sessions[session_id] = paid
        return paid

    def add_session(self, metadata: dict, payment_status: str = "paid") -> CheckoutSession:
        """Register a session directly, e.g. one whose metadata is incomplete."""
        session_id = f"cs_fake_{uuid4().hex[:16]}"
        session = CheckoutSession(session_id=session_id, url=None, metadata=dict(metadata), payment_status=payment_status)
        self.sessions[session_id] = session
        return session

    def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        self.calls.append({"method": "retrieve_checkout_session", "session_id": session_id})
        self._fail_if_configured()

        try:
            return self.sessions[session_id]
        except KeyError:
            raise PaymentGatewayError(f"No such checkout session: {session_id}") from None
