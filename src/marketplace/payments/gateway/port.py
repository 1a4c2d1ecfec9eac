"""Payment gateway port (abstract interface).

The order lifecycle and the checkout bridge only talk to this contract, so the
fake adapter (dev/test) and the Stripe adapter (production) are
interchangeable. Provider failures surface as ``PaymentGatewayError`` and are
not recovered locally.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


class PaymentGatewayError(Exception):
    """The provider rejected a call or could not be reached."""


@dataclass(frozen=True)
class PaymentIntent:
    intent_id: str
    client_secret: str
    amount: int
    currency: str


@dataclass(frozen=True)
class CheckoutLineItem:
    """One line of a hosted checkout page; ``unit_amount`` is in settlement minor units."""

    name: str
    unit_amount: int
    quantity: int


@dataclass(frozen=True)
class CheckoutSession:
    session_id: str
    url: str | None
    metadata: dict = field(default_factory=dict)
    payment_status: str = "unpaid"

    @property
    def is_paid(self) -> bool:
        return self.payment_status in ("paid", "no_payment_required")


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_payment_intent(self, amount: int, currency: str, metadata: dict) -> PaymentIntent:
        """Open an intent to collect ``amount`` minor units of ``currency``."""
        ...

    @abstractmethod
    def create_checkout_session(
        self,
        line_items: list[CheckoutLineItem],
        currency: str,
        success_url: str,
        cancel_url: str,
        metadata: dict,
    ) -> CheckoutSession:
        """Open a hosted checkout page and return where to redirect the buyer."""
        ...

    @abstractmethod
    def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        """Fetch a checkout session, including the metadata it was opened with."""
        ...
