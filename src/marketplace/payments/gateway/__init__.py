"""Payment gateway factory.

``build_gateway(settings)`` picks the adapter for a process: Stripe when a
secret key is configured, the in-memory fake otherwise. ``get_gateway()`` /
``set_gateway()`` hold the instance the HTTP layer hands to the order
lifecycle and the checkout bridge.
"""

from marketplace.config import Settings
from marketplace.payments.gateway.fake_adapter import FakeGateway
from marketplace.payments.gateway.port import PaymentGateway
from marketplace.payments.gateway.stripe_adapter import StripeGateway
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)

_current_gateway: PaymentGateway | None = None


def build_gateway(settings: Settings) -> PaymentGateway:
    if settings.stripe_secret_key is not None:
        return StripeGateway(api_key=settings.stripe_secret_key.get_secret_value())

    if settings.environment == "production":
        logger.warning("stripe_not_configured", detail="falling back to the fake payment gateway")
    return FakeGateway()


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway. Defaults to FakeGateway."""
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = FakeGateway()
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    global _current_gateway
    _current_gateway = None
