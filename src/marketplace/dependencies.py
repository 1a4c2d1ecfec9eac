"""FastAPI dependencies shared by every router.

Settings live on ``app.state`` (set by ``create_app``); the bearer token is
verified here and turned into a ``Principal`` before any handler runs.
"""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from marketplace.checkout.bridge import CheckoutBridge
from marketplace.config import Settings
from marketplace.errors import UnauthenticatedError
from marketplace.identity.authorization import Capability, Principal, authorize
from marketplace.identity.tokens import decode_token
from marketplace.ordering.lifecycle import OrderLifecycle
from marketplace.payments.gateway import get_gateway

_bearer = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(get_app_settings),
) -> Principal:
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError("Access denied: missing bearer token.")
    return decode_token(credentials.credentials, settings)


def require(capability: Capability):
    """Dependency factory: the caller must hold ``capability``."""

    def _require(principal: Principal = Depends(current_principal)) -> Principal:
        return authorize(principal, capability)

    return _require


def order_lifecycle(settings: Settings = Depends(get_app_settings)) -> OrderLifecycle:
    return OrderLifecycle(settings=settings, gateway=get_gateway())


def checkout_bridge(settings: Settings = Depends(get_app_settings)) -> CheckoutBridge:
    return CheckoutBridge(settings=settings, gateway=get_gateway())
