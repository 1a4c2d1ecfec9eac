"""FastAPI application factory.

``create_app`` wires settings, adapters, routers and the error boundary. It
does not initialize the domain; the process entry point (``app.py``) or the
test suite does that once.
"""

from uuid import uuid4

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from marketplace.config import Settings, get_settings
from marketplace.domain import marketplace
from marketplace.errors import register_error_handlers
from marketplace.notifications.channel import build_mailer, set_mailer
from marketplace.notifications.channel.email_port import EmailPort
from marketplace.payments.gateway import build_gateway, set_gateway
from marketplace.payments.gateway.port import PaymentGateway
from marketplace.utils.logging import add_context, clear_context


def create_app(
    settings: Settings | None = None,
    gateway: PaymentGateway | None = None,
    mailer: EmailPort | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    set_gateway(gateway or build_gateway(settings))
    set_mailer(mailer or build_mailer(settings))

    app = FastAPI(
        title="WelwExpress API",
        description="Multi-store marketplace: accounts, stores, catalogue, orders and checkout",
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the marketplace domain context and tag log lines for each request."""
        add_context(request_id=uuid4().hex[:12], path=request.url.path, method=request.method)
        try:
            with marketplace.domain_context():
                return await call_next(request)
        finally:
            clear_context()

    from marketplace.catalogue.api import router as product_router
    from marketplace.checkout.api import router as checkout_router
    from marketplace.identity.api import auth_router, user_router
    from marketplace.notifications.api import router as notification_router
    from marketplace.ordering.api import router as order_router
    from marketplace.stores.api import router as store_router

    api = APIRouter(prefix=settings.api_prefix)
    for router in (
        auth_router,
        user_router,
        store_router,
        product_router,
        order_router,
        checkout_router,
        notification_router,
    ):
        api.include_router(router)
    app.include_router(api)

    register_error_handlers(app)

    @app.get("/health")
    async def health():
        return JSONResponse(
            content={
                "status": "ok",
                "domain": marketplace.name,
                "environment": settings.environment,
            }
        )

    return app
