from marketplace.checkout.api.routes import router

__all__ = ["router"]
