from marketplace.stores.api.routes import router

__all__ = ["router"]
