from marketplace.ordering.api.routes import router

__all__ = ["router"]
