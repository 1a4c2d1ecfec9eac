from marketplace.catalogue.api.routes import router

__all__ = ["router"]
