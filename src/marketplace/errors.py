"""Error taxonomy and the HTTP error boundary.

Domain code raises the exceptions below (or protean's own ``ValidationError`` /
``ObjectNotFoundError``); ``register_error_handlers`` turns all of them into
JSON responses in one place. Anything unexpected becomes a 500 with a generic
message, and the details only go to the log.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from marketplace.utils.logging import get_logger

logger = get_logger(__name__)
logging.getLogger("protean").setLevel(logging.WARNING)

GENERIC_ERROR_MESSAGE = "Something went wrong, try again later."


class MarketplaceError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(MarketplaceError):
    status_code = 400


class NotFoundError(MarketplaceError):
    status_code = 404


class UnauthenticatedError(MarketplaceError):
    status_code = 401


class ForbiddenError(UnauthenticatedError):
    """Authenticated, but the role does not carry the required capability."""

    status_code = 403


async def _marketplace_error(request: Request, exc: MarketplaceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return JSONResponse(status_code=400, content={"detail": "; ".join(messages)})


async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path, method=request.method)
    return JSONResponse(status_code=500, content={"detail": GENERIC_ERROR_MESSAGE})


def register_error_handlers(app: FastAPI) -> None:
    """Install protean's handlers plus the marketplace taxonomy on ``app``."""
    register_exception_handlers(app)
    app.add_exception_handler(MarketplaceError, _marketplace_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(Exception, _unexpected_error)
