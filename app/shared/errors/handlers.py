"""
Centralized error handlers for FastAPI.

Maps interface and domain errors to HTTP responses.
No stack traces or internal details are exposed to clients.
All error responses use the ErrorResponse schema.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.domain.orders.errors import ConcurrentModificationError, OrderMappingError
from app.domain.pages.errors import PageMappingError
from app.domain.products.errors import ProductMappingError
from app.domain.subscriptions.errors import BillingProviderError, SubscriptionMappingError
from app.shared.errors.exceptions import (
    ActionFailedError,
    ForbiddenError,
    NotAuthenticatedError,
)

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_401 = 401
HTTP_403 = 403
HTTP_409 = 409
HTTP_500 = 500


def _error_response(status_code: int, error: str, detail: str | None = None) -> JSONResponse:
    """Build a consistent JSON error response."""
    body: dict[str, str | None] = {"error": error}
    if detail:
        body["detail"] = detail
    return JSONResponse(status_code=status_code, content=body)


def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(ActionFailedError)
    async def handle_action_failed(
        _request: Request, exc: ActionFailedError
    ) -> JSONResponse:
        """Handle business rule refusals reported by use cases."""
        logger.info("Action refused: %s", exc.message)
        return _error_response(HTTP_400, "Action refused", exc.message)

    @app.exception_handler(NotAuthenticatedError)
    async def handle_not_authenticated(
        _request: Request, exc: NotAuthenticatedError
    ) -> JSONResponse:
        """Handle requests without a user identity."""
        return _error_response(HTTP_401, "Not authenticated", "Non authentifié")

    @app.exception_handler(ForbiddenError)
    async def handle_forbidden(_request: Request, exc: ForbiddenError) -> JSONResponse:
        """Handle users without the required role."""
        logger.warning("Forbidden: %s", exc)
        return _error_response(HTTP_403, "Forbidden", "Accès non autorisé")

    @app.exception_handler(ConcurrentModificationError)
    async def handle_concurrent_modification(
        _request: Request, exc: ConcurrentModificationError
    ) -> JSONResponse:
        """Handle optimistic lock conflicts on orders."""
        logger.warning("Concurrent modification on order %s", exc.order_id)
        return _error_response(HTTP_409, "Conflict", exc.message)

    @app.exception_handler(BillingProviderError)
    async def handle_billing_provider(
        _request: Request, exc: BillingProviderError
    ) -> JSONResponse:
        """Handle rejected payment provider webhooks."""
        logger.warning("Billing provider error: %s", exc.reason)
        return _error_response(HTTP_400, "Invalid webhook")

    @app.exception_handler(SubscriptionMappingError)
    @app.exception_handler(OrderMappingError)
    @app.exception_handler(PageMappingError)
    @app.exception_handler(ProductMappingError)
    async def handle_mapping(_request: Request, exc: Exception) -> JSONResponse:
        """Handle corrupt persisted data. Never exposes the row content."""
        logger.error("Persisted data mapping error: %s", exc)
        return _error_response(HTTP_500, "Internal server error")

    @app.exception_handler(Exception)
    async def handle_unexpected(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500, "Internal server error")
