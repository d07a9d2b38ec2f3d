"""Exception handlers mapping domain errors onto the ``{success, message}`` envelope."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from checkout.shared.exceptions import DeliveryError, PersistenceError, first_error_message

logger = structlog.get_logger(__name__)

_FAILURE_MESSAGES = {
    "create_order": "Failed to create order",
    "get_order": "Failed to fetch order",
    "list_orders": "Failed to fetch orders",
    "update_email_status": "Failed to update email status",
    "send_order_email": "Failed to send email",
    "test_email_connection": "Email connection failed",
    "list_products": "Failed to fetch products",
    "get_product": "Failed to fetch product",
    "create_product": "Failed to create product",
    "update_inventory": "Failed to update inventory",
    "seed_products": "Failed to seed products",
}


def _envelope(status_code: int, message: str, error: str | None = None) -> JSONResponse:
    content = {"success": False, "message": message}
    if error is not None:
        content["error"] = error
    return JSONResponse(status_code=status_code, content=content)


def _failure_message(request: Request) -> str:
    endpoint = request.scope.get("endpoint")
    return _FAILURE_MESSAGES.get(getattr(endpoint, "__name__", ""), "Internal server error")


def _not_found_message(exc: ObjectNotFoundError) -> str:
    messages = getattr(exc, "messages", None)
    if isinstance(messages, str) and messages:
        return messages
    if isinstance(messages, dict):
        return first_error_message(exc)
    return "Not found"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return _envelope(400, first_error_message(exc))

    @app.exception_handler(ObjectNotFoundError)
    async def not_found_handler(request: Request, exc: ObjectNotFoundError):
        return _envelope(404, _not_found_message(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if not errors:
            return _envelope(400, "Invalid request body")
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ())[1:])
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
        return _envelope(400, message)

    @app.exception_handler(PersistenceError)
    async def persistence_error_handler(request: Request, exc: PersistenceError):
        logger.error("Order persistence failed", path=request.url.path, error=str(exc))
        return _envelope(500, "Failed to create order", str(exc))

    @app.exception_handler(DeliveryError)
    async def delivery_error_handler(request: Request, exc: DeliveryError):
        return _envelope(500, "Failed to send email", str(exc))

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error", path=request.url.path, method=request.method)
        return _envelope(500, _failure_message(request), str(exc))
