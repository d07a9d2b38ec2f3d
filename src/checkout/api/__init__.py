"""Checkout domain API package."""

from checkout.api.errors import register_exception_handlers
from checkout.api.routes import email_router, order_router, product_router

__all__ = ["order_router", "email_router", "product_router", "register_exception_handlers"]
