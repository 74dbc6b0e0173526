"""Storefront HTTP API package."""

from storefront.api.admin import admin_router
from storefront.api.errors import register_checkout_error_handlers
from storefront.api.routes import (
    catalogue_router,
    checkout_router,
    order_router,
    payments_router,
    subscription_router,
)

__all__ = [
    "admin_router",
    "catalogue_router",
    "checkout_router",
    "order_router",
    "payments_router",
    "subscription_router",
    "register_checkout_error_handlers",
]
