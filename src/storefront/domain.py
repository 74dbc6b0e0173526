"""Storefront bounded context: catalogue, coupons, subscriptions and orders.

A single domain so that an order commit (order insert, stock decrement and
coupon redemption) runs inside one Unit of Work.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
