"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state; nothing is shared across users.
"""

from dataclasses import dataclass, field


@dataclass
class CheckoutState:
    """Tracks one shopper's pass through quote, capture and commit."""

    variant_ids: list[str] = field(default_factory=list)
    variant_id: str | None = None
    quantity: int = 1
    zip_code: str | None = None
    coupon_code: str | None = None
    service_id: str | None = None
    total: str | None = None
    auth_ref: str | None = None
    order_id: str | None = None
