"""Checkout settings resolved from the environment.

Every knob has a default matching the merchant's production setup, so an
empty environment yields a working configuration.
"""

import os
from dataclasses import dataclass, field
from decimal import Decimal

from protean.exceptions import ConfigurationError

# Outlying states and territories carry a flat surcharge on paid shipping.
DEFAULT_TERRITORY_SURCHARGES = {
    "AK": Decimal("8.00"),
    "HI": Decimal("8.00"),
    "PR": Decimal("6.00"),
    "VI": Decimal("10.00"),
    "GU": Decimal("12.00"),
    "AS": Decimal("12.00"),
    "MP": Decimal("12.00"),
}

DEFAULT_ADMIN_KEY = "change-me"


def _env_decimal(name: str, default: str) -> Decimal:
    return Decimal(os.environ.get(name, default))


def _env_int(name: str, default: int) -> int:
    return int(os.environ.get(name, default))


def _env_float(name: str, default: float) -> float:
    return float(os.environ.get(name, default))


def _env_states(name: str, default: str) -> frozenset[str]:
    raw = os.environ.get(name, default)
    return frozenset(part.strip().upper() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class CheckoutSettings:
    """Tunables for quoting and committing checkouts."""

    origin_zip: str = "72120"
    subscriber_discount_rate: Decimal = Decimal("0.10")
    rate_cache_ttl_seconds: float = 600.0
    rate_cache_soft_limit: int = 100
    upstream_timeout_seconds: float = 10.0
    nexus_states: frozenset[str] = frozenset({"AR"})
    territory_surcharges: dict[str, Decimal] = field(default_factory=lambda: dict(DEFAULT_TERRITORY_SURCHARGES))
    low_stock_threshold: int = 5
    admin_key: str = DEFAULT_ADMIN_KEY
    total_tolerance: Decimal = Decimal("0.01")

    @classmethod
    def from_env(cls) -> "CheckoutSettings":
        admin_key = os.environ.get("STOREFRONT_ADMIN_KEY", DEFAULT_ADMIN_KEY)
        if os.environ.get("PROTEAN_ENV") == "production" and admin_key == DEFAULT_ADMIN_KEY:
            raise ConfigurationError("STOREFRONT_ADMIN_KEY must be set in production")

        return cls(
            origin_zip=os.environ.get("STOREFRONT_ORIGIN_ZIP", "72120"),
            subscriber_discount_rate=_env_decimal("STOREFRONT_SUBSCRIBER_DISCOUNT_RATE", "0.10"),
            rate_cache_ttl_seconds=_env_float("STOREFRONT_RATE_CACHE_TTL", 600.0),
            rate_cache_soft_limit=_env_int("STOREFRONT_RATE_CACHE_SIZE", 100),
            upstream_timeout_seconds=_env_float("STOREFRONT_UPSTREAM_TIMEOUT", 10.0),
            nexus_states=_env_states("STOREFRONT_NEXUS_STATES", "AR"),
            low_stock_threshold=_env_int("STOREFRONT_LOW_STOCK_THRESHOLD", 5),
            admin_key=admin_key,
        )
