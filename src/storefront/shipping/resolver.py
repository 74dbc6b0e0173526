"""Shipping cost resolution.

Turns (destination, variant size, quantity) into the list of shipping
options offered at checkout:

1. The destination must be a recognised domestic state or territory.
2. The package is sized from the variant and quantity.
3. Live carrier rates come from the cache or the estimator. If the
   estimator fails for any reason the static table is used instead and
   the result is flagged, so checkout never fails on a rate lookup.
4. Territory surcharges are added to every paid option.
5. Free "Hold For Pickup" is always offered first.
"""

from dataclasses import dataclass, field
from decimal import Decimal

import structlog
from protean.exceptions import ValidationError

from storefront.checkout.errors import UnserviceableDestination
from storefront.shared.jurisdiction import DOMESTIC_STATES, is_valid_zip, normalize_state, state_for_zip
from storefront.shared.money import ZERO, to_money
from storefront.shipping.cache import RateCache, rate_cache_key
from storefront.shipping.packaging import package_for
from storefront.shipping.port import PackageSpec, RateEstimator, RateOption

logger = structlog.get_logger(__name__)

PICKUP_SERVICE_ID = "PICKUP"

PICKUP_OPTION = RateOption(
    service_id=PICKUP_SERVICE_ID,
    name="Hold For Pickup",
    cost=ZERO,
    eta="Hold for pickup",
)

FALLBACK_RATES = (
    RateOption("GROUND_ADVANTAGE", "Ground Advantage", Decimal("9.95"), "2-5 business days"),
    RateOption("PRIORITY_MAIL", "Priority Mail", Decimal("18.50"), "1-3 business days"),
    RateOption("PRIORITY_MAIL_EXPRESS", "Priority Express", Decimal("49.95"), "1-2 business days"),
)


@dataclass(frozen=True)
class ShippingOption:
    service_id: str
    name: str
    cost: Decimal
    eta: str
    surcharge: Decimal = ZERO

    @property
    def is_pickup(self) -> bool:
        return self.service_id == PICKUP_SERVICE_ID


@dataclass(frozen=True)
class ShippingResolution:
    destination_zip: str
    destination_state: str
    package: PackageSpec
    options: tuple[ShippingOption, ...] = field(default_factory=tuple)
    used_fallback_rates: bool = False

    def option(self, service_id: str) -> ShippingOption:
        for option in self.options:
            if option.service_id == service_id:
                return option
        raise ValidationError({"shipping_service_id": [f"Unknown shipping service '{service_id}'"]})


def resolve_destination_state(dest_zip: str, state: str | None = None) -> str:
    """Validate the destination and return its two-letter state.

    An explicit state wins over the postal code lookup.
    """
    if not is_valid_zip(dest_zip):
        raise ValidationError({"zip_code": ["ZIP code must be 5 digits or ZIP+4"]})

    resolved = normalize_state(state) or state_for_zip(dest_zip)
    if resolved is None:
        raise UnserviceableDestination(dest_zip, "postal code is outside every serviceable state")
    if resolved not in DOMESTIC_STATES:
        raise UnserviceableDestination(dest_zip, f"'{resolved}' is not a serviceable state or territory")
    return resolved


class ShippingCostResolver:
    def __init__(
        self,
        estimator: RateEstimator,
        cache: RateCache,
        origin_zip: str = "72120",
        surcharges: dict[str, Decimal] | None = None,
    ) -> None:
        self.estimator = estimator
        self.cache = cache
        self.origin_zip = origin_zip
        self.surcharges = {state: to_money(amount) for state, amount in (surcharges or {}).items()}

    def _carrier_rates(self, dest_zip: str, package: PackageSpec) -> tuple[list[RateOption], bool]:
        key = rate_cache_key(self.origin_zip, dest_zip, package)
        cached = self.cache.get(key)
        if cached is not None:
            return list(cached), False

        try:
            rates = self.estimator.estimate(self.origin_zip, dest_zip, package)
        except Exception as exc:
            # Any estimator failure degrades to the static table
            logger.warning(
                "Live shipping rates unavailable, using fallback table",
                dest_zip=dest_zip,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return list(FALLBACK_RATES), True

        rates = tuple(option for option in rates if option.service_id != PICKUP_SERVICE_ID)
        self.cache.put(key, rates)
        return list(rates), False

    def resolve(
        self,
        dest_zip: str,
        size_label: str | None,
        quantity: int,
        size_oz: int | None = None,
        state: str | None = None,
    ) -> ShippingResolution:
        destination_state = resolve_destination_state(dest_zip, state)
        package = package_for(size_label, quantity, size_oz)
        carrier_rates, used_fallback = self._carrier_rates(dest_zip[:5], package)

        surcharge = self.surcharges.get(destination_state, ZERO)
        options = [
            ShippingOption(
                service_id=PICKUP_OPTION.service_id,
                name=PICKUP_OPTION.name,
                cost=PICKUP_OPTION.cost,
                eta=PICKUP_OPTION.eta,
            )
        ]
        for rate in carrier_rates:
            options.append(
                ShippingOption(
                    service_id=rate.service_id,
                    name=rate.name,
                    cost=to_money(to_money(rate.cost) + surcharge),
                    eta=rate.eta,
                    surcharge=surcharge,
                )
            )

        return ShippingResolution(
            destination_zip=dest_zip,
            destination_state=destination_state,
            package=package,
            options=tuple(options),
            used_fallback_rates=used_fallback,
        )
