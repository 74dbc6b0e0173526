"""Composition of a CheckoutEngine from settings and adapters."""

from protean.domain import Domain

from storefront.checkout.engine import CheckoutEngine
from storefront.config import CheckoutSettings
from storefront.notifications import build_notification_relay
from storefront.payments import build_payment_verifier
from storefront.pricing.discounts import DiscountResolver
from storefront.shipping import build_rate_estimator
from storefront.shipping.cache import RateCache
from storefront.shipping.resolver import ShippingCostResolver
from storefront.tax import build_tax_estimator
from storefront.tax.resolver import TaxResolver


def build_engine(
    domain: Domain,
    settings: CheckoutSettings | None = None,
    rate_estimator=None,
    tax_estimator=None,
    verifier=None,
    notifier=None,
    cache: RateCache | None = None,
    clock=None,
) -> CheckoutEngine:
    """Wire an engine; any collaborator not passed in comes from the environment."""
    settings = settings or CheckoutSettings.from_env()
    timeout = settings.upstream_timeout_seconds

    shipping = ShippingCostResolver(
        estimator=rate_estimator or build_rate_estimator(timeout=timeout),
        cache=cache or RateCache(settings.rate_cache_ttl_seconds, settings.rate_cache_soft_limit),
        origin_zip=settings.origin_zip,
        surcharges=settings.territory_surcharges,
    )
    taxes = TaxResolver(
        estimator=tax_estimator or build_tax_estimator(),
        nexus_states=settings.nexus_states,
    )
    return CheckoutEngine(
        domain=domain,
        settings=settings,
        shipping=shipping,
        taxes=taxes,
        verifier=verifier or build_payment_verifier(timeout=timeout),
        notifier=notifier or build_notification_relay(),
        discounts=DiscountResolver(settings.subscriber_discount_rate),
        clock=clock,
    )
