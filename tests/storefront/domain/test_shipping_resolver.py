"""Tests for shipping option resolution."""

from decimal import Decimal

import pytest
from protean.exceptions import ValidationError
from storefront.checkout.errors import UnserviceableDestination
from storefront.config import DEFAULT_TERRITORY_SURCHARGES
from storefront.shipping.cache import RateCache
from storefront.shipping.fake_adapter import FakeRateEstimator
from storefront.shipping.resolver import (
    PICKUP_SERVICE_ID,
    ShippingCostResolver,
    resolve_destination_state,
)


@pytest.fixture()
def estimator():
    return FakeRateEstimator()


@pytest.fixture()
def resolver(estimator):
    return ShippingCostResolver(estimator, RateCache(), origin_zip="72120", surcharges=DEFAULT_TERRITORY_SURCHARGES)


class TestDestination:
    def test_state_from_zip(self):
        assert resolve_destination_state("72120") == "AR"

    def test_explicit_state_wins(self):
        assert resolve_destination_state("72120", "la") == "LA"

    def test_malformed_zip_rejected(self):
        with pytest.raises(ValidationError):
            resolve_destination_state("7212")

    def test_unknown_zip_without_state_is_unserviceable(self):
        with pytest.raises(UnserviceableDestination):
            resolve_destination_state("00100")

    def test_unknown_zip_with_state_is_serviceable(self):
        assert resolve_destination_state("00100", "AR") == "AR"

    def test_foreign_state_code_is_unserviceable(self):
        with pytest.raises(UnserviceableDestination):
            resolve_destination_state("72120", "ZZ")


class TestResolve:
    def test_pickup_is_first_and_free(self, resolver):
        resolution = resolver.resolve("72120", "4oz", 2)
        pickup = resolution.options[0]
        assert pickup.service_id == PICKUP_SERVICE_ID
        assert pickup.cost == Decimal("0.00")
        assert pickup.name == "Hold For Pickup"

    def test_carrier_rates_follow_pickup(self, resolver):
        resolution = resolver.resolve("72120", "4oz", 2)
        assert [option.service_id for option in resolution.options] == [
            "PICKUP",
            "GROUND_ADVANTAGE",
            "PRIORITY_MAIL",
            "PRIORITY_MAIL_EXPRESS",
        ]
        assert resolution.used_fallback_rates is False
        assert resolution.destination_state == "AR"

    def test_package_sent_to_estimator(self, resolver, estimator):
        resolver.resolve("10001", "4oz", 2)
        call = estimator.calls[0]
        assert call["origin_zip"] == "72120"
        assert call["dest_zip"] == "10001"
        assert call["weight_lb"] == Decimal("1.00")
        assert call["dims"] == "8x10x5"

    def test_second_lookup_is_served_from_cache(self, resolver, estimator):
        resolver.resolve("10001", "4oz", 2)
        resolver.resolve("10001", "4oz", 2)
        assert len(estimator.calls) == 1

    def test_zip_plus_four_shares_cache_entry(self, resolver, estimator):
        resolver.resolve("10001", "4oz", 2)
        resolver.resolve("10001-1234", "4oz", 2)
        assert len(estimator.calls) == 1

    def test_estimator_failure_uses_fallback_table(self, resolver, estimator):
        estimator.configure(should_succeed=False)
        resolution = resolver.resolve("72120", "4oz", 2)

        assert resolution.used_fallback_rates is True
        ground = resolution.option("GROUND_ADVANTAGE")
        assert ground.cost == Decimal("9.95")

    def test_fallback_is_not_cached(self, resolver, estimator):
        estimator.configure(should_succeed=False)
        resolver.resolve("72120", "4oz", 2)
        estimator.configure(should_succeed=True)

        resolution = resolver.resolve("72120", "4oz", 2)

        assert resolution.used_fallback_rates is False
        assert len(estimator.calls) == 2

    def test_territory_surcharge_on_paid_options_only(self, resolver):
        resolution = resolver.resolve("99501", "4oz", 1)
        assert resolution.option(PICKUP_SERVICE_ID).cost == Decimal("0.00")
        ground = resolution.option("GROUND_ADVANTAGE")
        assert ground.surcharge == Decimal("8.00")
        assert ground.cost == Decimal("16.45")

    def test_unknown_service_rejected(self, resolver):
        resolution = resolver.resolve("72120", "4oz", 1)
        with pytest.raises(ValidationError):
            resolution.option("TELEPORT")
