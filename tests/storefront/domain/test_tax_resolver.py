"""Tests for sales tax resolution."""

from decimal import Decimal

import pytest
from storefront.checkout.errors import UpstreamUnavailable
from storefront.tax.port import TaxEstimator
from storefront.tax.resolver import TaxResolver, taxable_amount
from storefront.tax.table_adapter import TableTaxEstimator, describe_rate


class BrokenEstimator(TaxEstimator):
    def estimate(self, taxable_amount, jurisdiction):
        raise TimeoutError("tax service timed out")


@pytest.fixture()
def resolver():
    return TaxResolver(TableTaxEstimator(), nexus_states={"AR"})


class TestResolve:
    def test_taxable_amount_includes_shipping(self):
        assert taxable_amount(Decimal("13.98"), Decimal("9.95")) == Decimal("23.93")

    def test_nexus_state_is_taxed(self, resolver):
        quote = resolver.resolve(Decimal("13.98"), Decimal("9.95"), "72120")
        assert quote.rate == Decimal("0.045")
        assert quote.tax == Decimal("1.08")
        assert quote.jurisdiction == "AR"
        assert quote.reason == "AR sales tax (4.500%)"

    def test_non_nexus_state_is_zero(self, resolver):
        quote = resolver.resolve(Decimal("13.98"), Decimal("9.95"), "10001")
        assert quote.tax == Decimal("0.00")
        assert quote.reason == "No nexus in NY"

    def test_explicit_state_overrides_zip(self, resolver):
        quote = resolver.resolve(Decimal("13.98"), Decimal("9.95"), "10001", state="AR")
        assert quote.jurisdiction == "AR"
        assert quote.tax == Decimal("1.08")

    def test_unresolvable_destination_is_zero(self, resolver):
        quote = resolver.resolve(Decimal("13.98"), Decimal("9.95"), "00100")
        assert quote.tax == Decimal("0.00")
        assert quote.reason == "No shipping state provided"

    def test_nexus_state_without_rate(self):
        resolver = TaxResolver(TableTaxEstimator(), nexus_states={"OR"})
        quote = resolver.resolve(Decimal("10.00"), Decimal("0.00"), "97201")
        assert quote.tax == Decimal("0.00")
        assert quote.reason == "No tax rate configured for OR"

    def test_estimator_failure_is_not_zero_tax(self):
        resolver = TaxResolver(BrokenEstimator(), nexus_states={"AR"})
        with pytest.raises(UpstreamUnavailable):
            resolver.resolve(Decimal("13.98"), Decimal("9.95"), "72120")

    def test_failure_outside_nexus_is_not_consulted(self):
        resolver = TaxResolver(BrokenEstimator(), nexus_states={"AR"})
        quote = resolver.resolve(Decimal("13.98"), Decimal("9.95"), "10001")
        assert quote.tax == Decimal("0.00")


class TestDescribe:
    def test_nexus_state(self, resolver):
        info = resolver.describe("ar")
        assert info["state"] == "AR"
        assert info["has_nexus"] is True
        assert info["will_collect_tax"] is True
        assert info["percentage"] == "4.500%"

    def test_other_state(self, resolver):
        info = resolver.describe("NY")
        assert info["has_nexus"] is False
        assert info["will_collect_tax"] is False


def test_describe_rate():
    assert describe_rate("MO", Decimal("0.04225")) == "MO sales tax (4.225%)"
