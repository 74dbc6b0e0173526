"""Tests for per-option checkout totals."""

from decimal import Decimal

from storefront.checkout.breakdown import compute_breakdown
from storefront.coupon.coupon import Coupon
from storefront.pricing.discounts import DiscountResolver
from storefront.shipping.resolver import ShippingOption
from storefront.tax.resolver import TaxResolver
from storefront.tax.table_adapter import TableTaxEstimator

GROUND = ShippingOption("GROUND_ADVANTAGE", "Ground Advantage", Decimal("9.95"), "2-5 business days")
PICKUP = ShippingOption("PICKUP", "Hold For Pickup", Decimal("0.00"), "Hold for pickup")


def _breakdown(option=GROUND, dest_zip="72120", coupon=None, is_subscriber=False):
    return compute_breakdown(
        Decimal("13.98"),
        option,
        DiscountResolver(),
        TaxResolver(TableTaxEstimator(), nexus_states={"AR"}),
        dest_zip,
        coupon=coupon,
        is_subscriber=is_subscriber,
    )


class TestComputeBreakdown:
    def test_family_coupon_to_arkansas(self):
        coupon = Coupon.create(code="family", kind="percentage", value=25.0)
        breakdown = _breakdown(coupon=coupon)

        assert breakdown.subtotal == Decimal("13.98")
        assert breakdown.shipping == Decimal("9.95")
        assert breakdown.coupon_discount == Decimal("5.98")
        assert breakdown.tax == Decimal("1.08")
        assert breakdown.total == Decimal("19.03")

    def test_without_discounts(self):
        breakdown = _breakdown()
        assert breakdown.total == Decimal("25.01")

    def test_out_of_nexus_has_no_tax(self):
        breakdown = _breakdown(dest_zip="10001")
        assert breakdown.tax == Decimal("0.00")
        assert breakdown.total == Decimal("23.93")

    def test_pickup_has_no_shipping(self):
        breakdown = _breakdown(option=PICKUP)
        assert breakdown.shipping == Decimal("0.00")
        assert breakdown.tax == Decimal("0.63")
        assert breakdown.total == Decimal("14.61")

    def test_total_identity_holds(self):
        coupon = Coupon.create(code="family", kind="percentage", value=25.0)
        breakdown = _breakdown(coupon=coupon, is_subscriber=True)
        assert breakdown.total == (
            breakdown.subtotal
            + breakdown.shipping
            + breakdown.tax
            - breakdown.coupon_discount
            - breakdown.subscriber_discount
        )

    def test_as_dict_formats_amounts(self):
        data = _breakdown().as_dict()
        assert data["total"] == "25.01"
        assert data["shipping"] == "9.95"
        assert data["tax_reason"] == "AR sales tax (4.500%)"
