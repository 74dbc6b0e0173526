"""Tests for coupon and subscriber discount resolution."""

from decimal import Decimal

from storefront.coupon.coupon import Coupon
from storefront.pricing.discounts import DiscountResolver, discount_base


def _coupon(kind="percentage", value=25.0):
    return Coupon.create(code="promo", kind=kind, value=value)


class TestCouponDiscount:
    def test_percentage_of_base(self):
        resolver = DiscountResolver()
        assert resolver.coupon_discount(_coupon(), Decimal("23.93")) == Decimal("5.98")

    def test_fixed_amount(self):
        resolver = DiscountResolver()
        assert resolver.coupon_discount(_coupon(kind="fixed", value=5.0), Decimal("23.93")) == Decimal("5.00")

    def test_fixed_amount_capped_at_base(self):
        resolver = DiscountResolver()
        assert resolver.coupon_discount(_coupon(kind="fixed", value=50.0), Decimal("23.93")) == Decimal("23.93")

    def test_hundred_percent_takes_whole_base(self):
        resolver = DiscountResolver()
        assert resolver.coupon_discount(_coupon(value=100.0), Decimal("23.93")) == Decimal("23.93")

    def test_no_coupon(self):
        assert DiscountResolver().coupon_discount(None, Decimal("23.93")) == Decimal("0.00")


class TestResolve:
    def test_base_includes_shipping(self):
        assert discount_base(Decimal("13.98"), Decimal("9.95")) == Decimal("23.93")

    def test_coupon_only(self):
        discounts = DiscountResolver().resolve(Decimal("13.98"), Decimal("9.95"), coupon=_coupon())
        assert discounts.coupon == Decimal("5.98")
        assert discounts.subscriber == Decimal("0.00")

    def test_subscriber_only(self):
        discounts = DiscountResolver().resolve(Decimal("13.98"), Decimal("9.95"), is_subscriber=True)
        assert discounts.subscriber == Decimal("1.40")
        assert discounts.total == Decimal("1.40")

    def test_both_stack(self):
        discounts = DiscountResolver().resolve(
            Decimal("13.98"), Decimal("9.95"), coupon=_coupon(), is_subscriber=True
        )
        assert discounts.coupon == Decimal("5.98")
        assert discounts.subscriber == Decimal("1.40")
        assert discounts.total == Decimal("7.38")

    def test_combined_never_exceeds_base(self):
        discounts = DiscountResolver().resolve(
            Decimal("10.00"), Decimal("0.00"), coupon=_coupon(kind="fixed", value=10.0), is_subscriber=True
        )
        assert discounts.coupon == Decimal("10.00")
        assert discounts.subscriber == Decimal("0.00")

    def test_configurable_subscriber_rate(self):
        discounts = DiscountResolver(Decimal("0.15")).resolve(Decimal("20.00"), Decimal("5.00"), is_subscriber=True)
        assert discounts.subscriber == Decimal("3.00")
