"""Discount resolution.

Coupons apply to the discount base, which is the subtotal plus shipping on
every path (quotes, commits and the standalone coupon check). The
subscriber discount is a single configurable rate of the subtotal. The
sum of both is clamped to the base so the pre-tax total never goes below
zero.
"""

from dataclasses import dataclass
from decimal import Decimal

from storefront.coupon.coupon import CouponKind
from storefront.shared.money import ZERO, clamp, to_money


@dataclass(frozen=True)
class Discounts:
    coupon: Decimal = ZERO
    subscriber: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return to_money(self.coupon + self.subscriber)


def discount_base(subtotal, shipping_cost) -> Decimal:
    return to_money(to_money(subtotal) + to_money(shipping_cost))


class DiscountResolver:
    def __init__(self, subscriber_rate: Decimal = Decimal("0.10")) -> None:
        self.subscriber_rate = Decimal(subscriber_rate)

    def coupon_discount(self, coupon, base) -> Decimal:
        """Amount a valid coupon takes off ``base``. Validity is the caller's concern."""
        if coupon is None:
            return ZERO

        base = to_money(base)
        value = to_money(coupon.value)
        if coupon.kind == CouponKind.PERCENTAGE.value:
            amount = to_money(base * value / Decimal(100))
        else:
            amount = min(value, base)
        return clamp(amount, ZERO, base)

    def subscriber_discount(self, subtotal) -> Decimal:
        return to_money(to_money(subtotal) * self.subscriber_rate)

    def resolve(self, subtotal, shipping_cost, coupon=None, is_subscriber: bool = False) -> Discounts:
        base = discount_base(subtotal, shipping_cost)
        coupon_amount = self.coupon_discount(coupon, base)

        subscriber_amount = ZERO
        if is_subscriber:
            subscriber_amount = clamp(self.subscriber_discount(subtotal), ZERO, base - coupon_amount)

        return Discounts(coupon=coupon_amount, subscriber=subscriber_amount)
