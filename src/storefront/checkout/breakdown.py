"""Itemised checkout totals.

Every figure is a cent-rounded ``Decimal``. A quote carries one breakdown
per shipping option so the shopper can pick without another round trip.

    total = subtotal + shipping + tax - coupon discount - subscriber discount

Tax is computed on subtotal + shipping before discounts.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from storefront.pricing.discounts import DiscountResolver
from storefront.shared.money import ZERO, to_money
from storefront.shipping.port import PackageSpec
from storefront.shipping.resolver import ShippingOption
from storefront.tax.resolver import TaxResolver


def _money(value: Decimal) -> str:
    return f"{to_money(value):.2f}"


@dataclass(frozen=True)
class Breakdown:
    service_id: str
    service_name: str
    eta: str
    subtotal: Decimal
    shipping: Decimal
    coupon_discount: Decimal
    subscriber_discount: Decimal
    tax: Decimal
    tax_rate: Decimal
    tax_reason: str
    total: Decimal
    shipping_surcharge: Decimal = ZERO

    @property
    def discount_total(self) -> Decimal:
        return to_money(self.coupon_discount + self.subscriber_discount)

    def as_dict(self) -> dict:
        return {
            "service_id": self.service_id,
            "service_name": self.service_name,
            "eta": self.eta,
            "subtotal": _money(self.subtotal),
            "shipping": _money(self.shipping),
            "shipping_surcharge": _money(self.shipping_surcharge),
            "coupon_discount": _money(self.coupon_discount),
            "subscriber_discount": _money(self.subscriber_discount),
            "discount_total": _money(self.discount_total),
            "tax": _money(self.tax),
            "tax_rate": str(self.tax_rate),
            "tax_reason": self.tax_reason,
            "total": _money(self.total),
        }


@dataclass(frozen=True)
class Quote:
    variant_id: str
    product_id: str
    size: str
    quantity: int
    unit_price: Decimal
    destination_zip: str
    destination_state: str
    package: PackageSpec
    coupon_code: str | None = None
    is_subscriber: bool = False
    in_stock: bool = True
    used_fallback_rates: bool = False
    options: tuple[Breakdown, ...] = field(default_factory=tuple)

    def option(self, service_id: str) -> Breakdown | None:
        for breakdown in self.options:
            if breakdown.service_id == service_id:
                return breakdown
        return None

    def as_dict(self) -> dict:
        return {
            "variant_id": self.variant_id,
            "product_id": self.product_id,
            "size": self.size,
            "quantity": self.quantity,
            "unit_price": _money(self.unit_price),
            "destination_zip": self.destination_zip,
            "destination_state": self.destination_state,
            "coupon_code": self.coupon_code,
            "is_subscriber": self.is_subscriber,
            "in_stock": self.in_stock,
            "used_fallback_rates": self.used_fallback_rates,
            "package": {
                "weight_lb": str(self.package.weight_lb),
                "dimensions": self.package.dims_key,
            },
            "options": [breakdown.as_dict() for breakdown in self.options],
        }


def compute_breakdown(
    subtotal: Decimal,
    option: ShippingOption,
    discounts: DiscountResolver,
    taxes: TaxResolver,
    dest_zip: str,
    state: str | None = None,
    coupon=None,
    is_subscriber: bool = False,
) -> Breakdown:
    """Price one shipping option. Pure given its inputs."""
    subtotal = to_money(subtotal)
    shipping = to_money(option.cost)

    discount = discounts.resolve(subtotal, shipping, coupon=coupon, is_subscriber=is_subscriber)
    tax = taxes.resolve(subtotal, shipping, dest_zip, state)

    total = to_money(subtotal + shipping + tax.tax - discount.total)
    return Breakdown(
        service_id=option.service_id,
        service_name=option.name,
        eta=option.eta,
        subtotal=subtotal,
        shipping=shipping,
        shipping_surcharge=to_money(option.surcharge),
        coupon_discount=discount.coupon,
        subscriber_discount=discount.subscriber,
        tax=tax.tax,
        tax_rate=tax.rate,
        tax_reason=tax.reason,
        total=total,
    )
