"""Domain events for the Coupon aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Coupon")
class CouponCreated:
    __version__ = 1

    coupon_id = Identifier(required=True)
    code = String(required=True)
    kind = String(required=True)
    value = Float(required=True)
    usage_limit = Integer(required=True)
    expires_at = DateTime()
    created_at = DateTime(required=True)


@storefront.event(part_of="Coupon")
class CouponRedeemed:
    """A committed order consumed one use of the coupon."""

    __version__ = 1

    coupon_id = Identifier(required=True)
    code = String(required=True)
    order_reference = String(required=True)
    usage_count = Integer(required=True)
    redeemed_at = DateTime(required=True)


@storefront.event(part_of="Coupon")
class CouponActivated:
    __version__ = 1

    coupon_id = Identifier(required=True)
    code = String(required=True)
    activated_at = DateTime(required=True)


@storefront.event(part_of="Coupon")
class CouponDeactivated:
    __version__ = 1

    coupon_id = Identifier(required=True)
    code = String(required=True)
    deactivated_at = DateTime(required=True)
