"""Coupon management: create, activate and deactivate promotional codes."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Float, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.coupon.coupon import UNLIMITED, Coupon, CouponKind
from storefront.domain import storefront


@storefront.command(part_of="Coupon")
class CreateCoupon:
    code = String(required=True, max_length=50)
    kind = String(choices=CouponKind, default=CouponKind.PERCENTAGE.value)
    value = Float(required=True, min_value=0.01)
    usage_limit = Integer(default=UNLIMITED)
    expires_at = DateTime()
    description = Text()


@storefront.command(part_of="Coupon")
class ActivateCoupon:
    code = String(required=True, max_length=50)


@storefront.command(part_of="Coupon")
class DeactivateCoupon:
    code = String(required=True, max_length=50)


def _load_by_code(code):
    coupon = current_domain.repository_for(Coupon).find_by_code(code)
    if coupon is None:
        raise ObjectNotFoundError({"_entity": f"Coupon `{code}` does not exist"})
    return coupon


@storefront.command_handler(part_of=Coupon)
class CouponManagementHandler:
    @handle(CreateCoupon)
    def create_coupon(self, command):
        repo = current_domain.repository_for(Coupon)
        if repo.find_by_code(command.code) is not None:
            raise ValidationError({"code": [f"Coupon code '{command.code}' is already in use"]})

        coupon = Coupon.create(
            code=command.code,
            kind=command.kind,
            value=command.value,
            usage_limit=command.usage_limit,
            expires_at=command.expires_at,
            description=command.description,
        )
        repo.add(coupon)
        return str(coupon.id)

    @handle(ActivateCoupon)
    def activate_coupon(self, command):
        coupon = _load_by_code(command.code)
        coupon.activate()
        current_domain.repository_for(Coupon).add(coupon)

    @handle(DeactivateCoupon)
    def deactivate_coupon(self, command):
        coupon = _load_by_code(command.code)
        coupon.deactivate()
        current_domain.repository_for(Coupon).add(coupon)
