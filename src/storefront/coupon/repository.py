"""Repository for the Coupon aggregate."""

from storefront.coupon.coupon import Coupon, normalize_code
from storefront.domain import storefront


@storefront.repository(part_of=Coupon)
class CouponRepository:
    def find_by_code(self, code: str) -> Coupon | None:
        """Case-insensitive lookup by coupon code."""
        normalized = normalize_code(code)
        if not normalized:
            return None
        return self._dao.query.filter(code=normalized).all().first
