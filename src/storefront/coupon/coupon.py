"""Coupon aggregate: a promotional code with a bounded number of uses.

Codes are matched case-insensitively and stored lowercase. A usage limit
of -1 means unlimited. ``usage_count`` only moves when an order that used
the coupon is committed.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from storefront.checkout.errors import CouponInvalid
from storefront.coupon.events import (
    CouponActivated,
    CouponCreated,
    CouponDeactivated,
    CouponRedeemed,
)
from storefront.domain import storefront

UNLIMITED = -1


class CouponKind(Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


def normalize_code(code: str | None) -> str:
    return (code or "").strip().lower()


def _as_utc(moment: datetime | None) -> datetime | None:
    if moment is not None and moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment


@storefront.aggregate
class Coupon:
    code: String(required=True, max_length=50, unique=True)
    kind: String(choices=CouponKind, default=CouponKind.PERCENTAGE.value)
    value: Float(required=True, min_value=0.01)
    description: Text()
    active: Boolean(default=True)
    usage_limit: Integer(default=UNLIMITED)
    usage_count: Integer(default=0)
    expires_at: DateTime()
    created_at: DateTime()

    @invariant.post
    def usage_count_cannot_exceed_limit(self):
        if self.usage_limit != UNLIMITED and self.usage_count > self.usage_limit:
            raise ValidationError({"usage_count": ["Coupon usage cannot exceed its limit"]})

    @invariant.post
    def usage_limit_must_be_unlimited_or_positive(self):
        if self.usage_limit is not None and self.usage_limit < UNLIMITED:
            raise ValidationError({"usage_limit": ["Usage limit must be -1 (unlimited) or zero and above"]})

    @invariant.post
    def percentage_cannot_exceed_hundred(self):
        if self.kind == CouponKind.PERCENTAGE.value and self.value is not None and self.value > 100:
            raise ValidationError({"value": ["Percentage discount cannot exceed 100"]})

    @classmethod
    def create(cls, code, kind, value, usage_limit=UNLIMITED, expires_at=None, description=None):
        normalized = normalize_code(code)
        if not normalized:
            raise ValidationError({"code": ["Coupon code is required"]})

        now = datetime.now(UTC)
        coupon = cls(
            code=normalized,
            kind=kind,
            value=value,
            description=description,
            usage_limit=usage_limit,
            expires_at=_as_utc(expires_at),
            created_at=now,
        )
        coupon.raise_(
            CouponCreated(
                coupon_id=coupon.id,
                code=normalized,
                kind=kind,
                value=value,
                usage_limit=usage_limit,
                expires_at=coupon.expires_at,
                created_at=now,
            )
        )
        return coupon

    @property
    def is_unlimited(self) -> bool:
        return self.usage_limit == UNLIMITED

    @property
    def remaining_uses(self) -> int | None:
        if self.is_unlimited:
            return None
        return max(self.usage_limit - self.usage_count, 0)

    def rejection_reason(self, now: datetime | None = None) -> str | None:
        """Why this coupon cannot be used right now, or None if it can."""
        now = _as_utc(now) or datetime.now(UTC)
        if not self.active:
            return "coupon is inactive"
        expires_at = _as_utc(self.expires_at)
        if expires_at is not None and expires_at <= now:
            return "coupon has expired"
        if not self.is_unlimited and self.usage_count >= self.usage_limit:
            return "coupon usage limit reached"
        return None

    def ensure_redeemable(self, now: datetime | None = None):
        reason = self.rejection_reason(now)
        if reason:
            raise CouponInvalid(self.code, reason)

    def redeem(self, order_reference, now: datetime | None = None):
        """Consume one use on behalf of a committed order."""
        self.ensure_redeemable(now)
        self.usage_count += 1
        self.raise_(
            CouponRedeemed(
                coupon_id=self.id,
                code=self.code,
                order_reference=order_reference,
                usage_count=self.usage_count,
                redeemed_at=datetime.now(UTC),
            )
        )

    def activate(self):
        if self.active:
            raise ValidationError({"active": ["Coupon is already active"]})
        self.active = True
        self.raise_(CouponActivated(coupon_id=self.id, code=self.code, activated_at=datetime.now(UTC)))

    def deactivate(self):
        if not self.active:
            raise ValidationError({"active": ["Coupon is already inactive"]})
        self.active = False
        self.raise_(CouponDeactivated(coupon_id=self.id, code=self.code, deactivated_at=datetime.now(UTC)))
