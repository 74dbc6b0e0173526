"""Subscription aggregate: a member plan billed by the payment processor.

An active subscription makes its owner eligible for the subscriber
discount at checkout. A user holds at most one active subscription; the
check happens when a subscription is started, inside the same Unit of Work.
"""

import calendar
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from storefront.domain import storefront
from storefront.subscription.events import SubscriptionCancelled, SubscriptionStarted

MEMBER_BENEFITS = (
    "10% site-wide discount",
    "Early access to new flavors",
    "Member-only seasonal boxes",
)


class SubscriptionStatus(Enum):
    ACTIVE = "active"
    CANCELLED = "cancelled"


def one_month_after(moment: datetime) -> datetime:
    """Same day next month, clamped to the last day of a shorter month."""
    year = moment.year + (1 if moment.month == 12 else 0)
    month = 1 if moment.month == 12 else moment.month + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


@storefront.aggregate
class Subscription:
    user_id: String(required=True, max_length=64)
    external_reference: String(required=True, max_length=128, unique=True)
    status: String(choices=SubscriptionStatus, default=SubscriptionStatus.ACTIVE.value)
    started_at: DateTime()
    next_billing_date: DateTime()
    cancelled_at: DateTime()

    @classmethod
    def start(cls, user_id, external_reference, now=None):
        now = now or datetime.now(UTC)
        subscription = cls(
            user_id=user_id,
            external_reference=external_reference,
            status=SubscriptionStatus.ACTIVE.value,
            started_at=now,
            next_billing_date=one_month_after(now),
        )
        subscription.raise_(
            SubscriptionStarted(
                subscription_id=subscription.id,
                user_id=user_id,
                external_reference=external_reference,
                started_at=now,
                next_billing_date=subscription.next_billing_date,
            )
        )
        return subscription

    @property
    def is_active(self) -> bool:
        return self.status == SubscriptionStatus.ACTIVE.value

    def cancel(self, now=None):
        if not self.is_active:
            raise ValidationError({"status": ["Subscription is not active"]})

        now = now or datetime.now(UTC)
        self.status = SubscriptionStatus.CANCELLED.value
        self.cancelled_at = now
        self.raise_(SubscriptionCancelled(subscription_id=self.id, user_id=self.user_id, cancelled_at=now))
