"""Tests for the Subscription aggregate."""

from datetime import UTC, datetime

import pytest
from protean.exceptions import ValidationError
from storefront.subscription.events import SubscriptionCancelled, SubscriptionStarted
from storefront.subscription.subscription import Subscription, SubscriptionStatus, one_month_after


class TestStart:
    def test_start_is_active(self):
        subscription = Subscription.start(user_id="user-1", external_reference="I-SUB-1")
        assert subscription.is_active
        assert subscription.status == SubscriptionStatus.ACTIVE.value
        assert isinstance(subscription._events[0], SubscriptionStarted)

    def test_next_billing_is_one_month_later(self):
        now = datetime(2026, 3, 15, tzinfo=UTC)
        subscription = Subscription.start(user_id="user-1", external_reference="I-SUB-1", now=now)
        assert subscription.next_billing_date == datetime(2026, 4, 15, tzinfo=UTC)


class TestCancel:
    def test_cancel(self):
        subscription = Subscription.start(user_id="user-1", external_reference="I-SUB-1")
        subscription._events.clear()

        subscription.cancel()

        assert not subscription.is_active
        assert subscription.cancelled_at is not None
        assert isinstance(subscription._events[0], SubscriptionCancelled)

    def test_cancel_twice_rejected(self):
        subscription = Subscription.start(user_id="user-1", external_reference="I-SUB-1")
        subscription.cancel()
        with pytest.raises(ValidationError):
            subscription.cancel()


class TestOneMonthAfter:
    def test_clamps_to_month_end(self):
        assert one_month_after(datetime(2026, 1, 31)) == datetime(2026, 2, 28)

    def test_rolls_over_year(self):
        assert one_month_after(datetime(2026, 12, 10)) == datetime(2027, 1, 10)
