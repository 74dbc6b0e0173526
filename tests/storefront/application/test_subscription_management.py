"""Application tests for subscription handlers."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain
from storefront.subscription.management import CancelSubscription, Subscribe
from storefront.subscription.subscription import Subscription


def _subscribe(user_id="user-1", external_reference="I-SUB-1"):
    return current_domain.process(
        Subscribe(user_id=user_id, external_reference=external_reference), asynchronous=False
    )


class TestSubscribe:
    def test_subscribe(self):
        subscription_id = _subscribe()
        subscription = current_domain.repository_for(Subscription).get(subscription_id)
        assert subscription.is_active
        assert subscription.user_id == "user-1"

    def test_second_active_subscription_rejected(self):
        _subscribe()
        with pytest.raises(ValidationError) as exc:
            _subscribe(external_reference="I-SUB-2")
        assert "already have an active subscription" in str(exc.value)
        assert current_domain.repository_for(Subscription).count_active() == 1

    def test_resubscribe_after_cancel(self):
        _subscribe()
        current_domain.process(CancelSubscription(user_id="user-1"), asynchronous=False)

        _subscribe(external_reference="I-SUB-2")

        assert current_domain.repository_for(Subscription).count_active() == 1


class TestCancel:
    def test_cancel(self):
        _subscribe()
        current_domain.process(CancelSubscription(user_id="user-1"), asynchronous=False)
        assert current_domain.repository_for(Subscription).active_for_user("user-1") is None

    def test_cancel_without_subscription(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(CancelSubscription(user_id="user-9"), asynchronous=False)


class TestSubscriberStatus:
    def test_engine_sees_active_subscriber(self, engine):
        _subscribe()
        assert engine.is_subscriber("user-1") is True
        assert engine.is_subscriber("user-2") is False
        assert engine.is_subscriber(None) is False
