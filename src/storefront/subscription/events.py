"""Domain events for the Subscription aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Subscription")
class SubscriptionStarted:
    __version__ = 1

    subscription_id = Identifier(required=True)
    user_id = String(required=True)
    external_reference = String(required=True)
    started_at = DateTime(required=True)
    next_billing_date = DateTime(required=True)


@storefront.event(part_of="Subscription")
class SubscriptionCancelled:
    __version__ = 1

    subscription_id = Identifier(required=True)
    user_id = String(required=True)
    cancelled_at = DateTime(required=True)
