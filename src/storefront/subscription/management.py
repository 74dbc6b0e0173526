"""Subscription lifecycle: subscribe and cancel."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.subscription.subscription import Subscription

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Subscription")
class Subscribe:
    user_id = String(required=True, max_length=64)
    external_reference = String(required=True, max_length=128)


@storefront.command(part_of="Subscription")
class CancelSubscription:
    user_id = String(required=True, max_length=64)


@storefront.command_handler(part_of=Subscription)
class SubscriptionHandler:
    @handle(Subscribe)
    def subscribe(self, command):
        repo = current_domain.repository_for(Subscription)
        if repo.active_for_user(command.user_id) is not None:
            raise ValidationError({"user_id": ["You already have an active subscription"]})

        subscription = Subscription.start(
            user_id=command.user_id,
            external_reference=command.external_reference,
        )
        repo.add(subscription)
        logger.info("Subscription started", user_id=command.user_id, subscription_id=str(subscription.id))
        return str(subscription.id)

    @handle(CancelSubscription)
    def cancel(self, command):
        repo = current_domain.repository_for(Subscription)
        subscription = repo.active_for_user(command.user_id)
        if subscription is None:
            raise ObjectNotFoundError({"_entity": "No active subscription found"})

        subscription.cancel()
        repo.add(subscription)
        logger.info("Subscription cancelled", user_id=command.user_id, subscription_id=str(subscription.id))
        return str(subscription.id)
