"""Repository for the Subscription aggregate."""

from storefront.domain import storefront
from storefront.subscription.subscription import Subscription, SubscriptionStatus


@storefront.repository(part_of=Subscription)
class SubscriptionRepository:
    def active_for_user(self, user_id: str) -> Subscription | None:
        if not user_id:
            return None
        return self._dao.query.filter(user_id=user_id, status=SubscriptionStatus.ACTIVE.value).all().first

    def count_active(self) -> int:
        return self._dao.query.filter(status=SubscriptionStatus.ACTIVE.value).all().total
