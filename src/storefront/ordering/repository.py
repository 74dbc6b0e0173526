"""Repository for the Order aggregate."""

from storefront.domain import storefront
from storefront.ordering.order import Order


@storefront.repository(part_of=Order)
class OrderRepository:
    def find_by_payment_reference(self, payment_reference: str) -> Order | None:
        return self._dao.query.filter(payment_reference=payment_reference).all().first

    def history(self, user_id: str | None = None, customer_email: str | None = None) -> list[Order]:
        """Orders placed by a user or, for guests, by an email address; newest first."""
        if user_id:
            query = self._dao.query.filter(user_id=user_id)
        elif customer_email:
            query = self._dao.query.filter(customer_email=customer_email.strip().lower())
        else:
            return []
        return query.order_by("-created_at").all().items

    def recent(self, limit: int = 50, status: str | None = None) -> list[Order]:
        query = self._dao.query
        if status:
            query = query.filter(status=status)
        return query.order_by("-created_at").limit(limit).all().items
