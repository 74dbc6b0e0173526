"""Order aggregate: the durable record of a paid checkout.

An Order is written once, by the placement handler, together with the
stock withdrawal and coupon redemption it implies. Afterwards only the
administrative ``status`` field changes.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text, ValueObject

from storefront.domain import storefront
from storefront.ordering.events import OrderPlaced, OrderStatusChanged
from storefront.shared.money import to_money, within_tolerance


class OrderStatus(Enum):
    COMPLETED = "completed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


@storefront.value_object(part_of="Order")
class ShippingAddress:
    street: String(max_length=255)
    city: String(max_length=100)
    state: String(max_length=2)
    zip_code: String(required=True, max_length=10)


@storefront.value_object(part_of="Order")
class OrderPricing:
    """Monetary breakdown frozen at commit time."""

    unit_price: Float(required=True, min_value=0.0)
    subtotal: Float(required=True, min_value=0.0)
    shipping_cost: Float(default=0.0, min_value=0.0)
    coupon_discount: Float(default=0.0, min_value=0.0)
    subscriber_discount: Float(default=0.0, min_value=0.0)
    tax: Float(default=0.0, min_value=0.0)
    tax_rate: Float(default=0.0, min_value=0.0)
    total: Float(required=True, min_value=0.0)

    @invariant.post
    def total_must_match_components(self):
        expected = (
            to_money(self.subtotal)
            + to_money(self.shipping_cost)
            + to_money(self.tax)
            - to_money(self.coupon_discount)
            - to_money(self.subscriber_discount)
        )
        if not within_tolerance(expected, self.total):
            raise ValidationError({"total": [f"Total {self.total} does not add up to {expected}"]})


@storefront.aggregate
class Order:
    product_id: Identifier(required=True)
    variant_id: Identifier(required=True)
    quantity: Integer(required=True, min_value=1)
    customer_email: String(required=True, max_length=254)
    customer_name: String(required=True, max_length=120)
    customer_phone: String(max_length=30)
    shipping_address: ValueObject(ShippingAddress, required=True)
    shipping_method: String(required=True, max_length=50)
    coupon_code: String(max_length=50)
    pricing: ValueObject(OrderPricing, required=True)
    used_fallback_rates: Boolean(default=False)
    payment_reference: String(required=True, max_length=128, unique=True)
    notes: Text()
    status: String(choices=OrderStatus, default=OrderStatus.COMPLETED.value)
    user_id: String(max_length=64)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def place(
        cls,
        product_id,
        variant_id,
        quantity,
        customer_email,
        customer_name,
        shipping_address,
        shipping_method,
        pricing,
        payment_reference,
        customer_phone=None,
        coupon_code=None,
        used_fallback_rates=False,
        notes=None,
        user_id=None,
    ):
        now = datetime.now(UTC)
        order = cls(
            product_id=product_id,
            variant_id=variant_id,
            quantity=quantity,
            customer_email=customer_email,
            customer_name=customer_name,
            customer_phone=customer_phone,
            shipping_address=shipping_address,
            shipping_method=shipping_method,
            coupon_code=coupon_code,
            pricing=pricing,
            used_fallback_rates=used_fallback_rates,
            payment_reference=payment_reference,
            notes=notes,
            status=OrderStatus.COMPLETED.value,
            user_id=user_id,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=order.id,
                variant_id=variant_id,
                quantity=quantity,
                customer_email=customer_email,
                shipping_method=shipping_method,
                coupon_code=coupon_code,
                total=pricing.total,
                payment_reference=payment_reference,
                placed_at=now,
            )
        )
        return order

    def change_status(self, new_status):
        valid = {status.value for status in OrderStatus}
        if new_status not in valid:
            raise ValidationError({"status": [f"Unknown order status '{new_status}'"]})
        if new_status == self.status:
            return

        now = datetime.now(UTC)
        previous = self.status
        self.status = new_status
        self.updated_at = now
        self.raise_(
            OrderStatusChanged(
                order_id=self.id,
                previous_status=previous,
                new_status=new_status,
                changed_at=now,
            )
        )
