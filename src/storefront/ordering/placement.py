"""Order placement: the atomic commit of a priced, paid checkout.

The handler runs inside one Unit of Work. Every guard (duplicate payment,
stock, coupon) is evaluated before the first aggregate is mutated, and the
three writes (order, variant, coupon) are flushed together on commit.
Coupon expiry is judged at ``checked_at``, the moment the engine priced the
checkout.
"""

from protean import handle
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.variant import Variant
from storefront.checkout.errors import CouponInvalid, DuplicatePayment
from storefront.coupon.coupon import Coupon
from storefront.domain import storefront
from storefront.ordering.order import Order, OrderPricing, ShippingAddress


@storefront.command(part_of="Order")
class PlaceOrder:
    product_id = Identifier(required=True)
    variant_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    customer_email = String(required=True, max_length=254)
    customer_name = String(required=True, max_length=120)
    customer_phone = String(max_length=30)
    street = String(max_length=255)
    city = String(max_length=100)
    state = String(max_length=2)
    zip_code = String(required=True, max_length=10)
    shipping_method = String(required=True, max_length=50)
    coupon_code = String(max_length=50)
    unit_price = Float(required=True)
    subtotal = Float(required=True)
    shipping_cost = Float(default=0.0)
    coupon_discount = Float(default=0.0)
    subscriber_discount = Float(default=0.0)
    tax = Float(default=0.0)
    tax_rate = Float(default=0.0)
    total = Float(required=True)
    used_fallback_rates = Boolean(default=False)
    payment_reference = String(required=True, max_length=128)
    notes = Text()
    user_id = String(max_length=64)
    checked_at = DateTime()


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        orders = current_domain.repository_for(Order)
        variants = current_domain.repository_for(Variant)
        coupons = current_domain.repository_for(Coupon)

        if orders.find_by_payment_reference(command.payment_reference) is not None:
            raise DuplicatePayment(command.payment_reference)

        variant = variants.get(command.variant_id)
        variant.ensure_available(command.quantity)

        coupon = None
        if command.coupon_code:
            coupon = coupons.find_by_code(command.coupon_code)
            if coupon is None:
                raise CouponInvalid(command.coupon_code, "unknown coupon code")
            coupon.ensure_redeemable(command.checked_at)

        order = Order.place(
            product_id=command.product_id,
            variant_id=command.variant_id,
            quantity=command.quantity,
            customer_email=command.customer_email,
            customer_name=command.customer_name,
            customer_phone=command.customer_phone,
            shipping_address=ShippingAddress(
                street=command.street,
                city=command.city,
                state=command.state,
                zip_code=command.zip_code,
            ),
            shipping_method=command.shipping_method,
            coupon_code=coupon.code if coupon else None,
            pricing=OrderPricing(
                unit_price=command.unit_price,
                subtotal=command.subtotal,
                shipping_cost=command.shipping_cost,
                coupon_discount=command.coupon_discount,
                subscriber_discount=command.subscriber_discount,
                tax=command.tax,
                tax_rate=command.tax_rate,
                total=command.total,
            ),
            payment_reference=command.payment_reference,
            used_fallback_rates=command.used_fallback_rates,
            notes=command.notes,
            user_id=command.user_id,
        )
        variant.withdraw(command.quantity, order_reference=str(order.id))
        if coupon is not None:
            coupon.redeem(order_reference=str(order.id), now=command.checked_at)

        orders.add(order)
        variants.add(variant)
        if coupon is not None:
            coupons.add(coupon)

        return str(order.id)
