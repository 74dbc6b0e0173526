"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A paid order was recorded and its stock withdrawn."""

    __version__ = 1

    order_id = Identifier(required=True)
    variant_id = Identifier(required=True)
    quantity = Integer(required=True)
    customer_email = String(required=True)
    shipping_method = String(required=True)
    coupon_code = String()
    total = Float(required=True)
    payment_reference = String(required=True)
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)
