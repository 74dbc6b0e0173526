"""Read-side views over orders for the history and admin endpoints."""

from protean.domain import Domain

from storefront.catalogue.product import Product
from storefront.catalogue.variant import Variant
from storefront.coupon.coupon import Coupon
from storefront.ordering.order import Order, OrderStatus
from storefront.shared.money import ZERO, to_money
from storefront.subscription.subscription import Subscription


def order_summary(order: Order) -> dict:
    address = order.shipping_address
    pricing = order.pricing
    return {
        "order_id": str(order.id),
        "status": order.status,
        "created_at": order.created_at.isoformat() if order.created_at else None,
        "variant_id": str(order.variant_id),
        "quantity": order.quantity,
        "customer_email": order.customer_email,
        "customer_name": order.customer_name,
        "shipping_method": order.shipping_method,
        "shipping_address": {
            "street": address.street,
            "city": address.city,
            "state": address.state,
            "zip_code": address.zip_code,
        },
        "coupon_code": order.coupon_code,
        "used_fallback_rates": order.used_fallback_rates,
        "payment_reference": order.payment_reference,
        "pricing": {
            "unit_price": f"{to_money(pricing.unit_price):.2f}",
            "subtotal": f"{to_money(pricing.subtotal):.2f}",
            "shipping_cost": f"{to_money(pricing.shipping_cost):.2f}",
            "coupon_discount": f"{to_money(pricing.coupon_discount):.2f}",
            "subscriber_discount": f"{to_money(pricing.subscriber_discount):.2f}",
            "tax": f"{to_money(pricing.tax):.2f}",
            "total": f"{to_money(pricing.total):.2f}",
        },
    }


def store_stats(domain: Domain, recent_limit: int = 5) -> dict:
    """Counts, revenue and stock alerts for the admin dashboard."""
    orders = domain.repository_for(Order)._dao.query.all().items
    revenue = ZERO
    by_status = {status.value: 0 for status in OrderStatus}
    for order in orders:
        by_status[order.status] = by_status.get(order.status, 0) + 1
        if order.status != OrderStatus.CANCELLED.value:
            revenue += to_money(order.pricing.total)

    variants = domain.repository_for(Variant)._dao.query.all().items
    low_stock = [
        {"variant_id": str(variant.id), "size": variant.size, "on_hand": variant.on_hand}
        for variant in variants
        if variant.is_low_on_stock
    ]

    return {
        "products": domain.repository_for(Product)._dao.query.all().total,
        "variants": domain.repository_for(Variant)._dao.query.all().total,
        "coupons": domain.repository_for(Coupon)._dao.query.all().total,
        "active_subscriptions": domain.repository_for(Subscription).count_active(),
        "orders": domain.repository_for(Order)._dao.query.all().total,
        "orders_by_status": by_status,
        "revenue": f"{to_money(revenue):.2f}",
        "low_stock": low_stock,
        "recent_orders": [
            order_summary(order) for order in domain.repository_for(Order).recent(limit=recent_limit)
        ],
    }
