"""Message templates for merchant notifications.

Each template knows its channels and renders subject/body from the event
payload.
"""

ORDER_COMPLETED = "order_completed"
LOW_STOCK = "low_stock"


class OrderCompletedTemplate:
    event = ORDER_COMPLETED

    @staticmethod
    def channels(context: dict) -> list[str]:  # noqa: ARG004
        return ["email"]

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        total = context.get("total", "0.00")
        quantity = context.get("quantity", 0)
        size = context.get("size", "")
        customer = context.get("customer_name", "A customer")
        return {
            "subject": f"New order #{order_id}",
            "body": (
                f"{customer} ordered {quantity} x {size}.\n\n"
                f"Order Total: USD {total}\n"
                f"Shipping: {context.get('shipping_method', 'N/A')}\n"
            ),
        }


class LowStockAlertTemplate:
    event = LOW_STOCK

    @staticmethod
    def channels(context: dict) -> list[str]:
        # Escalate to SMS once stock falls to half the threshold
        on_hand = context.get("on_hand", 0)
        threshold = context.get("threshold", 0)
        if on_hand <= threshold / 2:
            return ["email", "sms"]
        return ["email"]

    @staticmethod
    def render(context: dict) -> dict:
        size = context.get("size", "N/A")
        on_hand = context.get("on_hand", 0)
        return {
            "subject": f"[Low Stock] {context.get('product_name', 'Product')} {size}",
            "body": (
                f"Only {on_hand} unit(s) left of variant {context.get('variant_id', 'N/A')}.\n"
                f"Threshold: {context.get('threshold', 0)}\n\n"
                "Please restock soon."
            ),
        }


TEMPLATE_REGISTRY: dict[str, type] = {
    ORDER_COMPLETED: OrderCompletedTemplate,
    LOW_STOCK: LowStockAlertTemplate,
}


def get_template(event: str):
    template_cls = TEMPLATE_REGISTRY.get(event)
    if template_cls is None:
        raise ValueError(f"No template registered for notification event: {event}")
    return template_cls
