"""Domain events for the Product and Variant aggregates."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """A new product family was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    created_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductAvailabilityChanged:
    __version__ = 1

    product_id: Identifier(required=True)
    available: Boolean()
    changed_at: DateTime(required=True)


@storefront.event(part_of="Variant")
class VariantAdded:
    """A purchasable size of a product was added."""

    __version__ = 1

    variant_id: Identifier(required=True)
    product_id: Identifier(required=True)
    size: String(required=True)
    price: Float(required=True)
    on_hand: Integer(required=True)
    added_at: DateTime(required=True)


@storefront.event(part_of="Variant")
class VariantPriceChanged:
    __version__ = 1

    variant_id: Identifier(required=True)
    previous_price: Float(required=True)
    new_price: Float(required=True)
    changed_at: DateTime(required=True)


@storefront.event(part_of="Variant")
class VariantRestocked:
    __version__ = 1

    variant_id: Identifier(required=True)
    quantity: Integer(required=True)
    previous_on_hand: Integer(required=True)
    new_on_hand: Integer(required=True)
    restocked_at: DateTime(required=True)


@storefront.event(part_of="Variant")
class StockWithdrawn:
    """Units left the shelf because an order was committed."""

    __version__ = 1

    variant_id: Identifier(required=True)
    order_reference: String(required=True)
    quantity: Integer(required=True)
    previous_on_hand: Integer(required=True)
    new_on_hand: Integer(required=True)
    withdrawn_at: DateTime(required=True)


@storefront.event(part_of="Variant")
class LowStockDetected:
    __version__ = 1

    variant_id: Identifier(required=True)
    product_id: Identifier(required=True)
    size: String(required=True)
    on_hand: Integer(required=True)
    threshold: Integer(required=True)
    detected_at: DateTime(required=True)
