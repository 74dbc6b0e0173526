"""Variant aggregate: one purchasable size of a Product.

Stock Model:
    on_hand: units on the shelf; never negative
    low_stock_threshold: at or below this level a LowStockDetected is raised

Only a committed order may withdraw stock. Quotes read ``on_hand`` but
never touch it.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.catalogue.events import (
    LowStockDetected,
    StockWithdrawn,
    VariantAdded,
    VariantPriceChanged,
    VariantRestocked,
)
from storefront.checkout.errors import InsufficientInventory
from storefront.domain import storefront
from storefront.shared.money import as_float, to_money


@storefront.aggregate
class Variant:
    product_id: Identifier(required=True)
    size: String(required=True, max_length=30)
    size_oz: Integer(default=0, min_value=0)
    price: Float(required=True, min_value=0.01)
    on_hand: Integer(default=0)
    low_stock_threshold: Integer(default=5, min_value=0)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def on_hand_cannot_be_negative(self):
        if self.on_hand is not None and self.on_hand < 0:
            raise ValidationError({"on_hand": ["Stock on hand cannot be negative"]})

    @invariant.post
    def price_must_have_at_most_two_decimals(self):
        if self.price is not None and as_float(self.price) != self.price:
            raise ValidationError({"price": ["Price must have at most two decimal places"]})

    @classmethod
    def create(cls, product_id, size, price, size_oz=0, on_hand=0, low_stock_threshold=5):
        now = datetime.now(UTC)
        variant = cls(
            product_id=product_id,
            size=size,
            size_oz=size_oz,
            price=price,
            on_hand=on_hand,
            low_stock_threshold=low_stock_threshold,
            created_at=now,
            updated_at=now,
        )
        variant.raise_(
            VariantAdded(
                variant_id=variant.id,
                product_id=product_id,
                size=size,
                price=price,
                on_hand=on_hand,
                added_at=now,
            )
        )
        return variant

    @property
    def unit_price(self):
        return to_money(self.price)

    @property
    def is_low_on_stock(self) -> bool:
        return self.on_hand <= self.low_stock_threshold

    def ensure_available(self, quantity):
        if quantity > self.on_hand:
            raise InsufficientInventory(str(self.id), quantity, self.on_hand)

    def withdraw(self, quantity, order_reference):
        """Take ``quantity`` units off the shelf for a committed order."""
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})
        self.ensure_available(quantity)

        now = datetime.now(UTC)
        previous = self.on_hand
        self.on_hand = previous - quantity
        self.updated_at = now

        self.raise_(
            StockWithdrawn(
                variant_id=self.id,
                order_reference=order_reference,
                quantity=quantity,
                previous_on_hand=previous,
                new_on_hand=self.on_hand,
                withdrawn_at=now,
            )
        )
        if self.is_low_on_stock:
            self.raise_(
                LowStockDetected(
                    variant_id=self.id,
                    product_id=self.product_id,
                    size=self.size,
                    on_hand=self.on_hand,
                    threshold=self.low_stock_threshold,
                    detected_at=now,
                )
            )

    def restock(self, quantity):
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})

        now = datetime.now(UTC)
        previous = self.on_hand
        self.on_hand = previous + quantity
        self.updated_at = now
        self.raise_(
            VariantRestocked(
                variant_id=self.id,
                quantity=quantity,
                previous_on_hand=previous,
                new_on_hand=self.on_hand,
                restocked_at=now,
            )
        )

    def change_price(self, new_price):
        if new_price is None or new_price <= 0:
            raise ValidationError({"price": ["Price must be positive"]})

        now = datetime.now(UTC)
        previous = self.price
        self.price = new_price
        self.updated_at = now
        self.raise_(
            VariantPriceChanged(
                variant_id=self.id,
                previous_price=previous,
                new_price=new_price,
                changed_at=now,
            )
        )
