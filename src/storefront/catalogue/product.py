"""Product aggregate: a sellable item family.

Products are never deleted. Taking one off the shelf flips ``available``.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String, Text

from storefront.catalogue.events import ProductAvailabilityChanged, ProductCreated
from storefront.domain import storefront


@storefront.aggregate
class Product:
    name: String(required=True, max_length=120, unique=True)
    description: Text()
    available: Boolean(default=True)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(cls, name, description=None):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description,
            available=True,
            created_at=now,
            updated_at=now,
        )
        product.raise_(ProductCreated(product_id=product.id, name=name, created_at=now))
        return product

    def update_details(self, name=None, description=None):
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        self.updated_at = datetime.now(UTC)

    def deactivate(self):
        if not self.available:
            raise ValidationError({"available": ["Product is already unavailable"]})
        self._set_availability(False)

    def activate(self):
        if self.available:
            raise ValidationError({"available": ["Product is already available"]})
        self._set_availability(True)

    def _set_availability(self, available):
        now = datetime.now(UTC)
        self.available = available
        self.updated_at = now
        self.raise_(ProductAvailabilityChanged(product_id=self.id, available=available, changed_at=now))
