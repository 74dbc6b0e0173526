"""Lookups over the catalogue aggregates."""

from storefront.catalogue.product import Product
from storefront.catalogue.variant import Variant
from storefront.domain import storefront


@storefront.repository(part_of=Product)
class ProductRepository:
    def available(self) -> list[Product]:
        return self._dao.query.filter(available=True).order_by("name").all().items


@storefront.repository(part_of=Variant)
class VariantRepository:
    def for_product(self, product_id: str) -> list[Variant]:
        """Variants of a product, smallest size first."""
        return self._dao.query.filter(product_id=product_id).order_by("size_oz").all().items
