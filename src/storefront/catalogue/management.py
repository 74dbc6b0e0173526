"""Catalogue management: commands and handlers for products and variants."""

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.catalogue.variant import Variant
from storefront.domain import storefront


@storefront.command(part_of="Product")
class CreateProduct:
    name = String(required=True, max_length=120)
    description = Text()


@storefront.command(part_of="Product")
class UpdateProductDetails:
    product_id = Identifier(required=True)
    name = String(max_length=120)
    description = Text()


@storefront.command(part_of="Product")
class DeactivateProduct:
    product_id = Identifier(required=True)


@storefront.command(part_of="Product")
class ActivateProduct:
    product_id = Identifier(required=True)


@storefront.command(part_of="Variant")
class AddVariant:
    product_id = Identifier(required=True)
    size = String(required=True, max_length=30)
    size_oz = Integer(default=0, min_value=0)
    price = Float(required=True, min_value=0.01)
    on_hand = Integer(default=0, min_value=0)
    low_stock_threshold = Integer(default=5, min_value=0)


@storefront.command(part_of="Variant")
class RestockVariant:
    variant_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="Variant")
class UpdateVariantPrice:
    variant_id = Identifier(required=True)
    price = Float(required=True, min_value=0.01)


@storefront.command_handler(part_of=Product)
class ProductManagementHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(name=command.name, description=command.description)
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(UpdateProductDetails)
    def update_details(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_details(name=command.name, description=command.description)
        repo.add(product)

    @handle(DeactivateProduct)
    def deactivate_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.deactivate()
        repo.add(product)

    @handle(ActivateProduct)
    def activate_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.activate()
        repo.add(product)


@storefront.command_handler(part_of=Variant)
class VariantManagementHandler:
    @handle(AddVariant)
    def add_variant(self, command):
        # Raises ObjectNotFoundError for an unknown product
        current_domain.repository_for(Product).get(command.product_id)

        variant = Variant.create(
            product_id=command.product_id,
            size=command.size,
            size_oz=command.size_oz,
            price=command.price,
            on_hand=command.on_hand,
            low_stock_threshold=command.low_stock_threshold,
        )
        current_domain.repository_for(Variant).add(variant)
        return str(variant.id)

    @handle(RestockVariant)
    def restock_variant(self, command):
        repo = current_domain.repository_for(Variant)
        variant = repo.get(command.variant_id)
        variant.restock(command.quantity)
        repo.add(variant)
        return variant.on_hand

    @handle(UpdateVariantPrice)
    def update_price(self, command):
        repo = current_domain.repository_for(Variant)
        variant = repo.get(command.variant_id)
        variant.change_price(command.price)
        repo.add(variant)
