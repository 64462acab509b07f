"""Product management: commands and handler."""

from protean import handle
from protean.fields import Boolean, Decimal, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.category.category import Category
from storefront.domain import storefront
from storefront.product.product import Product


@storefront.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=255)
    description: Text()
    price: Decimal(required=True, min_value=0)
    stock: Integer(default=0, min_value=0)
    category_id: Identifier()


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=255)
    description: Text()
    price: Decimal(min_value=0)
    is_available: Boolean()


@storefront.command(part_of="Product")
class SetProductStock:
    product_id: Identifier(required=True)
    quantity: Integer(required=True, min_value=0)


@storefront.command(part_of="Product")
class RemoveProduct:
    product_id: Identifier(required=True)


@storefront.command(part_of="Product")
class TouchProduct:
    product_id: Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        category_id = command.category_id or None
        if category_id:
            # Raises ObjectNotFoundError for an unknown category
            current_domain.repository_for(Category).get(category_id)

        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            stock=command.stock,
            category_id=category_id,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            is_available=command.is_available,
        )
        repo.add(product)
        return str(product.id)

    @handle(SetProductStock)
    def set_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.set_stock(command.quantity)
        repo.add(product)
        return str(product.id)

    @handle(TouchProduct)
    def touch_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.touch()
        repo.add(product)
        return str(product.id)

    @handle(RemoveProduct)
    def remove_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.mark_removed()
        repo.add(product)
        repo._dao.delete(product)
