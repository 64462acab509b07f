"""Category management: command and handler."""

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.category.category import Category
from storefront.domain import storefront


@storefront.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    description: Text()
    parent_id: Identifier()


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        repo = current_domain.repository_for(Category)

        parent_id = command.parent_id or None
        if parent_id:
            # Raises ObjectNotFoundError for a dangling parent
            repo.get(parent_id)

        category = Category.create(
            name=command.name,
            description=command.description,
            parent_id=parent_id,
        )
        repo.add(category)
        return str(category.id)
