"""Category aggregate for grouping products into a hierarchy."""

from datetime import datetime

from protean.fields import DateTime, Identifier, String, Text

from storefront.domain import storefront


@storefront.aggregate
class Category:
    """A node in the product category hierarchy.

    Only the parent pointer is stored. Children are derived by inverting it,
    see ``storefront.category.tree``.
    """

    name: String(required=True, max_length=100)
    description: Text(default="")
    parent_id: Identifier()
    created_at: DateTime(default=datetime.now)

    @classmethod
    def create(cls, name, description=None, parent_id=None):
        from storefront.category.events import CategoryCreated

        category = cls(
            name=name,
            description=description or "",
            parent_id=parent_id,
            created_at=datetime.now(),
        )
        category.raise_(
            CategoryCreated(
                category_id=category.id,
                name=name,
                parent_id=parent_id,
            )
        )
        return category
