"""Domain events for the Category aggregate."""

from protean.fields import Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Category")
class CategoryCreated:
    """A category was added to the hierarchy."""

    __version__ = 1

    category_id: Identifier(required=True)
    name: String(required=True)
    parent_id: Identifier()
