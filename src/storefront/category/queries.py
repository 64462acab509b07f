"""Cached category reads."""

from protean.utils.globals import current_domain

from storefront.cache import get_cache
from storefront.cache.keys import CATEGORIES_ALL, category_key
from storefront.category.category import Category


def category_to_dict(category, children_ids=None) -> dict:
    data = {
        "id": str(category.id),
        "name": category.name,
        "description": category.description or "",
        "parent_id": str(category.parent_id) if category.parent_id else None,
        "created_at": category.created_at.isoformat() if category.created_at else None,
    }
    if children_ids is not None:
        data["children"] = children_ids
    return data


def list_categories(cache=None) -> list[dict]:
    if cache is None:
        cache = get_cache()

    def load():
        categories = current_domain.repository_for(Category).query.order_by("name").limit(None).all().items
        return [category_to_dict(category) for category in categories]

    return cache.get_or_load(CATEGORIES_ALL, load)


def get_category(category_id, cache=None) -> dict:
    """Single category with the ids of its direct children."""
    if cache is None:
        cache = get_cache()

    def load():
        repo = current_domain.repository_for(Category)
        category = repo.get(category_id)
        children = repo.query.filter(parent_id=str(category.id)).order_by("name").limit(None).all().items
        return category_to_dict(category, children_ids=[str(child.id) for child in children])

    return cache.get_or_load(category_key(category_id), load)
