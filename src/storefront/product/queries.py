"""Cached product reads and search."""

from protean.utils.globals import current_domain
from protean.utils.query import Q

from storefront.cache import get_cache
from storefront.cache.keys import PRODUCTS_ALL, normalize_query, product_key, search_key
from storefront.category.category import Category
from storefront.config import get_settings
from storefront.product.product import Product


def product_to_dict(product, category_name=None) -> dict:
    data = {
        "id": str(product.id),
        "name": product.name,
        "description": product.description or "",
        "price": str(product.price),
        "stock": product.stock,
        "is_available": product.is_available,
        "category_id": str(product.category_id) if product.category_id else None,
        "created_at": product.created_at.isoformat() if product.created_at else None,
        "updated_at": product.updated_at.isoformat() if product.updated_at else None,
    }
    if category_name is not None:
        data["category"] = category_name
    return data


def list_products(cache=None) -> list[dict]:
    if cache is None:
        cache = get_cache()

    def load():
        products = current_domain.repository_for(Product).query.order_by("name").limit(None).all().items
        return [product_to_dict(product) for product in products]

    return cache.get_or_load(PRODUCTS_ALL, load)


def get_product(product_id, cache=None) -> dict:
    """Single product with its category name, when it has one."""
    if cache is None:
        cache = get_cache()

    def load():
        product = current_domain.repository_for(Product).get(product_id)
        category_name = None
        if product.category_id:
            category = current_domain.repository_for(Category).get_or_none(product.category_id)
            category_name = category.name if category else None
        return product_to_dict(product, category_name=category_name)

    return cache.get_or_load(product_key(product_id), load)


def search_products(query, cache=None) -> list[dict]:
    """Available products whose name or description contains ``query``.

    Matching is case-insensitive on the normalized query, which is also the
    cache key, so ``" Widget"`` and ``"widget"`` share one entry. At most
    ``search_result_limit`` products are returned.
    """
    if cache is None:
        cache = get_cache()
    limit = get_settings().search_result_limit

    term = normalize_query(query)

    def load():
        products = (
            current_domain.repository_for(Product)
            .query.filter(Q(name__icontains=term) | Q(description__icontains=term), is_available=True)
            .order_by("name")
            .limit(limit)
            .all()
            .items
        )
        return [product_to_dict(product) for product in products]

    return cache.get_or_load(search_key(term), load)
