"""Cache key derivation, one function per cached resource.

Keys carry the full identity of what they cache. Prefix constants exist for
families of keys that a single write can affect wholesale (any product change
may alter any search result; any category change may alter any subtree).
"""

USERS_ALL = "users:all"
PRODUCTS_ALL = "products:all"
CATEGORIES_ALL = "categories:all"

SEARCH_PREFIX = "search:"
CATEGORY_TREE_PREFIX = "category-tree:"


def user_key(user_id) -> str:
    return f"user:{user_id}"


def product_key(product_id) -> str:
    return f"product:{product_id}"


def category_key(category_id) -> str:
    return f"category:{category_id}"


def category_tree_key(category_id) -> str:
    return f"{CATEGORY_TREE_PREFIX}{category_id}"


def normalize_query(query: str | None) -> str:
    return (query or "").strip().lower()


def search_key(query: str | None) -> str:
    return f"{SEARCH_PREFIX}{normalize_query(query)}"


def product_write_keys(product_id) -> tuple[list[str], list[str]]:
    """Keys and prefixes a write to ``product_id`` must invalidate."""
    return [product_key(product_id), PRODUCTS_ALL], [SEARCH_PREFIX]


def user_write_keys(user_id) -> tuple[list[str], list[str]]:
    return [user_key(user_id), USERS_ALL], []


def category_write_keys(category_id, parent_id=None) -> tuple[list[str], list[str]]:
    keys = [category_key(category_id), CATEGORIES_ALL]
    if parent_id:
        keys.append(category_key(parent_id))
    return keys, [CATEGORY_TREE_PREFIX]
