"""Cached user reads."""

from protean.utils.globals import current_domain

from storefront.cache import get_cache
from storefront.cache.keys import USERS_ALL, user_key
from storefront.user.user import User


def user_to_dict(user) -> dict:
    return {
        "id": str(user.id),
        "email": user.email,
        "name": user.name,
        "is_active": user.is_active,
        "created_at": user.created_at.isoformat() if user.created_at else None,
    }


def list_users(cache=None) -> list[dict]:
    if cache is None:
        cache = get_cache()

    def load():
        users = current_domain.repository_for(User).query.order_by("created_at").limit(None).all().items
        return [user_to_dict(user) for user in users]

    return cache.get_or_load(USERS_ALL, load)


def get_user(user_id, cache=None) -> dict:
    """Raises ``ObjectNotFoundError`` for an unknown id; misses are never cached."""
    if cache is None:
        cache = get_cache()
    return cache.get_or_load(
        user_key(user_id),
        lambda: user_to_dict(current_domain.repository_for(User).get(user_id)),
    )
