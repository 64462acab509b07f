"""Order reads. Orders are always read from the repository, never cached."""

from protean.utils.globals import current_domain

from storefront.category.category import Category
from storefront.order.order import Order
from storefront.product.product import Product
from storefront.user.user import User

UNCATEGORIZED = "Uncategorized"


def order_item_to_dict(item) -> dict:
    return {
        "id": str(item.id),
        "product_id": str(item.product_id),
        "product_name": item.product_name,
        "quantity": item.quantity,
        "price": str(item.price),
    }


def order_to_dict(order) -> dict:
    return {
        "id": str(order.id),
        "user_id": str(order.user_id),
        "status": order.status,
        "total": str(order.total),
        "transaction_id": order.transaction_id,
        "created_at": order.created_at.isoformat() if order.created_at else None,
        "updated_at": order.updated_at.isoformat() if order.updated_at else None,
        "items": [order_item_to_dict(item) for item in order.items],
    }


def list_orders(user_id=None) -> list[dict]:
    """All orders, newest first, optionally narrowed to one user."""
    query = current_domain.repository_for(Order).query
    if user_id:
        query = query.filter(user_id=str(user_id))
    orders = query.order_by("-created_at").limit(None).all().items
    return [order_to_dict(order) for order in orders]


def get_order(order_id) -> dict:
    return order_to_dict(current_domain.repository_for(Order).get(order_id))


def _category_name(product_id) -> str:
    product = current_domain.repository_for(Product).get_or_none(product_id)
    if product is None or not product.category_id:
        return UNCATEGORIZED
    category = current_domain.repository_for(Category).get_or_none(product.category_id)
    return category.name if category else UNCATEGORIZED


def get_order_details(order_id) -> dict:
    """Order with its buyer and, per line, the product's current category name."""
    order = current_domain.repository_for(Order).get(order_id)
    user = current_domain.repository_for(User).get_or_none(order.user_id)

    return {
        "id": str(order.id),
        "total": str(order.total),
        "status": order.status,
        "created_at": order.created_at.isoformat() if order.created_at else None,
        "user": (
            {"id": str(user.id), "name": user.name, "email": user.email}
            if user
            else {"id": str(order.user_id), "name": None, "email": None}
        ),
        "items": [
            {
                "product_id": str(item.product_id),
                "product_name": item.product_name,
                "quantity": item.quantity,
                "price": str(item.price),
                "category": _category_name(item.product_id),
            }
            for item in order.items
        ],
    }
