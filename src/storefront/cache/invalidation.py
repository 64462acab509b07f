"""Post-commit cache invalidation.

Event handlers run synchronously once the writing unit of work has committed,
before the command returns to its caller. Each handler lists the keys a
change to its aggregate can affect; see ``storefront.cache.keys``.
"""

import json

from protean.utils.mixins import handle

from storefront.cache import get_cache
from storefront.cache.keys import category_write_keys, product_write_keys, user_write_keys
from storefront.category.category import Category
from storefront.category.events import CategoryCreated
from storefront.domain import storefront
from storefront.order.events import OrderCancelled, OrderPlaced
from storefront.order.order import Order
from storefront.product.events import ProductCreated, ProductRemoved, ProductTouched, ProductUpdated, StockSet
from storefront.product.product import Product
from storefront.user.events import UserRegistered, UserRemoved
from storefront.user.user import User


def _invalidate(keys, prefixes) -> None:
    cache = get_cache()
    cache.invalidate(*keys)
    if prefixes:
        cache.invalidate_prefix(*prefixes)


def invalidate_products(product_ids) -> None:
    for product_id in dict.fromkeys(str(pid) for pid in product_ids):
        _invalidate(*product_write_keys(product_id))


@storefront.event_handler(part_of=Product)
class ProductCacheInvalidator:
    @handle(ProductCreated)
    def on_product_created(self, event: ProductCreated) -> None:
        invalidate_products([event.product_id])

    @handle(ProductUpdated)
    def on_product_updated(self, event: ProductUpdated) -> None:
        invalidate_products([event.product_id])

    @handle(StockSet)
    def on_stock_set(self, event: StockSet) -> None:
        invalidate_products([event.product_id])

    @handle(ProductTouched)
    def on_product_touched(self, event: ProductTouched) -> None:
        invalidate_products([event.product_id])

    @handle(ProductRemoved)
    def on_product_removed(self, event: ProductRemoved) -> None:
        invalidate_products([event.product_id])


@storefront.event_handler(part_of=Order)
class OrderCacheInvalidator:
    """Orders are not cached, but placing or cancelling one moves product stock."""

    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        lines = json.loads(event.lines) if isinstance(event.lines, str) else []
        invalidate_products(line["product_id"] for line in lines)

    @handle(OrderCancelled)
    def on_order_cancelled(self, event: OrderCancelled) -> None:
        lines = json.loads(event.lines) if isinstance(event.lines, str) else []
        invalidate_products(line["product_id"] for line in lines)


@storefront.event_handler(part_of=User)
class UserCacheInvalidator:
    @handle(UserRegistered)
    def on_user_registered(self, event: UserRegistered) -> None:
        _invalidate(*user_write_keys(event.user_id))

    @handle(UserRemoved)
    def on_user_removed(self, event: UserRemoved) -> None:
        _invalidate(*user_write_keys(event.user_id))


@storefront.event_handler(part_of=Category)
class CategoryCacheInvalidator:
    @handle(CategoryCreated)
    def on_category_created(self, event: CategoryCreated) -> None:
        _invalidate(*category_write_keys(event.category_id, event.parent_id))
