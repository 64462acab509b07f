"""FastAPI endpoints for the storefront."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    BatchTouchRequest,
    BatchTouchResponse,
    CategoryIdResponse,
    CreateCategoryRequest,
    CreateProductRequest,
    OverrideStatusRequest,
    PaymentResponse,
    PlaceOrderRequest,
    ProductIdResponse,
    RegisterUserRequest,
    SetStockRequest,
    StatusResponse,
    UpdateProductRequest,
    UserIdResponse,
)
from storefront.cache import get_cache
from storefront.cache.read_through import ReadThroughCache
from storefront.category.management import CreateCategory
from storefront.category.queries import get_category, list_categories
from storefront.category.tree import category_tree
from storefront.order.cancellation import CancelOrder
from storefront.order.placement import PlaceOrder
from storefront.order.queries import get_order, get_order_details, list_orders
from storefront.order.status import OverrideOrderStatus
from storefront.payment.retry import PaymentRetryExecutor
from storefront.product.batch import touch_products
from storefront.product.management import CreateProduct, RemoveProduct, SetProductStock, UpdateProduct
from storefront.product.queries import get_product, list_products, search_products
from storefront.user.queries import get_user, list_users
from storefront.user.registration import RegisterUser, RemoveUser

user_router = APIRouter(prefix="/users", tags=["users"])
category_router = APIRouter(prefix="/categories", tags=["categories"])
product_router = APIRouter(prefix="/products", tags=["products"])
order_router = APIRouter(prefix="/orders", tags=["orders"])


# --- User endpoints ---


@user_router.post("", status_code=201, response_model=UserIdResponse)
async def register_user(body: RegisterUserRequest) -> UserIdResponse:
    result = current_domain.process(RegisterUser(email=body.email, name=body.name), asynchronous=False)
    return UserIdResponse(user_id=result)


@user_router.get("")
async def get_users(cache: ReadThroughCache = Depends(get_cache)) -> list[dict]:
    return list_users(cache=cache)


@user_router.get("/{user_id}")
async def get_user_by_id(user_id: str, cache: ReadThroughCache = Depends(get_cache)) -> dict:
    return get_user(user_id, cache=cache)


@user_router.delete("/{user_id}", response_model=StatusResponse)
async def remove_user(user_id: str) -> StatusResponse:
    current_domain.process(RemoveUser(user_id=user_id), asynchronous=False)
    return StatusResponse()


# --- Category endpoints ---


@category_router.post("", status_code=201, response_model=CategoryIdResponse)
async def create_category(body: CreateCategoryRequest) -> CategoryIdResponse:
    command = CreateCategory(name=body.name, description=body.description, parent_id=body.parent_id)
    result = current_domain.process(command, asynchronous=False)
    return CategoryIdResponse(category_id=result)


@category_router.get("")
async def get_categories(cache: ReadThroughCache = Depends(get_cache)) -> list[dict]:
    return list_categories(cache=cache)


@category_router.get("/{category_id}")
async def get_category_by_id(category_id: str, cache: ReadThroughCache = Depends(get_cache)) -> dict:
    return get_category(category_id, cache=cache)


@category_router.get("/{category_id}/tree")
async def get_category_tree(category_id: str, cache: ReadThroughCache = Depends(get_cache)) -> dict:
    return category_tree(category_id, cache=cache)


# --- Product endpoints ---


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(body: CreateProductRequest) -> ProductIdResponse:
    command = CreateProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        stock=body.stock,
        category_id=body.category_id,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.get("")
async def get_products(cache: ReadThroughCache = Depends(get_cache)) -> list[dict]:
    return list_products(cache=cache)


@product_router.get("/search")
async def search(q: str = "", cache: ReadThroughCache = Depends(get_cache)) -> list[dict]:
    return search_products(q, cache=cache)


@product_router.post("/batch", response_model=BatchTouchResponse)
async def batch_touch(body: BatchTouchRequest) -> BatchTouchResponse:
    return BatchTouchResponse(**touch_products(body.product_ids))


@product_router.get("/{product_id}")
async def get_product_by_id(product_id: str, cache: ReadThroughCache = Depends(get_cache)) -> dict:
    return get_product(product_id, cache=cache)


@product_router.put("/{product_id}")
async def update_product(
    product_id: str, body: UpdateProductRequest, cache: ReadThroughCache = Depends(get_cache)
) -> dict:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        is_available=body.is_available,
    )
    current_domain.process(command, asynchronous=False)
    return get_product(product_id, cache=cache)


@product_router.put("/{product_id}/stock")
async def set_product_stock(
    product_id: str, body: SetStockRequest, cache: ReadThroughCache = Depends(get_cache)
) -> dict:
    current_domain.process(SetProductStock(product_id=product_id, quantity=body.quantity), asynchronous=False)
    return get_product(product_id, cache=cache)


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def remove_product(product_id: str) -> StatusResponse:
    current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


# --- Order endpoints ---


@order_router.post("", status_code=201)
async def place_order(body: PlaceOrderRequest) -> dict:
    lines = json.dumps([{"product_id": line.product_id, "quantity": line.quantity} for line in body.items])
    order_id = current_domain.process(PlaceOrder(user_id=body.user_id, lines=lines), asynchronous=False)
    return get_order(order_id)


@order_router.get("")
async def get_orders(user_id: str | None = None) -> list[dict]:
    return list_orders(user_id=user_id)


@order_router.get("/{order_id}")
async def get_order_by_id(order_id: str) -> dict:
    return get_order(order_id)


@order_router.get("/{order_id}/full")
async def get_order_full(order_id: str) -> dict:
    return get_order_details(order_id)


# Plain ``def``: the retry loop sleeps, so it runs in the threadpool
@order_router.post("/{order_id}/pay", response_model=PaymentResponse)
def pay_order(order_id: str) -> PaymentResponse:
    receipt = PaymentRetryExecutor().pay(order_id)
    return PaymentResponse(success=True, transaction_id=receipt.transaction_id)


@order_router.post("/{order_id}/cancel")
async def cancel_order(order_id: str) -> dict:
    current_domain.process(CancelOrder(order_id=order_id), asynchronous=False)
    return get_order(order_id)


@order_router.patch("/{order_id}/status")
async def override_order_status(order_id: str, body: OverrideStatusRequest) -> dict:
    current_domain.process(OverrideOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    return get_order(order_id)
