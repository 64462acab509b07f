"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the storefront's validation rules
and match the field names expected by the API's Pydantic request schemas.
"""

import random
import uuid
from decimal import Decimal

from faker import Faker

fake = Faker()


def valid_email() -> str:
    """Unique, well-formed email address."""
    local = fake.user_name()[:20]
    domain = fake.free_email_domain()
    return f"{local}.{uuid.uuid4().hex[:6]}@{domain}"


def user_data() -> dict:
    """RegisterUserRequest payload."""
    return {"email": valid_email(), "name": fake.name()[:100]}


def category_data(parent_id: str | None = None) -> dict:
    """CreateCategoryRequest payload."""
    data = {
        "name": f"{fake.word().title()} {uuid.uuid4().hex[:4]}",
        "description": fake.sentence(nb_words=6),
    }
    if parent_id:
        data["parent_id"] = parent_id
    return data


def product_data(stock: int | None = None, category_id: str | None = None) -> dict:
    """CreateProductRequest payload. Prices carry two decimal places."""
    price = Decimal(random.randint(100, 50000)) / 100
    data = {
        "name": f"{fake.color_name()} {fake.word().title()}"[:255],
        "description": fake.sentence(nb_words=10),
        "price": str(price),
        "stock": stock if stock is not None else random.randint(5, 200),
    }
    if category_id:
        data["category_id"] = category_id
    return data


def order_data(user_id: str, product_ids: list[str], max_quantity: int = 3) -> dict:
    """PlaceOrderRequest payload with one line per distinct product."""
    lines = random.sample(product_ids, k=random.randint(1, min(3, len(product_ids))))
    return {
        "user_id": user_id,
        "items": [{"product_id": pid, "quantity": random.randint(1, max_quantity)} for pid in lines],
    }


def search_term() -> str:
    return random.choice(["red", "blue", "widget", "table", fake.word()])
