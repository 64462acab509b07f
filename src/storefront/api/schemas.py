"""Pydantic request/response schemas for the storefront API."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

# --- User Schemas ---


class RegisterUserRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"email": "jane@example.com", "name": "Jane Doe"}],
        }
    }

    email: str = Field(..., max_length=254)
    name: str = Field(..., min_length=1, max_length=100)


class UserIdResponse(BaseModel):
    user_id: str


# --- Category Schemas ---


class CreateCategoryRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"name": "Gadgets", "description": "Small electronics", "parent_id": None}],
        }
    }

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    parent_id: str | None = None


class CategoryIdResponse(BaseModel):
    category_id: str


# --- Product Schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Widget",
                    "description": "A very useful widget",
                    "price": "9.99",
                    "stock": 5,
                    "category_id": None,
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    stock: int = Field(0, ge=0)
    category_id: str | None = None


class UpdateProductRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    price: Decimal | None = Field(None, ge=0, max_digits=12, decimal_places=2)
    is_available: bool | None = None


class SetStockRequest(BaseModel):
    quantity: int = Field(..., ge=0)


class BatchTouchRequest(BaseModel):
    product_ids: list[str] = Field(default_factory=list)


class BatchTouchResponse(BaseModel):
    success: bool
    processed: int


class ProductIdResponse(BaseModel):
    product_id: str


# --- Order Schemas ---


class OrderLineRequest(BaseModel):
    product_id: str
    quantity: int = Field(..., ge=1)


class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "user_id": "4d6f1c3e-0000-0000-0000-000000000000",
                    "items": [{"product_id": "8a1b2c3d-0000-0000-0000-000000000000", "quantity": 3}],
                }
            ]
        }
    }

    user_id: str
    items: list[OrderLineRequest] = Field(..., min_length=1)


class OverrideStatusRequest(BaseModel):
    status: str = Field(..., max_length=20)


class PaymentResponse(BaseModel):
    success: bool = True
    transaction_id: str


class StatusResponse(BaseModel):
    status: str = "ok"
