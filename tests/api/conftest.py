import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from storefront.api import category_router, order_router, product_router, register_error_handlers, user_router
from storefront.domain import storefront


@pytest.fixture()
def client():
    app = FastAPI()

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        with storefront.domain_context():
            return await call_next(request)

    register_error_handlers(app)
    app.include_router(user_router)
    app.include_router(category_router)
    app.include_router(product_router)
    app.include_router(order_router)
    return TestClient(app)


@pytest.fixture()
def api_user(client):
    response = client.post("/users", json={"email": "jane@example.com", "name": "Jane Doe"})
    assert response.status_code == 201
    return response.json()["user_id"]


@pytest.fixture()
def api_product(client):
    def _create(name="Widget", price="9.99", stock=5, **extra):
        response = client.post("/products", json={"name": name, "price": price, "stock": stock, **extra})
        assert response.status_code == 201
        return response.json()["product_id"]

    return _create
