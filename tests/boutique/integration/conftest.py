import pytest
from boutique.api import bags_router, dashboard_router, dresses_router, sales_router, shoes_router
from boutique.api.errors import register_error_handlers
from fastapi import FastAPI
from fastapi.testclient import TestClient


@pytest.fixture()
def client():
    app = FastAPI()
    for router in (shoes_router, bags_router, dresses_router, sales_router, dashboard_router):
        app.include_router(router)
    register_error_handlers(app)
    return TestClient(app)


@pytest.fixture()
def create(client):
    """POST a product as JSON and return the created record."""

    def _create(category="shoes", **fields):
        fields.setdefault("name", "Air")
        fields.setdefault("stock", 10)
        fields.setdefault("price", 100)
        response = client.post(f"/api/{category}", json=fields)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
