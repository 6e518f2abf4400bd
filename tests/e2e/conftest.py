"""
Fixtures for driving the API through FastAPI's TestClient.
"""
import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.core.limiter import limiter
from app.dependencies import get_current_user, get_db, get_image_storage


@pytest.fixture
def client(test_db, storage):
    def _get_db():
        yield test_db

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_image_storage] = lambda: storage
    limiter.enabled = False
    yield TestClient(app)
    limiter.enabled = True
    app.dependency_overrides.clear()


@pytest.fixture
def login_as(client):
    """Make subsequent requests run as the given user."""
    def _login(user):
        app.dependency_overrides[get_current_user] = lambda: user
    return _login


@pytest.fixture
def product_data():
    return {
        "name": "Suavizante Downy 2.8L",
        "category": "Limpieza",
        "subcategory": "Suavizante",
        "original_price": "189",
        "discount_price": "139",
        "cost_per_use": "2.5",
        "usage_unit": "ml",
        "usage_amount": "2800",
        "affiliate_url": "https://tienda.example/downy",
    }


@pytest.fixture
def image_file():
    return {"image": ("downy.png", b"\x89PNG fake", "image/png")}
