import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.database import PRODUCTS
from app.main import app

API_KEY = settings.api_key


@pytest.fixture(autouse=True)
def reset_store():
    PRODUCTS.reset(seed=True)
    yield
    PRODUCTS.reset(seed=True)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def auth():
    return {"x-api-key": API_KEY}


@pytest.fixture
def new_product():
    return {
        "name": "Kettle",
        "description": "Electric kettle, 1.7L",
        "price": 35.5,
        "category": "kitchen",
        "inStock": True,
    }
