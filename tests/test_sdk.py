# tests/test_sdk.py
import pytest
from fastapi.testclient import TestClient

from app.main import app
from sdk.pystore import StoreAPIError, StoreClient
from tests.conftest import API_KEY


@pytest.fixture
def sdk():
    return StoreClient(base_url="http://testserver", api_key=API_KEY, session=TestClient(app))


def test_reads(sdk):
    page = sdk.list_products(category="electronics", in_stock=True, limit=2)
    assert page["total"] == 3
    assert len(page["data"]) == 2
    assert sdk.search_products("phone")["count"] == 2
    assert sdk.stats()["totalProducts"] == 5
    assert sdk.get_product("4")["name"] == "Desk Chair"


def test_create_update_delete(sdk):
    product = sdk.create_product("Kettle", "Electric kettle", 35.5, "kitchen")
    assert product["inStock"] is False

    updated = sdk.update_product(product["id"], price=20, in_stock=True)
    assert updated["price"] == 20
    assert updated["inStock"] is True
    assert updated["name"] == "Kettle"

    assert sdk.delete_product(product["id"])["id"] == product["id"]
    with pytest.raises(StoreAPIError) as exc:
        sdk.get_product(product["id"])
    assert exc.value.status_code == 404


def test_validation_errors_carry_details(sdk):
    with pytest.raises(StoreAPIError) as exc:
        sdk.create_product("", "desc", -1, "kitchen")
    assert exc.value.status_code == 400
    assert len(exc.value.details) == 2


def test_missing_api_key():
    anonymous = StoreClient(base_url="http://testserver", session=TestClient(app))
    with pytest.raises(StoreAPIError) as exc:
        anonymous.delete_product("1")
    assert exc.value.status_code == 401
