# tests/test_products_api.py
from fastapi.testclient import TestClient

from app.database import PRODUCTS
from app.main import app


def test_root_lists_endpoints(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["endpoints"]["getStats"] == "GET /api/products/stats"


def test_list_products_paginated(client):
    r = client.get("/api/products", params={"page": 2, "limit": 2})
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 5
    assert body["totalPages"] == 3
    assert len(body["data"]) == 2
    assert "inStock" in body["data"][0]


def test_list_products_filters(client):
    r = client.get("/api/products", params={"category": "ELECTRONICS", "inStock": "true", "maxPrice": "500"})
    assert [p["name"] for p in r.json()["data"]] == ["Wireless Headphones"]


def test_search(client):
    r = client.get("/api/products/search", params={"q": "Phone"})
    assert r.status_code == 200
    assert r.json()["count"] == 2

    r = client.get("/api/products/search")
    assert r.status_code == 400
    assert r.json()["error"] == "Validation Error"


def test_stats(client):
    body = client.get("/api/products/stats").json()
    assert body["totalProducts"] == 5
    assert body["inStock"] == 4
    assert body["outOfStock"] == 1
    assert body["priceStats"]["min"] == 50
    assert body["priceStats"]["max"] == 1200


def test_get_product(client):
    assert client.get("/api/products/1").json()["name"] == "Laptop"

    r = client.get("/api/products/missing")
    assert r.status_code == 404
    assert r.json() == {"error": "Not Found", "message": "Product not found"}


def test_create_requires_api_key(client, new_product):
    r = client.post("/api/products", json=new_product)
    assert r.status_code == 401
    assert r.json()["error"] == "Unauthorized"

    r = client.post("/api/products", json=new_product, headers={"x-api-key": "wrong"})
    assert r.status_code == 403
    assert r.json() == {"error": "Forbidden", "message": "Invalid API key"}
    assert len(PRODUCTS) == 5


def test_auth_checked_before_validation(client):
    r = client.post("/api/products", json={})
    assert r.status_code == 401


def test_create_product(client, auth, new_product):
    r = client.post("/api/products", json=new_product, headers=auth)
    assert r.status_code == 201
    body = r.json()
    assert body["message"] == "Product created successfully"
    product = body["product"]
    assert product["id"] not in {"1", "2", "3", "4", "5"}
    assert product["inStock"] is True
    assert client.get(f"/api/products/{product['id']}").json()["name"] == "Kettle"


def test_create_defaults_in_stock_false(client, auth, new_product):
    del new_product["inStock"]
    r = client.post("/api/products", json=new_product, headers=auth)
    assert r.json()["product"]["inStock"] is False


def test_create_validation_failure(client, auth):
    r = client.post("/api/products", json={"name": "x", "price": -3}, headers=auth)
    assert r.status_code == 400
    body = r.json()
    assert body["message"] == "Validation failed"
    assert len(body["details"]) == 3
    assert len(PRODUCTS) == 5


def test_non_object_body_is_a_validation_error(client, auth):
    r = client.post("/api/products", json=["not", "an", "object"], headers=auth)
    assert r.status_code == 400
    assert r.json()["error"] == "Validation Error"


def test_update_product(client, auth):
    r = client.put("/api/products/1", json={"price": 99, "inStock": False}, headers=auth)
    assert r.status_code == 200
    product = r.json()["product"]
    assert product["price"] == 99
    assert product["inStock"] is False
    assert product["name"] == "Laptop"


def test_update_errors(client, auth):
    assert client.put("/api/products/1", json={"price": 1}).status_code == 401
    assert client.put("/api/products/1", json={"name": " "}, headers=auth).status_code == 400
    assert client.put("/api/products/missing", json={"price": 1}, headers=auth).status_code == 404


def test_delete_product(client, auth):
    r = client.delete("/api/products/3", headers=auth)
    assert r.status_code == 200
    assert r.json()["product"]["name"] == "Coffee Maker"
    assert client.get("/api/products/3").status_code == 404

    r = client.delete("/api/products/3", headers=auth)
    assert r.status_code == 404
    assert len(PRODUCTS) == 4


def test_unknown_route(client):
    r = client.get("/api/nothing-here")
    assert r.status_code == 404
    assert r.json() == {
        "error": "Route not found",
        "message": "The route /api/nothing-here does not exist",
    }


def test_unhandled_error_is_500(monkeypatch):
    def boom():
        raise RuntimeError("store exploded")

    monkeypatch.setattr(PRODUCTS, "list", boom)
    client = TestClient(app, raise_server_exceptions=False)
    r = client.get("/api/products/stats")
    assert r.status_code == 500
    assert r.json() == {"error": "Internal Server Error", "message": "store exploded"}


def test_null_fields_are_rejected(client, auth, new_product):
    r = client.post("/api/products", json={**new_product, "inStock": None}, headers=auth)
    assert r.status_code == 400
    assert r.json()["details"] == ["inStock must be a boolean value if provided"]

    r = client.post("/api/products", json={**new_product, "name": None}, headers=auth)
    assert r.status_code == 400

    for body in ({"name": None}, {"inStock": None}, {"name": None, "price": None}):
        r = client.put("/api/products/1", json=body, headers=auth)
        assert r.status_code == 400
    assert client.get("/api/products/1").json()["name"] == "Laptop"
    assert len(PRODUCTS) == 5


def test_whole_prices_serialize_without_decimals(client, auth, new_product):
    r = client.get("/api/products/1")
    assert '"price":1200,' in r.text

    new_product["price"] = 40.0
    created = client.post("/api/products", json=new_product, headers=auth).json()["product"]
    assert isinstance(created["price"], int)

    stats = client.get("/api/products/stats").json()["priceStats"]
    assert stats["min"] == 40
    assert isinstance(stats["max"], int)


def test_malformed_json_rejected_before_auth(client):
    r = client.post("/api/products", content="{bad", headers={"content-type": "application/json"})
    assert r.status_code == 400
    assert r.json()["error"] == "Validation Error"
