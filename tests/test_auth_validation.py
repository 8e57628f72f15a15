# tests/test_auth_validation.py
from fastapi.testclient import TestClient

from app.config import Settings
from app.database import ProductStore
from app.main import create_app

ALL_RULES = [
    "Name is required and must be text",
    "Price must be a positive number",
    "Category is required and must be text",
]


def test_invalid_key_is_rejected(client, valid_product):
    r = client.post("/api/products", json=valid_product, headers={"X-API-Key": "invalid-key"})
    assert r.status_code == 401
    assert r.json() == {"error": "UnauthorizedError", "message": "Invalid API key"}


def test_missing_key_is_rejected(client, store, valid_product):
    r = client.post("/api/products", json=valid_product)
    assert r.status_code == 401
    assert len(store) == 2


def test_every_mutating_route_requires_key(client, valid_product):
    assert client.put("/api/products/1", json=valid_product).status_code == 401
    assert client.delete("/api/products/1").status_code == 401


def test_unset_secret_rejects_everything(valid_product):
    app = create_app(settings=Settings(API_KEY=None, ENVIRONMENT="production"), store=ProductStore())
    client = TestClient(app)
    assert client.post("/api/products", json=valid_product).status_code == 401
    assert client.post("/api/products", json=valid_product, headers={"X-API-Key": ""}).status_code == 401


def test_auth_runs_before_validation(client):
    r = client.post("/api/products", json={"price": -10}, headers={"X-API-Key": "invalid-key"})
    assert r.status_code == 401


def test_validation_accumulates_all_failures(client, store, auth_headers):
    r = client.post("/api/products", json={"price": -10}, headers=auth_headers)
    assert r.status_code == 400
    body = r.json()
    assert body["error"] == "ValidationError"
    assert body["message"] == "Product validation failed"
    assert body["details"] == ALL_RULES
    assert len(store) == 2


def test_validation_reports_only_failed_rules(client, auth_headers):
    r = client.post("/api/products", json={"name": "X", "price": 0, "category": "c"}, headers=auth_headers)
    assert r.json()["details"] == ["Price must be a positive number"]


def test_non_numeric_prices_are_rejected(client, auth_headers):
    for price in ("10", True, None):
        r = client.post("/api/products", json={"name": "X", "price": price, "category": "c"}, headers=auth_headers)
        assert r.status_code == 400, price
        assert r.json()["details"] == ["Price must be a positive number"]


def test_empty_body_fails_every_rule(client, auth_headers):
    r = client.post("/api/products", headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["details"] == ALL_RULES


def test_non_object_body_fails_every_rule(client, auth_headers):
    r = client.post("/api/products", json=["Laptop", 10, "x"], headers=auth_headers)
    assert r.json()["details"] == ALL_RULES


def test_malformed_json_is_a_validation_error(client, auth_headers):
    r = client.post(
        "/api/products",
        content=b"{not json",
        headers={**auth_headers, "Content-Type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json()["message"] == "Malformed JSON body"


def test_update_is_validated(client, store, auth_headers):
    r = client.put("/api/products/1", json={"name": "Only name"}, headers=auth_headers)
    assert r.status_code == 400
    assert store.get("1")["name"] == "Laptop"


def test_non_json_content_type_is_treated_as_empty_body(client, store, auth_headers):
    r = client.post(
        "/api/products",
        content=b'{"name": "Mug", "price": 8, "category": "kitchen"}',
        headers={**auth_headers, "Content-Type": "text/plain"},
    )
    assert r.status_code == 400
    assert r.json()["details"] == ALL_RULES
    assert len(store) == 2


def test_json_content_type_with_charset_is_read(client, auth_headers):
    r = client.post(
        "/api/products",
        content=b'{"name": "Mug", "price": 8, "category": "kitchen"}',
        headers={**auth_headers, "Content-Type": "application/json; charset=utf-8"},
    )
    assert r.status_code == 201
    assert r.json()["name"] == "Mug"
