# tests/test_sdk.py
import pytest
from fastapi.testclient import TestClient

from sdk.pystore import StoreAPIError, StoreClient

from conftest import API_KEY


@pytest.fixture
def sdk(app):
    return StoreClient(base_url="http://testserver", api_key=API_KEY, session=TestClient(app))


def test_info(sdk):
    assert "products" in sdk.info()["endpoints"]


def test_list_products_passes_filters(sdk):
    page = sdk.list_products(category="kitchen", page=1, limit=5)
    assert [p["id"] for p in page["data"]] == ["2"]
    assert page["pagination"]["itemsPerPage"] == 5


def test_create_get_update_delete(sdk):
    created = sdk.create_product("Chair", 49.0, "furniture", description="Oak", in_stock=False)
    assert created["inStock"] is False
    assert sdk.get_product(created["id"])["description"] == "Oak"

    updated = sdk.update_product(created["id"], {"name": "Chair", "price": 45.0, "category": "furniture"})
    assert updated["price"] == 45.0
    assert updated["description"] == "Oak"

    assert sdk.delete_product(created["id"]) is None
    with pytest.raises(StoreAPIError) as exc:
        sdk.get_product(created["id"])
    assert exc.value.status_code == 404


def test_errors_carry_server_body(sdk):
    with pytest.raises(StoreAPIError) as exc:
        sdk.create_raw({"price": -10})
    assert exc.value.status_code == 400
    assert exc.value.error == "ValidationError"
    assert len(exc.value.details) == 3


def test_wrong_key_raises_unauthorized(app):
    bad = StoreClient(base_url="http://testserver", api_key="invalid-key", session=TestClient(app))
    with pytest.raises(StoreAPIError) as exc:
        bad.create_product("X", 1, "c")
    assert exc.value.status_code == 401
    assert exc.value.message == "Invalid API key"


def test_search_and_stats(sdk):
    assert [p["name"] for p in sdk.search_products("laptop")] == ["Laptop"]
    assert sdk.stats()["totalProducts"] == 2
