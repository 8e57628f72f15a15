# tests/test_core.py
from app.core import (
    CATEGORY_RULE, NAME_RULE, PRICE_RULE, compute_stats, filter_by_category,
    make_product, merge_product, new_product_id, paginate,
    parse_positive_int, search_products, validate_product,
)
from app.database import ProductStore


def test_validate_product_accepts_valid_payload():
    assert validate_product({"name": "A", "price": 0.01, "category": "c"}) == []


def test_validate_product_rejects_empty_text():
    assert validate_product({"name": "", "price": 1, "category": ""}) == [NAME_RULE, CATEGORY_RULE]


def test_validate_product_rejects_non_text_name():
    assert validate_product({"name": 5, "price": 1, "category": "c"}) == [NAME_RULE]


def test_validate_product_rejects_bool_price():
    assert validate_product({"name": "A", "price": True, "category": "c"}) == [PRICE_RULE]


def test_parse_positive_int():
    assert parse_positive_int(None, 10) == 10
    assert parse_positive_int("3", 10) == 3
    assert parse_positive_int("3abc", 10) == 3
    assert parse_positive_int("abc", 10) == 10
    assert parse_positive_int("0", 10) == 10
    assert parse_positive_int("-2", 10) == 10


def test_paginate_total_pages_rounds_up():
    items = [{"id": str(i)} for i in range(7)]
    page, meta = paginate(items, 3, 3)
    assert page == [{"id": "6"}]
    assert meta["totalPages"] == 3
    assert len(page) <= meta["itemsPerPage"]


def test_paginate_empty():
    page, meta = paginate([], 1, 10)
    assert page == []
    assert meta["totalItems"] == 0
    assert meta["totalPages"] == 0


def test_filter_by_category_without_filter_keeps_everything():
    items = ProductStore().all()
    assert filter_by_category(items, None) == items
    assert filter_by_category(items, "Kitchen")[0]["id"] == "2"


def test_make_product_defaults_and_null_stock():
    p = make_product("abc", {"name": "A", "price": 1, "category": "c", "inStock": None})
    assert p["id"] == "abc"
    assert p["description"] == ""
    assert p["inStock"] is None


def test_merge_product_pins_id():
    merged = merge_product({"id": "1", "name": "A", "extra": 1}, {"id": "2", "name": "B"}, "1")
    assert merged == {"id": "1", "name": "B", "extra": 1}


def test_new_product_id_is_not_in_store():
    store = ProductStore()
    pid = new_product_id(store)
    assert pid and not store.contains(pid)


def test_search_products_matches_substrings():
    items = ProductStore().all()
    assert [p["id"] for p in search_products(items, "MAKER")] == ["2"]
    assert [p["id"] for p in search_products(items, "16gb")] == ["1"]


def test_compute_stats_rounds_average():
    items = [
        {"price": 10, "category": "a", "inStock": True},
        {"price": 10, "category": "a", "inStock": False},
        {"price": 11, "category": "b", "inStock": True},
    ]
    stats = compute_stats(items)
    assert stats["averagePrice"] == 10.33
    assert stats["categories"] == {"a": 2, "b": 1}
    assert stats["inStockCount"] == 2
    assert stats["outOfStockCount"] == 1


def test_compute_stats_empty():
    assert compute_stats([])["averagePrice"] == 0


def test_compute_stats_rounds_exact_halves_up():
    items = [{"price": 1, "category": "a"}, {"price": 1.25, "category": "a"}]
    assert compute_stats(items)["averagePrice"] == 1.13
