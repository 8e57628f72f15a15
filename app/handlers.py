from typing import Optional, Dict, Any, List

from .core import (
    DEFAULT_LIMIT, DEFAULT_PAGE, compute_stats, filter_by_category,
    make_product, merge_product, new_product_id, paginate,
    parse_positive_int, search_products,
)
from .database import ProductStore
from .errors import ApiError, not_found, validation
from .models import ApiInfo, Pagination, ProductPage, ProductStats

# This file contains the core logic for all API endpoints.


def _missing(product_id: str) -> ApiError:
    return not_found(f"Product with ID {product_id} not found")


async def api_info_logic() -> ApiInfo:
    return ApiInfo(
        message="Welcome to Products API!",
        endpoints={
            "products": "/api/products",
            "search": "/api/products/search?q=term",
            "stats": "/api/products/stats",
        },
    )


# Product endpoints
async def list_products_logic(store: ProductStore, category: Optional[str] = None,
                              page: Optional[str] = None, limit: Optional[str] = None) -> ProductPage:
    result = filter_by_category(store.all(), category)
    page_no = parse_positive_int(page, DEFAULT_PAGE)
    per_page = parse_positive_int(limit, DEFAULT_LIMIT)
    data, pagination = paginate(result, page_no, per_page)
    return ProductPage(data=data, pagination=Pagination(**pagination))


async def get_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    p = store.get(product_id)
    if p is None:
        raise _missing(product_id)
    return p


async def create_product_logic(store: ProductStore, payload: Dict[str, Any]) -> Dict[str, Any]:
    product = make_product(new_product_id(store), payload)
    return store.add(product)


async def update_product_logic(store: ProductStore, product_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    existing = store.get(product_id)
    if existing is None:
        raise _missing(product_id)
    updated = merge_product(existing, payload, product_id)
    store.replace(product_id, updated)
    return updated


async def delete_product_logic(store: ProductStore, product_id: str) -> None:
    if store.remove(product_id) == 0:
        raise _missing(product_id)


async def search_products_logic(store: ProductStore, q: Optional[str]) -> List[Dict[str, Any]]:
    if not q:
        raise validation("Search term is required", ["q parameter is missing"])
    return search_products(store.all(), q)


async def product_stats_logic(store: ProductStore) -> ProductStats:
    return ProductStats(**compute_stats(store.all()))
