import math
import re
import uuid
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Optional, Tuple

from .database import ProductStore

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

NAME_RULE = "Name is required and must be text"
PRICE_RULE = "Price must be a positive number"
CATEGORY_RULE = "Category is required and must be text"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


# ---------------------------
# Validation
# ---------------------------
def _is_text(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _is_number(value: Any) -> bool:
    # bool is an int subclass but not a JSON number
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_product(payload: Any) -> List[str]:
    """Return every failed rule, in check order. An empty list means valid."""
    if not isinstance(payload, dict):
        payload = {}
    errors = []
    if not _is_text(payload.get("name")):
        errors.append(NAME_RULE)
    price = payload.get("price")
    if not _is_number(price) or not price > 0:
        errors.append(PRICE_RULE)
    if not _is_text(payload.get("category")):
        errors.append(CATEGORY_RULE)
    return errors


# ---------------------------
# Record construction
# ---------------------------
def new_product_id(store: ProductStore) -> str:
    pid = str(uuid.uuid4())
    while store.contains(pid):
        pid = str(uuid.uuid4())
    return pid


def make_product(product_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    record: Dict[str, Any] = {"id": product_id, "description": ""}
    record.update(payload)
    record["id"] = product_id
    record["inStock"] = payload["inStock"] if "inStock" in payload else True
    return record


def merge_product(existing: Dict[str, Any], payload: Dict[str, Any], product_id: str) -> Dict[str, Any]:
    merged = {**existing, **payload}
    merged["id"] = product_id
    return merged


# ---------------------------
# Listing
# ---------------------------
def parse_positive_int(raw: Optional[str], default: int) -> int:
    """Leading-integer parse of a query value; anything unusable gives `default`."""
    if raw is None:
        return default
    m = _LEADING_INT.match(raw)
    if not m:
        return default
    value = int(m.group(1))
    return value if value >= 1 else default


def filter_by_category(items: List[Dict[str, Any]], category: Optional[str]) -> List[Dict[str, Any]]:
    if not category:
        return items
    wanted = category.lower()
    return [
        p for p in items
        if isinstance(p.get("category"), str) and p["category"].lower() == wanted
    ]


def paginate(items: List[Dict[str, Any]], page: int, limit: int) -> Tuple[List[Dict[str, Any]], Dict[str, int]]:
    start = (page - 1) * limit
    pagination = {
        "currentPage": page,
        "itemsPerPage": limit,
        "totalItems": len(items),
        "totalPages": math.ceil(len(items) / limit),
    }
    return items[start:start + limit], pagination


# ---------------------------
# Search & stats
# ---------------------------
def _contains(value: Any, term: str) -> bool:
    return isinstance(value, str) and term in value.lower()


def search_products(items: List[Dict[str, Any]], term: str) -> List[Dict[str, Any]]:
    needle = term.lower()
    return [p for p in items if _contains(p.get("name"), needle) or _contains(p.get("description"), needle)]


def compute_stats(items: List[Dict[str, Any]]) -> Dict[str, Any]:
    categories: Dict[str, int] = {}
    for p in items:
        categories[p.get("category")] = categories.get(p.get("category"), 0) + 1

    in_stock = sum(1 for p in items if p.get("inStock"))
    average = 0
    if items:
        mean = sum(p["price"] for p in items) / len(items)
        # exact binary halves round up, never to even
        average = float(Decimal(mean).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))

    return {
        "totalProducts": len(items),
        "inStockCount": in_stock,
        "outOfStockCount": len(items) - in_stock,
        "categories": categories,
        "averagePrice": average,
    }
