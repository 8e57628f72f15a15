from typing import Any, Dict, Iterable, List, Optional

# Products present at process start. They never pass through validation.
SEED_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "name": "Laptop",
        "description": "High-performance laptop with 16GB RAM",
        "price": 1200,
        "category": "electronics",
        "inStock": True,
    },
    {
        "id": "2",
        "name": "Coffee Maker",
        "description": "Programmable coffee maker with timer",
        "price": 50,
        "category": "kitchen",
        "inStock": False,
    },
]


class ProductStore:
    """In-memory, insertion-ordered product records owned by one application."""

    def __init__(self, records: Optional[Iterable[Dict[str, Any]]] = None):
        source = SEED_PRODUCTS if records is None else records
        self._products: List[Dict[str, Any]] = [dict(p) for p in source]

    def __len__(self) -> int:
        return len(self._products)

    def all(self) -> List[Dict[str, Any]]:
        return list(self._products)

    def get(self, product_id: str) -> Optional[Dict[str, Any]]:
        for p in self._products:
            if p.get("id") == product_id:
                return p
        return None

    def contains(self, product_id: str) -> bool:
        return self.get(product_id) is not None

    def add(self, record: Dict[str, Any]) -> Dict[str, Any]:
        self._products.append(record)
        return record

    def replace(self, product_id: str, record: Dict[str, Any]) -> bool:
        for i, p in enumerate(self._products):
            if p.get("id") == product_id:
                self._products[i] = record
                return True
        return False

    def remove(self, product_id: str) -> int:
        before = len(self._products)
        self._products = [p for p in self._products if p.get("id") != product_id]
        return before - len(self._products)
