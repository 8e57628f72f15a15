# sdk/pystore.py
import httpx
import requests
from typing import Any, Dict, List, Optional


class StoreAPIError(Exception):
    """Raised for any non-2xx answer; mirrors the server's JSON error body."""

    def __init__(self, status_code: int, error: str, message: str, details: Optional[List[str]] = None):
        super().__init__(f"{status_code} {error}: {message}")
        self.status_code = status_code
        self.error = error
        self.message = message
        self.details = details or []


def _raise_for_error(r) -> None:
    if r.status_code < 400:
        return
    try:
        body = r.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    raise StoreAPIError(
        r.status_code,
        body.get("error", "HTTPError"),
        body.get("message", r.text),
        body.get("details"),
    )


class StoreClient:
    def __init__(self, base_url: str = "http://localhost:3000", api_key: Optional[str] = None,
                 timeout: int = 10, session: Any = None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.api_key = api_key
        if api_key:
            self.session.headers.update({"X-API-Key": api_key})

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def info(self) -> Dict[str, Any]:
        r = self.session.get(self._url("/"), timeout=self.timeout)
        _raise_for_error(r)
        return r.json()

    # Products
    def list_products(self, category: Optional[str] = None, page: Optional[int] = None,
                      limit: Optional[int] = None) -> Dict[str, Any]:
        params = {}
        if category:
            params["category"] = category
        if page is not None:
            params["page"] = str(page)
        if limit is not None:
            params["limit"] = str(limit)
        r = self.session.get(self._url("/api/products"), params=params, timeout=self.timeout)
        _raise_for_error(r)
        return r.json()

    def get_product(self, product_id: str) -> Dict[str, Any]:
        r = self.session.get(self._url(f"/api/products/{product_id}"), timeout=self.timeout)
        _raise_for_error(r)
        return r.json()

    def create_product(self, name: str, price: float, category: str, description: Optional[str] = None,
                       in_stock: Optional[bool] = None, **extra: Any) -> Dict[str, Any]:
        payload = {"name": name, "price": price, "category": category, **extra}
        if description is not None:
            payload["description"] = description
        if in_stock is not None:
            payload["inStock"] = in_stock
        return self.create_raw(payload)

    def create_raw(self, payload: Any) -> Dict[str, Any]:
        # Sends the body as-is, so callers can exercise server-side validation
        r = self.session.post(self._url("/api/products"), json=payload, timeout=self.timeout)
        _raise_for_error(r)
        return r.json()

    def update_product(self, product_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        r = self.session.put(self._url(f"/api/products/{product_id}"), json=payload, timeout=self.timeout)
        _raise_for_error(r)
        return r.json()

    def delete_product(self, product_id: str) -> None:
        r = self.session.delete(self._url(f"/api/products/{product_id}"), timeout=self.timeout)
        _raise_for_error(r)

    def search_products(self, q: str) -> List[Dict[str, Any]]:
        r = self.session.get(self._url("/api/products/search"), params={"q": q}, timeout=self.timeout)
        _raise_for_error(r)
        return r.json()

    def stats(self) -> Dict[str, Any]:
        r = self.session.get(self._url("/api/products/stats"), timeout=self.timeout)
        _raise_for_error(r)
        return r.json()

    # Async create (example)
    async def create_product_async(self, name: str, price: float, category: str,
                                   transport: Optional[httpx.AsyncBaseTransport] = None) -> Dict[str, Any]:
        headers = {"X-API-Key": self.api_key} if self.api_key else {}
        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=transport) as client:
            r = await client.post("/api/products", json={"name": name, "price": price, "category": category},
                                  headers=headers)
            _raise_for_error(r)
            return r.json()
