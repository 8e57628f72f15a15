# app/main.py
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional, Dict, Any, List

from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .database import ProductStore
from .dependencies import get_store, require_api_key, validated_product
from .errors import ApiError, ErrorKind, format_trace, not_found
from .handlers import (
    api_info_logic, create_product_logic, delete_product_logic,
    get_product_logic, list_products_logic, product_stats_logic,
    search_products_logic, update_product_logic,
)
from .log_config import configure_logging
from .models import ApiInfo, ErrorResponse, ProductPage, ProductStats

logger = logging.getLogger(__name__)

ENDPOINTS = [
    ("GET", "/api/products", "List products"),
    ("POST", "/api/products", "Create product (requires auth)"),
    ("GET", "/api/products/:id", "Get product details"),
    ("PUT", "/api/products/:id", "Update product (requires auth)"),
    ("DELETE", "/api/products/:id", "Delete product (requires auth)"),
    ("GET", "/api/products/search", "Search products"),
    ("GET", "/api/products/stats", "Get statistics"),
]

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


def _original_url(request: Request) -> str:
    url = request.url.path
    if request.url.query:
        url += "?" + request.url.query
    return url


def _error_response(settings: Settings, err: ApiError, source: BaseException) -> JSONResponse:
    if err.status_code >= 500:
        logger.error("[ERROR] %s", format_trace(source).rstrip())
    body = err.to_dict()
    if not settings.is_production:
        body["stack"] = format_trace(source)
    return JSONResponse(status_code=err.status_code, content=body)


def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Server running on http://localhost:{settings.PORT}")
        logger.info(f"API Key: {'Set' if settings.api_key_configured else 'Not set (see .env)'}")
        logger.info(f"Environment: {settings.ENVIRONMENT}")
        logger.info("Available endpoints:")
        for method, path, summary in ENDPOINTS:
            logger.info(f"  {method:<6} {path:<24} - {summary}")
        yield
        logger.info("Shutting down Products API")

    app = FastAPI(title="Products API (in-memory demo)", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store if store is not None else ProductStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------------------------
    # Request logger
    # ---------------------------
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        stamp = datetime.now(timezone.utc).isoformat()
        logger.info(f"[{stamp}] {request.method} {_original_url(request)}")
        return await call_next(request)

    # ---------------------------
    # Error handling
    # ---------------------------
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return _error_response(settings, exc, exc)

    @app.exception_handler(StarletteHTTPException)
    async def unmatched_route_handler(request: Request, exc: StarletteHTTPException):
        # 404 and 405 both mean no route matched this method and path
        if exc.status_code in (404, 405):
            err = not_found(f"Endpoint {request.method} {_original_url(request)} not found")
            return _error_response(settings, err, exc)
        kind = next((k for k in ErrorKind if k.status_code == exc.status_code), ErrorKind.INTERNAL)
        err = ApiError(kind, str(exc.detail))
        if exc.status_code < 500:
            return JSONResponse(status_code=exc.status_code, content=err.to_dict())
        return _error_response(settings, err, exc)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        err = ApiError(ErrorKind.INTERNAL, str(exc))
        return _error_response(settings, err, exc)

    # ---------------------------
    # Routes
    # ---------------------------
    @app.get("/", response_model=ApiInfo)
    async def root():
        return await api_info_logic()

    @app.get("/api/products", response_model=ProductPage)
    async def list_products(category: Optional[str] = None, page: Optional[str] = None,
                            limit: Optional[str] = None, store: ProductStore = Depends(get_store)):
        return await list_products_logic(store, category, page, limit)

    # search and stats must be registered before /{product_id}
    @app.get("/api/products/search", responses={400: {"model": ErrorResponse}})
    async def search(q: Optional[str] = None, store: ProductStore = Depends(get_store)) -> List[Dict[str, Any]]:
        return await search_products_logic(store, q)

    @app.get("/api/products/stats", response_model=ProductStats)
    async def stats(store: ProductStore = Depends(get_store)):
        return await product_stats_logic(store)

    @app.get("/api/products/{product_id}", responses={404: {"model": ErrorResponse}})
    async def get_product(product_id: str, store: ProductStore = Depends(get_store)) -> Dict[str, Any]:
        return await get_product_logic(store, product_id)

    @app.post("/api/products", status_code=201, responses=ERROR_RESPONSES,
              dependencies=[Depends(require_api_key)])
    async def create_product(product: Dict[str, Any] = Depends(validated_product),
                             store: ProductStore = Depends(get_store)) -> Dict[str, Any]:
        return await create_product_logic(store, product)

    @app.put("/api/products/{product_id}", responses=ERROR_RESPONSES,
             dependencies=[Depends(require_api_key)])
    async def update_product(product_id: str, product: Dict[str, Any] = Depends(validated_product),
                             store: ProductStore = Depends(get_store)) -> Dict[str, Any]:
        return await update_product_logic(store, product_id, product)

    @app.delete("/api/products/{product_id}", status_code=204, response_class=Response,
                responses=ERROR_RESPONSES, dependencies=[Depends(require_api_key)])
    async def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
        await delete_product_logic(store, product_id)
        return Response(status_code=204)

    return app


app = create_app()


def run():
    import uvicorn
    settings = get_settings()
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level="debug" if settings.DEBUG else "info")


if __name__ == "__main__":
    run()
