# =============================================================================
# app/dependencies.py - Request Pipeline Stages
# =============================================================================
# Each stage either returns a value for the next one or raises an ApiError,
# which the terminal error handler turns into the JSON error response.
#
# Mutating routes run: require_api_key -> validated_product -> handler.
# =============================================================================

import json
import logging
from typing import Any, Dict, Optional

from fastapi import Depends, Header, Request

from .config import Settings
from .core import validate_product
from .database import ProductStore
from .errors import unauthorized, validation

logger = logging.getLogger(__name__)


def get_store(request: Request) -> ProductStore:
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def require_api_key(
    x_api_key: Optional[str] = Header(None),
    settings: Settings = Depends(get_app_settings),
) -> None:
    if not x_api_key or x_api_key != settings.API_KEY:
        raise unauthorized("Invalid API key")


async def product_payload(request: Request) -> Any:
    # only JSON bodies are read; anything else is an empty payload
    if not request.headers.get("content-type", "").lower().startswith("application/json"):
        return {}
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        logger.debug("Rejected unparseable request body on %s", request.url.path)
        raise validation("Malformed JSON body")


async def validated_product(payload: Any = Depends(product_payload)) -> Dict[str, Any]:
    errors = validate_product(payload)
    if errors:
        raise validation("Product validation failed", errors)
    return payload
