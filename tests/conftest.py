# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Environment defaults are set before any app import, because app.main builds
# its module-level application from the environment at import time.
# =============================================================================

import os

os.environ.setdefault("API_KEY", "test-api-key")
os.environ.setdefault("ENVIRONMENT", "development")

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.database import ProductStore
from app.main import create_app

API_KEY = "test-api-key"


@pytest.fixture
def settings():
    """Production mode, so error bodies carry no stack trace."""
    return Settings(API_KEY=API_KEY, ENVIRONMENT="production")


@pytest.fixture
def store():
    return ProductStore()


@pytest.fixture
def app(settings, store):
    return create_app(settings=settings, store=store)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth_headers():
    return {"X-API-Key": API_KEY}


@pytest.fixture
def valid_product():
    return {"name": "Desk Lamp", "description": "LED lamp", "price": 35.5, "category": "home"}
