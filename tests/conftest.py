"""Pytest configuration and fixtures"""
import os
import pytest

# Set test environment variables
os.environ.setdefault("MARKETPLACE_STORE", "memory")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from marketplace.app import Marketplace
from marketplace.auth import IdentityManager
from marketplace.cart import CartManager
from marketplace.catalog import CatalogManager
from marketplace.db import MemoryStore, reset_store
from marketplace.orders import OrderManager


@pytest.fixture(autouse=True)
def _fresh_store_singleton():
    """Never leak the process-wide store between tests."""
    reset_store()
    yield
    reset_store()


@pytest.fixture
def store():
    """Empty in-memory store"""
    return MemoryStore()


@pytest.fixture
def identity(store):
    return IdentityManager(store)


@pytest.fixture
def catalog(store):
    return CatalogManager(store)


@pytest.fixture
def cart(store):
    return CartManager(store)


@pytest.fixture
def orders(store):
    return OrderManager(store)


@pytest.fixture
def marketplace(store):
    """Facade over the shared test store (not seeded)"""
    return Marketplace(store)


@pytest.fixture
def sample_user():
    """Signup payload"""
    return {
        "name": "Test User",
        "email": "test@example.com",
        "password": "s3cret-pass",
    }


@pytest.fixture
def sample_product():
    """Product payload as a form would send it"""
    return {
        "title": "Icon Pack",
        "price": "9.99",
        "desc": "120 line icons",
        "image": "https://example.com/icons.png",
        "seller_id": "user_abc12345",
    }
