"""
Marketplace demo backend

This package persists users, products, a cart and orders in a key-value
store:
- db: store adapters (memory, JSON file, Upstash Redis)
- auth: signup/login and the active session
- catalog: products and demo seeding
- cart: cart lines and pricing summary
- orders: order history
- app: the Marketplace facade

Note: Imports are lazy so importing the package does not build a store.
"""

__all__ = [
    "Marketplace",
    "create_marketplace",
    "get_store",
]


def __getattr__(name):
    """Lazy attribute access."""
    if name == "Marketplace":
        from marketplace.app import Marketplace
        return Marketplace
    elif name == "create_marketplace":
        from marketplace.app import create_marketplace
        return create_marketplace
    elif name == "get_store":
        from marketplace.db import get_store
        return get_store
    raise AttributeError(f"module 'marketplace' has no attribute '{name}'")
