"""Catalog package: demo seed data and product manager."""
from .seed import DEMO_PRODUCTS, demo_products, placeholder_image
from .service import CatalogManager

__all__ = [
    "CatalogManager",
    "DEMO_PRODUCTS",
    "demo_products",
    "placeholder_image",
]
