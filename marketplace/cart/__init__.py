"""Cart package: summary models and cart manager."""
from .models import CartLine, CartSummary
from .service import CartManager

__all__ = [
    "CartLine",
    "CartSummary",
    "CartManager",
]
