"""Order processing module."""
from .serializer import build_order_payload
from .service import OrderManager

__all__ = [
    "build_order_payload",
    "OrderManager",
]
