"""Order payload builders for display."""
from typing import Any, Dict, Mapping

from marketplace.models import Order, Product
from marketplace.services.money import format_money


def build_order_payload(order: Order, products: Mapping[str, Product]) -> Dict[str, Any]:
    """
    Build an order dict with product titles resolved.

    Args:
        order: Stored order
        products: Catalog keyed by product id

    Returns:
        Order payload; items whose product was removed get ``title`` None
    """
    items = []
    for item in order.items:
        product = products.get(item.product_id)
        items.append({
            "product_id": item.product_id,
            "qty": item.qty,
            "title": product.title if product else None,
        })

    return {
        "id": order.id,
        "buyer_id": order.buyer_id,
        "items": items,
        "total": order.total,
        "total_display": format_money(order.total),
        "created_at": order.created_at.isoformat(),
    }
