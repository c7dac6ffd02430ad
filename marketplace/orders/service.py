"""Order manager: turns a cart snapshot into an order."""
from typing import Any, Iterable, List, Optional

from pydantic import BaseModel, ValidationError

from marketplace.db import StoreKeys
from marketplace.logging import get_logger, sanitize_id_for_logging
from marketplace.models import Order, OrderItem
from marketplace.services.base import BaseManager
from marketplace.services.money import to_float

logger = get_logger(__name__)


def snapshot_items(items: Iterable[Any]) -> List[OrderItem]:
    """
    Copy checkout items into order lines.

    Accepts models or dicts, including the camelCase ``productId`` shape.
    Entries without a usable product id or whole-number qty are left out
    with a warning; they never block the order.
    """
    lines = []
    for raw in items or []:
        data = raw.model_dump() if isinstance(raw, BaseModel) else raw
        try:
            lines.append(OrderItem.model_validate(data))
        except ValidationError as e:
            logger.warning(f"Dropping unusable order item: {e.error_count()} errors")
    return lines


class OrderManager(BaseManager):
    """
    Stores placed orders, newest first.

    Orders are never changed or deleted once placed. Items and total are
    taken from the caller as-is; nothing is checked against the cart or
    catalog and no stock is decremented.
    """

    async def list(self, buyer_id: Optional[str] = None) -> List[Order]:
        """Order history, optionally for one buyer."""
        orders = await self._load(StoreKeys.ORDERS, Order)
        if buyer_id is None:
            return orders
        return [o for o in orders if o.buyer_id == buyer_id]

    async def get(self, order_id: str) -> Optional[Order]:
        orders = await self.list()
        return next((o for o in orders if o.id == order_id), None)

    async def place_order(
        self,
        buyer_id: Optional[str],
        items: Iterable[Any],
        total: Any,
    ) -> Order:
        """
        Record an order, then clear the cart.

        Items and total are taken as given: nothing here rejects them, so
        only a storage failure can stop the cart from being cleared.
        """
        order = Order(
            buyer_id=str(buyer_id) if buyer_id is not None else None,
            items=snapshot_items(items),
            total=to_float(total),
        )

        async with self.store.lock(StoreKeys.ORDERS):
            orders = await self.list()
            orders.insert(0, order)
            await self._save(StoreKeys.ORDERS, orders)

        async with self.store.lock(StoreKeys.CART):
            await self.store.remove(StoreKeys.CART)

        logger.info(
            f"Order placed: {sanitize_id_for_logging(order.id)} "
            f"by {sanitize_id_for_logging(buyer_id)} total={order.total}"
        )
        return order
