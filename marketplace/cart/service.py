"""Cart manager over the single cart collection."""
from typing import Any, Iterable, List

from pydantic import TypeAdapter, ValidationError

from marketplace.db import StoreKeys
from marketplace.logging import get_logger, sanitize_id_for_logging
from marketplace.models import CartItem, Product
from marketplace.services.base import BaseManager

from .models import CartLine, CartSummary

logger = get_logger(__name__)

_QTY = TypeAdapter(int)


def _validate_qty(qty: Any) -> int:
    """Coerce qty to int ("3" -> 3); fractions and non-numbers raise ValueError."""
    try:
        return _QTY.validate_python(qty)
    except ValidationError as e:
        raise ValueError(f"qty must be a whole number, got {qty!r}") from e


class CartManager(BaseManager):
    """
    Manages cart line items.

    Holds at most one line per product id and never a line with
    qty <= 0: any change that would leave one removes the line instead.
    """

    async def list(self) -> List[CartItem]:
        return await self._load(StoreKeys.CART, CartItem)

    async def add(self, product_id: str, qty: int = 1) -> List[CartItem]:
        """
        Add qty of a product, merging into an existing line.

        A negative qty lowers the line and removes it once it reaches 0.
        Invalid qty raises ValueError before anything is written.
        """
        if not product_id or not isinstance(product_id, str):
            raise ValueError("product_id must be a non-empty string")
        qty = _validate_qty(qty)

        async with self.store.lock(StoreKeys.CART):
            cart = await self.list()
            existing = next((item for item in cart if item.product_id == product_id), None)
            new_qty = (existing.qty if existing else 0) + qty
            if new_qty <= 0:
                cart = [item for item in cart if item.product_id != product_id]
            elif existing:
                existing.qty = new_qty
            else:
                cart.append(CartItem(product_id=product_id, qty=new_qty))

            await self._save(StoreKeys.CART, cart)

        return cart

    async def set_qty(self, product_id: str, qty: int) -> List[CartItem]:
        """Replace the qty of a line; qty <= 0 removes it."""
        qty = _validate_qty(qty)

        async with self.store.lock(StoreKeys.CART):
            cart = await self.list()
            if qty <= 0:
                cart = [item for item in cart if item.product_id != product_id]
            else:
                for item in cart:
                    if item.product_id == product_id:
                        item.qty = qty
            await self._save(StoreKeys.CART, cart)

        return cart

    async def remove(self, product_id: str) -> List[CartItem]:
        """Remove a line."""
        return await self.set_qty(product_id, 0)

    async def clear(self) -> None:
        """Delete the cart."""
        await self.store.remove(StoreKeys.CART)

    async def summary(self, products: Iterable[Product]) -> CartSummary:
        """
        Price the cart against a catalog snapshot.

        Lines whose product no longer exists are listed in ``missing``
        and left out of the total.
        """
        by_id = {p.id: p for p in products}
        summary = CartSummary()
        for item in await self.list():
            product = by_id.get(item.product_id)
            if product is None:
                logger.warning(
                    f"Cart references missing product {sanitize_id_for_logging(item.product_id)}"
                )
                summary.missing.append(item.product_id)
                continue
            summary.lines.append(CartLine(product=product, qty=item.qty))
        return summary
