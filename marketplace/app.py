"""
Marketplace facade.

Bundles the managers over one store; this is the whole surface a UI
calls. Build it with ``await create_marketplace()`` so the demo catalog
is seeded once at start-up.
"""
from typing import Any, Dict, List, Optional

from marketplace.auth import IdentityManager
from marketplace.cart import CartManager, CartSummary
from marketplace.catalog import CatalogManager
from marketplace.db import KeyValueStore, get_store
from marketplace.errors import UnauthorizedError
from marketplace.logging import get_logger
from marketplace.models import Order
from marketplace.orders import OrderManager, build_order_payload
from marketplace.services.money import format_money

logger = get_logger(__name__)


class Marketplace:
    """Identity, catalog, cart and orders sharing a single store."""

    def __init__(self, store: KeyValueStore):
        self.store = store
        self.identity = IdentityManager(store)
        self.catalog = CatalogManager(store)
        self.cart = CartManager(store)
        self.orders = OrderManager(store)

    async def start(self) -> None:
        await self.catalog.seed_if_empty()

    async def cart_summary(self) -> CartSummary:
        return await self.cart.summary(await self.catalog.list())

    async def checkout(self) -> Order:
        """
        Place an order for the logged-in user from the current cart.

        Prices come from the catalog at checkout time; lines whose product
        has been removed are dropped from the order.
        """
        user = await self.identity.current_user()
        if user is None:
            raise UnauthorizedError()

        summary = await self.cart_summary()
        return await self.orders.place_order(user.id, summary.items(), summary.total)

    async def order_history(self, buyer_id: Optional[str] = None) -> List[Dict[str, Any]]:
        products = {p.id: p for p in await self.catalog.list()}
        return [build_order_payload(o, products) for o in await self.orders.list(buyer_id)]

    @staticmethod
    def money(value) -> str:
        """Display a price, e.g. ``$9.99``."""
        return format_money(value)


async def create_marketplace(store: Optional[KeyValueStore] = None) -> Marketplace:
    """Build the facade over store (default: get_store()) and seed the catalog."""
    marketplace = Marketplace(store if store is not None else get_store())
    await marketplace.start()
    logger.info(f"Marketplace ready on {type(marketplace.store).__name__}")
    return marketplace
