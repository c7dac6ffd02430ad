"""Catalog manager: product CRUD over the products collection."""
from typing import Any, Dict, List, Optional, Union

from marketplace.db import StoreKeys
from marketplace.errors import ERROR_PRODUCT_NOT_FOUND, NotFoundError
from marketplace.logging import get_logger, sanitize_id_for_logging, sanitize_string_for_logging
from marketplace.models import Product
from marketplace.services.base import BaseManager

from .seed import demo_products, placeholder_image

logger = get_logger(__name__)


class CatalogManager(BaseManager):
    """
    Manages product records.

    New products are prepended, so list() is newest first.
    """

    async def seed_if_empty(self) -> bool:
        """Store the demo catalog if there are no products. Returns True if seeded."""
        async with self.store.lock(StoreKeys.PRODUCTS):
            products = await self.list()
            if products:
                return False
            await self._save(StoreKeys.PRODUCTS, demo_products())

        logger.info("Seeded demo catalog")
        return True

    async def list(self) -> List[Product]:
        return await self._load(StoreKeys.PRODUCTS, Product)

    async def get(self, product_id: str) -> Optional[Product]:
        """Resolve a product id; None when nothing matches."""
        products = await self.list()
        return next((p for p in products if p.id == product_id), None)

    async def list_by_seller(self, seller_id: str) -> List[Product]:
        products = await self.list()
        return [p for p in products if p.seller_id == seller_id]

    async def add(
        self,
        title: str,
        price: Union[str, int, float],
        desc: Optional[str] = None,
        image: Optional[str] = None,
        *,
        seller_id: str,
    ) -> Product:
        """
        Create a product owned by seller_id.

        Price strings are coerced to numbers. Only seeding uses the
        system seller; an empty seller_id raises ValueError.
        """
        if not seller_id or not isinstance(seller_id, str):
            raise ValueError("seller_id must be a non-empty string")

        product = Product(
            title=title,
            price=price,
            desc=desc,
            image=image or placeholder_image(),
            seller_id=seller_id,
        )

        async with self.store.lock(StoreKeys.PRODUCTS):
            products = await self.list()
            products.insert(0, product)
            await self._save(StoreKeys.PRODUCTS, products)

        logger.info(
            f"Product added: {sanitize_id_for_logging(product.id)} "
            f"'{sanitize_string_for_logging(title)}'"
        )
        return product

    async def update(self, product_id: str, fields: Dict[str, Any]) -> Product:
        """
        Shallow-merge fields into a product.

        Fields not given are kept and the id cannot change. Raises
        NotFoundError (leaving the catalog untouched) if the id is unknown.
        """
        async with self.store.lock(StoreKeys.PRODUCTS):
            products = await self.list()
            idx = next((i for i, p in enumerate(products) if p.id == product_id), None)
            if idx is None:
                raise NotFoundError(product_id, ERROR_PRODUCT_NOT_FOUND)

            merged = {**products[idx].model_dump(), **fields, "id": product_id}
            products[idx] = Product.model_validate(merged)
            await self._save(StoreKeys.PRODUCTS, products)

        logger.info(f"Product updated: {sanitize_id_for_logging(product_id)}")
        return products[idx]

    async def remove(self, product_id: str) -> None:
        """Delete a product; unknown ids are ignored."""
        async with self.store.lock(StoreKeys.PRODUCTS):
            products = await self.list()
            remaining = [p for p in products if p.id != product_id]
            await self._save(StoreKeys.PRODUCTS, remaining)

        if len(remaining) != len(products):
            logger.info(f"Product removed: {sanitize_id_for_logging(product_id)}")
