"""Base manager with shared store access."""
from typing import List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from marketplace.db import KeyValueStore
from marketplace.logging import get_logger

logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


class BaseManager:
    """Base class for all managers: whole-collection load and save."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    async def _load(self, key: str, model: Type[M]) -> List[M]:
        """Load a collection, skipping records that no longer validate."""
        data = await self.store.read(key)
        if data is None:
            return []
        if not isinstance(data, list):
            logger.warning(f"Collection {key} is not a list, treating as empty")
            return []

        records = []
        for raw in data:
            try:
                records.append(model.model_validate(raw))
            except ValidationError as e:
                logger.warning(f"Skipping invalid {model.__name__} in {key}: {e.error_count()} errors")
        return records

    async def _save(self, key: str, records: List[BaseModel]) -> None:
        """Rewrite the whole collection."""
        await self.store.write(key, [r.model_dump(mode="json") for r in records])
