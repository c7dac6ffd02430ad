"""
Storage Module - Key-value store adapters

Every collection lives as one JSON document under a fixed key. Managers
only ever call read/write/remove, so the backend is swappable:
- MemoryStore for tests and throwaway demos
- FileStore for a persistent local store (one JSON file)
- RedisStore for Upstash Redis
"""

import asyncio
import json
import os
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from upstash_redis.asyncio import Redis as AsyncRedis

from marketplace.logging import get_logger

logger = get_logger(__name__)


# Environment variables
MARKETPLACE_STORE = os.environ.get("MARKETPLACE_STORE", "memory")
MARKETPLACE_STORE_PATH = os.environ.get("MARKETPLACE_STORE_PATH", "marketplace_store.json")
MARKETPLACE_KEY_PREFIX = os.environ.get("MARKETPLACE_KEY_PREFIX", "")

# Upstash Redis - standard env var names per docs
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")


class StoreKeys:
    """Fixed keys for the persisted collections."""

    USERS = "dl_users_v1"
    PRODUCTS = "dl_products_v1"
    SESSION = "dl_session_v1"
    CART = "dl_cart_v1"
    ORDERS = "dl_orders_v1"


class KeyValueStore(ABC):
    """
    JSON read/write/remove on top of three raw string primitives.

    Reads fail soft: a missing key or a value that is not valid JSON
    yields None. Backend errors on the raw primitives propagate.
    """

    def __init__(self, key_prefix: str = ""):
        self.key_prefix = key_prefix
        self._locks: Dict[str, asyncio.Lock] = {}

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    @abstractmethod
    async def get_raw(self, key: str) -> Optional[str]:
        """Return the stored text for a full key, or None."""

    @abstractmethod
    async def set_raw(self, key: str, text: str) -> None:
        """Store text under a full key, overwriting."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete a full key; missing keys are ignored."""

    async def read(self, key: str) -> Any:
        """Read and decode the value under key, or None."""
        raw = await self.get_raw(self._key(key))
        if not raw:
            return None
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Corrupted value under {key}, treating as empty: {e}")
            return None

    async def write(self, key: str, value: Any) -> None:
        """Encode value as JSON and store it under key."""
        await self.set_raw(self._key(key), json.dumps(value, default=str))

    async def remove(self, key: str) -> None:
        """Remove key if present."""
        await self.delete(self._key(key))

    def lock(self, key: str) -> asyncio.Lock:
        """
        Lock guarding read-modify-write of one collection in this process.

        Other processes sharing the backend are not coordinated: the last
        full-collection write wins.
        """
        if key not in self._locks:
            self._locks[key] = asyncio.Lock()
        return self._locks[key]


class MemoryStore(KeyValueStore):
    """In-process store; data lives as long as the object."""

    def __init__(self, key_prefix: str = "", initial: Optional[Dict[str, str]] = None):
        super().__init__(key_prefix)
        self._data: Dict[str, str] = dict(initial or {})

    async def get_raw(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set_raw(self, key: str, text: str) -> None:
        self._data[key] = text

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class FileStore(KeyValueStore):
    """
    Persists every key to a single JSON file.

    The file maps each key to its raw JSON text, the same shape browser
    local storage has. It is re-read on every access so another process
    writing the same file is picked up (and can still be overwritten).

    All keys share the file, so every load-modify-dump runs under one
    file lock regardless of which key it touches.
    """

    def __init__(self, storage_path: str | Path, key_prefix: str = ""):
        super().__init__(key_prefix)
        self.storage_path = Path(storage_path)
        self._file_lock = threading.Lock()

    def _load(self) -> Dict[str, str]:
        if not self.storage_path.exists():
            return {}
        text = self.storage_path.read_text(encoding="utf-8")
        if not text.strip():
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning(f"Store file {self.storage_path} is not valid JSON, starting empty: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Store file {self.storage_path} does not hold an object, starting empty")
            return {}
        return data

    def _dump(self, data: Dict[str, str]) -> None:
        self.storage_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.storage_path.with_suffix(self.storage_path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        tmp_path.replace(self.storage_path)

    def _locked_load(self) -> Dict[str, str]:
        with self._file_lock:
            return self._load()

    async def get_raw(self, key: str) -> Optional[str]:
        data = await asyncio.to_thread(self._locked_load)
        value = data.get(key)
        return value if isinstance(value, str) else None

    async def set_raw(self, key: str, text: str) -> None:
        def _set():
            with self._file_lock:
                data = self._load()
                data[key] = text
                self._dump(data)

        await asyncio.to_thread(_set)

    async def delete(self, key: str) -> None:
        def _delete():
            with self._file_lock:
                data = self._load()
                if key in data:
                    del data[key]
                    self._dump(data)

        await asyncio.to_thread(_delete)


class RedisStore(KeyValueStore):
    """Upstash Redis backed store. Keys never expire."""

    def __init__(self, client: AsyncRedis, key_prefix: str = ""):
        super().__init__(key_prefix)
        self.client = client

    async def get_raw(self, key: str) -> Optional[str]:
        return await self.client.get(key)

    async def set_raw(self, key: str, text: str) -> None:
        await self.client.set(key, text)

    async def delete(self, key: str) -> None:
        await self.client.delete(key)


# Singleton instance
_store: Optional[KeyValueStore] = None


def create_store(backend: str = MARKETPLACE_STORE) -> KeyValueStore:
    """
    Build a store for the given backend name.

    Backends: memory, file (MARKETPLACE_STORE_PATH), redis
    (UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN).
    """
    backend = backend.lower()
    if backend == "memory":
        return MemoryStore(key_prefix=MARKETPLACE_KEY_PREFIX)
    if backend == "file":
        return FileStore(MARKETPLACE_STORE_PATH, key_prefix=MARKETPLACE_KEY_PREFIX)
    if backend == "redis":
        if not UPSTASH_REDIS_REST_URL or not UPSTASH_REDIS_REST_TOKEN:
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        client = AsyncRedis(url=UPSTASH_REDIS_REST_URL, token=UPSTASH_REDIS_REST_TOKEN)
        return RedisStore(client, key_prefix=MARKETPLACE_KEY_PREFIX)
    raise ValueError(f"Unknown MARKETPLACE_STORE backend: {backend}")


def get_store() -> KeyValueStore:
    """Get the process-wide store (singleton)."""
    global _store

    if _store is None:
        _store = create_store()
        logger.info(f"Using {type(_store).__name__} for marketplace storage")

    return _store


def reset_store() -> None:
    """Drop the singleton so the next get_store() builds a fresh one."""
    global _store
    _store = None
