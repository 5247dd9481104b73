"""
Storage backends for the key-value store.

A backend is a plain string-keyed persistent map (the on-device storage
of the mobile app). It knows nothing about JSON or collections; the
KeyValueStore layers that on top.

Backends:
- MemoryBackend: process-local dict, used in tests
- SQLBackend: one row per key in a sqlite table (default on device)
- RedisBackend: a Redis instance, keys namespaced with a prefix
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

import redis.asyncio as redis
from sqlalchemy import select, delete

from config import settings
from ..database.connection import Database, get_database
from ..database.exceptions import StorageConnectionError
from ..database.models import KeyValueDB

logger = logging.getLogger(__name__)


class StorageBackend(ABC):
    """String-keyed persistent map."""

    @abstractmethod
    async def get_item(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    async def remove_item(self, key: str) -> None:
        ...

    async def multi_remove(self, keys: Iterable[str]) -> None:
        for key in keys:
            await self.remove_item(key)

    @abstractmethod
    async def all_keys(self) -> List[str]:
        ...

    async def close(self) -> None:
        pass


class MemoryBackend(StorageBackend):
    """In-memory backend. State lives as long as the instance."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    async def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    async def all_keys(self) -> List[str]:
        return list(self._data.keys())


class SQLBackend(StorageBackend):
    """Backend storing each key as a row of the kv_store table."""

    def __init__(self, db: Optional[Database] = None):
        self.db = db or get_database()

    async def get_item(self, key: str) -> Optional[str]:
        async with self.db.session() as session:
            result = await session.execute(
                select(KeyValueDB.value).where(KeyValueDB.key == key)
            )
            return result.scalar_one_or_none()

    async def set_item(self, key: str, value: str) -> None:
        async with self.db.session() as session:
            row = await session.get(KeyValueDB, key)
            if row is None:
                session.add(KeyValueDB(key=key, value=value))
            else:
                row.value = value
            await session.flush()

    async def remove_item(self, key: str) -> None:
        async with self.db.session() as session:
            await session.execute(
                delete(KeyValueDB).where(KeyValueDB.key == key)
            )

    async def multi_remove(self, keys: Iterable[str]) -> None:
        keys = list(keys)
        if not keys:
            return
        async with self.db.session() as session:
            await session.execute(
                delete(KeyValueDB).where(KeyValueDB.key.in_(keys))
            )

    async def all_keys(self) -> List[str]:
        async with self.db.session() as session:
            result = await session.execute(select(KeyValueDB.key))
            return list(result.scalars().all())

    async def close(self) -> None:
        await self.db.close()


class RedisBackend(StorageBackend):
    """Backend storing keys in Redis under a namespace prefix."""

    def __init__(
        self,
        url: Optional[str] = None,
        prefix: Optional[str] = None,
        client: Optional[redis.Redis] = None,
    ):
        self.url = url or settings.redis_url
        self.prefix = settings.redis_prefix if prefix is None else prefix
        self._client = client

    async def _get_client(self) -> redis.Redis:
        """Get or create the Redis client."""
        if self._client is None:
            try:
                self._client = await redis.from_url(
                    self.url,
                    encoding="utf-8",
                    decode_responses=True,
                    socket_timeout=5,
                    socket_connect_timeout=5,
                )
                await self._client.ping()
                logger.info("Redis client created and connected")
            except Exception as e:
                logger.error(f"Failed to connect to Redis: {e}")
                self._client = None
                raise StorageConnectionError(f"Cannot connect to Redis at {self.url}") from e
        return self._client

    def _full_key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    async def get_item(self, key: str) -> Optional[str]:
        client = await self._get_client()
        return await client.get(self._full_key(key))

    async def set_item(self, key: str, value: str) -> None:
        client = await self._get_client()
        await client.set(self._full_key(key), value)

    async def remove_item(self, key: str) -> None:
        client = await self._get_client()
        await client.delete(self._full_key(key))

    async def multi_remove(self, keys: Iterable[str]) -> None:
        full_keys = [self._full_key(k) for k in keys]
        if not full_keys:
            return
        client = await self._get_client()
        await client.delete(*full_keys)

    async def all_keys(self) -> List[str]:
        client = await self._get_client()
        keys: List[str] = []
        cursor = 0
        while True:
            cursor, batch = await client.scan(
                cursor,
                match=f"{self.prefix}*",
                count=100
            )
            keys.extend(k[len(self.prefix):] for k in batch)
            if cursor == 0:
                break
        return keys

    async def close(self) -> None:
        if self._client:
            try:
                await self._client.aclose()
                logger.info("Redis connection closed")
            except Exception as e:
                logger.error(f"Error closing Redis: {e}")
            finally:
                self._client = None


def create_backend(kind: Optional[str] = None) -> StorageBackend:
    """Build the backend named by settings.storage_backend."""
    kind = kind or settings.storage_backend
    if kind == "memory":
        return MemoryBackend()
    if kind == "redis":
        return RedisBackend()
    if kind == "sqlite":
        return SQLBackend()
    raise ValueError(f"Unknown storage backend: {kind}")
