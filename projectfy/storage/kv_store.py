"""
JSON key-value store.

Wraps a StorageBackend with JSON serialization and the failure policy
every caller relies on:
- reads never raise: a missing key, a storage fault or a corrupt value
  all come back as the supplied default
- writes log and re-raise as StorageOperationError

Each key also owns an asyncio.Lock. Repositories hold it across their
read-modify-write cycle so two rapid saves to the same collection cannot
drop each other's update.
"""

import json
import logging
from collections import defaultdict
from typing import Any, Dict, Iterable, Optional

import asyncio

from ..database.exceptions import StorageOperationError
from .backends import StorageBackend

logger = logging.getLogger(__name__)


class KeyValueStore:
    """JSON serializing facade over a string-keyed backend."""

    def __init__(self, backend: StorageBackend):
        self.backend = backend
        self._locks: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    def lock(self, key: str) -> asyncio.Lock:
        """Lock guarding read-modify-write cycles on one key."""
        return self._locks[key]

    async def save(self, key: str, value: Any) -> None:
        """Serialize and write a value."""
        try:
            serialized = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to serialize value for {key}: {e}")
            raise StorageOperationError(f"Cannot serialize value for {key}") from e

        try:
            await self.backend.set_item(key, serialized)
        except Exception as e:
            logger.error(f"Error saving data for key {key}: {e}", exc_info=True)
            raise StorageOperationError(f"Failed to save {key}: {e}") from e

    async def get(self, key: str, default: Any = None) -> Any:
        """Read and deserialize a value, or return default."""
        try:
            raw = await self.backend.get_item(key)
        except Exception as e:
            logger.error(f"Error getting data for key {key}: {e}")
            return default

        if raw is None:
            return default

        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to decode stored value for {key}: {e}")
            return default

    async def get_raw(self, key: str) -> Optional[str]:
        """Read an opaque string value without JSON decoding."""
        try:
            return await self.backend.get_item(key)
        except Exception as e:
            logger.error(f"Error getting raw value for key {key}: {e}")
            return None

    async def set_raw(self, key: str, value: str) -> None:
        """Write an opaque string value without JSON encoding."""
        try:
            await self.backend.set_item(key, value)
        except Exception as e:
            logger.error(f"Error saving raw value for key {key}: {e}", exc_info=True)
            raise StorageOperationError(f"Failed to save {key}: {e}") from e

    async def remove(self, key: str) -> None:
        try:
            await self.backend.remove_item(key)
        except Exception as e:
            logger.error(f"Error removing key {key}: {e}", exc_info=True)
            raise StorageOperationError(f"Failed to remove {key}: {e}") from e

    async def remove_many(self, keys: Iterable[str]) -> None:
        keys = list(keys)
        try:
            await self.backend.multi_remove(keys)
        except Exception as e:
            logger.error(f"Error removing keys {keys}: {e}", exc_info=True)
            raise StorageOperationError(f"Failed to remove {len(keys)} keys: {e}") from e

    async def keys(self) -> list:
        try:
            return await self.backend.all_keys()
        except Exception as e:
            logger.error(f"Error listing keys: {e}")
            return []

    async def close(self) -> None:
        await self.backend.close()
