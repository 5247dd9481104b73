"""
On-device storage layer.

- backends: string-keyed persistent maps (memory, sqlite, redis)
- kv_store: JSON serialization, failure policy and per-key locks
- keys: the fixed key of every collection
- attachments: copied attachment files on disk
"""

from .backends import StorageBackend, MemoryBackend, SQLBackend, RedisBackend, create_backend
from .kv_store import KeyValueStore
from .keys import StorageKeys
from .attachments import AttachmentStore

__all__ = [
    "StorageBackend",
    "MemoryBackend",
    "SQLBackend",
    "RedisBackend",
    "create_backend",
    "KeyValueStore",
    "StorageKeys",
    "AttachmentStore",
]
