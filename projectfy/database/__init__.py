"""
Persistence module for ProjectFy.

Handles:
- The sqlite key-value table behind the default storage backend
- Storage exceptions
- Collection repositories (see .repositories)
"""

from .connection import Database, get_database, async_url
from .exceptions import (
    StorageError,
    StorageConnectionError,
    StorageOperationError,
    EntityNotFoundError,
    RecordValidationError,
)
from .models import Base, KeyValueDB

__all__ = [
    "get_database",
    "Database",
    "async_url",
    "StorageError",
    "StorageConnectionError",
    "StorageOperationError",
    "EntityNotFoundError",
    "RecordValidationError",
    "Base",
    "KeyValueDB",
]
