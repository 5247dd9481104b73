"""Custom exceptions for storage operations."""


class StorageError(Exception):
    """Base exception for storage errors."""
    pass


class StorageConnectionError(StorageError):
    """Storage backend could not be reached."""
    pass


class StorageOperationError(StorageError):
    """A write or serialization against the store failed."""
    pass


class EntityNotFoundError(StorageError):
    """Requested entity not found."""
    pass


class RecordValidationError(StorageError):
    """Record failed shape validation before being written."""
    pass
