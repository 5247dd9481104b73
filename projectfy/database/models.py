"""
SQLAlchemy models for the on-device key-value table.

The whole application state lives in a single two-column table: each
collection is one row whose value is the JSON array for that collection.
"""

from datetime import datetime
from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


# ==================== KEY-VALUE STORE ====================

class KeyValueDB(Base):
    """One string-keyed entry of the persistent map."""
    __tablename__ = "kv_store"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)

    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())
