"""
Engine and sessions for the sqlite file behind SQLBackend.

The file (and its parent directory) is created on first use, together
with the kv_store table. Plain sqlite:// URLs are upgraded to the
aiosqlite driver.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config import settings
from .exceptions import StorageConnectionError
from .models import Base

logger = logging.getLogger(__name__)

ASYNC_SQLITE = "sqlite+aiosqlite://"


def async_url(url: str) -> str:
    """Point a sqlite URL at the aiosqlite driver."""
    if url.startswith("sqlite://"):
        return ASYNC_SQLITE + url[len("sqlite://"):]
    return url


class Database:
    """Lazily opened async engine over one sqlite file."""

    def __init__(self, database_url: Optional[str] = None):
        self.url = async_url(database_url or settings.database_url)
        self.engine: Optional[AsyncEngine] = None
        self._sessions: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_open(self) -> bool:
        return self._sessions is not None

    async def connect(self) -> None:
        """Open the engine and create the table. Idempotent."""
        if self.is_open:
            return

        try:
            path = make_url(self.url).database
            if path and path != ":memory:":
                Path(path).parent.mkdir(parents=True, exist_ok=True)

            engine = create_async_engine(self.url, echo=settings.database_echo)
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except Exception as e:
            logger.error(f"Could not open sqlite store {self.url}: {e}")
            raise StorageConnectionError(f"Cannot open {self.url}") from e

        self.engine = engine
        self._sessions = async_sessionmaker(engine, expire_on_commit=False)
        logger.info(f"Opened sqlite store {self.url}")

    async def close(self) -> None:
        if self.engine:
            await self.engine.dispose()
            logger.info(f"Closed sqlite store {self.url}")
        self.engine = None
        self._sessions = None

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """One unit of work: committed on success, rolled back on error."""
        await self.connect()
        async with self._sessions() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise


_database: Optional[Database] = None


def get_database() -> Database:
    """Process-wide database built from settings.database_url."""
    global _database
    if _database is None:
        _database = Database()
    return _database
