"""
Tests for projectfy/storage/backends.py

The sqlite backend runs against a temporary database file; Redis is
replaced by an AsyncMock client.
"""

import pytest
import pytest_asyncio
from unittest.mock import AsyncMock

from projectfy.database.connection import Database, async_url
from projectfy.storage.backends import (
    MemoryBackend,
    RedisBackend,
    SQLBackend,
    create_backend,
)


class TestMemoryBackend:

    @pytest.mark.asyncio
    async def test_set_get_remove(self):
        backend = MemoryBackend()
        await backend.set_item("k", "v")
        assert await backend.get_item("k") == "v"

        await backend.remove_item("k")
        assert await backend.get_item("k") is None

    @pytest.mark.asyncio
    async def test_initial_data(self):
        backend = MemoryBackend({"users": "[]"})
        assert await backend.all_keys() == ["users"]


@pytest_asyncio.fixture
async def sql_backend(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
    backend = SQLBackend(db)
    yield backend
    await backend.close()


class TestSQLBackend:

    @pytest.mark.asyncio
    async def test_missing_key_is_none(self, sql_backend):
        assert await sql_backend.get_item("projects") is None

    @pytest.mark.asyncio
    async def test_insert_then_overwrite(self, sql_backend):
        await sql_backend.set_item("projects", "[]")
        await sql_backend.set_item("projects", '[{"id": "p1"}]')

        assert await sql_backend.get_item("projects") == '[{"id": "p1"}]'
        assert await sql_backend.all_keys() == ["projects"]

    @pytest.mark.asyncio
    async def test_multi_remove(self, sql_backend):
        for key in ("a", "b", "c"):
            await sql_backend.set_item(key, "1")

        await sql_backend.multi_remove(["a", "c"])

        assert await sql_backend.all_keys() == ["b"]

    @pytest.mark.asyncio
    async def test_multi_remove_empty_list(self, sql_backend):
        await sql_backend.multi_remove([])

    @pytest.mark.asyncio
    async def test_data_survives_reconnect(self, tmp_path):
        url = f"sqlite+aiosqlite:///{tmp_path / 'persist.db'}"
        first = SQLBackend(Database(url))
        await first.set_item("users", '[{"id": "u1"}]')
        await first.close()

        second = SQLBackend(Database(url))
        assert await second.get_item("users") == '[{"id": "u1"}]'
        await second.close()


@pytest.fixture
def redis_client():
    client = AsyncMock()
    client.get = AsyncMock(return_value='[{"id": "t1"}]')
    return client


class TestRedisBackend:

    @pytest.mark.asyncio
    async def test_get_uses_prefix(self, redis_client):
        backend = RedisBackend(prefix="pf:", client=redis_client)

        assert await backend.get_item("tasks") == '[{"id": "t1"}]'
        redis_client.get.assert_awaited_once_with("pf:tasks")

    @pytest.mark.asyncio
    async def test_set_uses_prefix(self, redis_client):
        backend = RedisBackend(prefix="pf:", client=redis_client)

        await backend.set_item("tasks", "[]")

        redis_client.set.assert_awaited_once_with("pf:tasks", "[]")

    @pytest.mark.asyncio
    async def test_multi_remove_single_call(self, redis_client):
        backend = RedisBackend(prefix="pf:", client=redis_client)

        await backend.multi_remove(["userToken", "currentUser"])

        redis_client.delete.assert_awaited_once_with("pf:userToken", "pf:currentUser")

    @pytest.mark.asyncio
    async def test_all_keys_scans_until_cursor_zero(self, redis_client):
        redis_client.scan = AsyncMock(side_effect=[
            (7, ["pf:users", "pf:tasks"]),
            (0, ["pf:notes"]),
        ])
        backend = RedisBackend(prefix="pf:", client=redis_client)

        assert await backend.all_keys() == ["users", "tasks", "notes"]
        assert redis_client.scan.await_count == 2

    @pytest.mark.asyncio
    async def test_close_releases_client(self, redis_client):
        backend = RedisBackend(prefix="pf:", client=redis_client)

        await backend.close()

        redis_client.aclose.assert_awaited_once()
        assert backend._client is None


class TestCreateBackend:

    def test_memory(self):
        assert isinstance(create_backend("memory"), MemoryBackend)

    def test_redis(self):
        assert isinstance(create_backend("redis"), RedisBackend)

    def test_sqlite(self):
        assert isinstance(create_backend("sqlite"), SQLBackend)

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown storage backend"):
            create_backend("floppy")


class TestDatabaseUrl:

    def test_plain_sqlite_upgraded(self):
        assert async_url("sqlite:///./data/x.db") == "sqlite+aiosqlite:///./data/x.db"

    def test_async_url_unchanged(self):
        assert async_url("sqlite+aiosqlite:///x.db") == "sqlite+aiosqlite:///x.db"

    @pytest.mark.asyncio
    async def test_creates_parent_directory(self, tmp_path):
        db = Database(f"sqlite:///{tmp_path / 'nested' / 'dir' / 'store.db'}")

        await db.connect()

        assert (tmp_path / "nested" / "dir").is_dir()
        assert db.is_open
        await db.close()
        assert not db.is_open
