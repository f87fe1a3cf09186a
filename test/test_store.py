"""
Tests for the submission key-value stores.
"""

import pytest
import pytest_asyncio

from scoping.config import Settings
from scoping.shared.database import DatabaseManager
from scoping.shared.exceptions import StoreError
from scoping.storage.factory import create_store
from scoping.storage.memory import InMemoryStore
from scoping.storage.repository import SQLAlchemyKeyValueStore


@pytest_asyncio.fixture
async def db_manager():
    manager = DatabaseManager("sqlite+aiosqlite:///:memory:")
    await manager.create_all()
    yield manager
    await manager.close()


class TestInMemoryStore:

    @pytest.mark.asyncio
    async def test_put_and_get(self, store: InMemoryStore):
        await store.put("submission_1", {"part1": {"mission": "x"}})

        assert await store.get("submission_1") == {"part1": {"mission": "x"}}
        assert len(store) == 1
        assert store.keys() == ["submission_1"]

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, store: InMemoryStore):
        assert await store.get("missing") is None

    @pytest.mark.asyncio
    async def test_values_are_copied(self, store: InMemoryStore):
        value = {"part1": {"mission": "x"}}
        await store.put("k", value)
        value["part1"]["mission"] = "changed"

        fetched = await store.get("k")
        assert fetched["part1"]["mission"] == "x"

        fetched["part1"]["mission"] = "mutated"
        assert (await store.get("k"))["part1"]["mission"] == "x"

    @pytest.mark.asyncio
    async def test_put_replaces(self, store: InMemoryStore):
        await store.put("k", {"v": 1})
        await store.put("k", {"v": 2})

        assert await store.get("k") == {"v": 2}
        assert len(store) == 1


class TestSQLAlchemyKeyValueStore:

    @pytest.mark.asyncio
    async def test_put_and_get(self, db_manager):
        store = SQLAlchemyKeyValueStore(db_manager)
        value = {
            "part2": {"consumption": ["Desktop", "Mobile"]},
            "userEmail": None,
            "fileUrls": [],
        }

        await store.put("submission_1", value)

        assert await store.get("submission_1") == value

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, db_manager):
        store = SQLAlchemyKeyValueStore(db_manager)

        assert await store.get("missing") is None

    @pytest.mark.asyncio
    async def test_put_replaces(self, db_manager):
        store = SQLAlchemyKeyValueStore(db_manager)

        await store.put("k", {"v": 1})
        await store.put("k", {"v": 2})

        assert await store.get("k") == {"v": 2}

    @pytest.mark.asyncio
    async def test_missing_table_raises_store_error(self):
        manager = DatabaseManager("sqlite+aiosqlite:///:memory:")
        store = SQLAlchemyKeyValueStore(manager)
        try:
            with pytest.raises(StoreError, match="Failed to store k"):
                await store.put("k", {"v": 1})
        finally:
            await manager.close()


class TestCreateStore:

    def test_memory_backend_is_shared(self):
        settings = Settings(_env_file=None, store_backend="memory")

        first = create_store(settings)
        second = create_store(settings)

        assert isinstance(first, InMemoryStore)
        assert first is second

    def test_database_backend(self):
        settings = Settings(_env_file=None, store_backend="database")
        manager = DatabaseManager("sqlite+aiosqlite:///:memory:")

        store = create_store(settings, db_manager=manager)

        assert isinstance(store, SQLAlchemyKeyValueStore)
