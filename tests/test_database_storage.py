"""
Tests specific to the SQLAlchemy backend (run on SQLite via aiosqlite).
"""

import pytest
from unittest.mock import patch, AsyncMock
from sqlalchemy import inspect

from brandops.database import build_engine, build_session_factory
from brandops.schemas import Brand
from brandops.storage.errors import ConstraintViolationError, StorageError
from brandops.storage.sql import DatabaseStorage
from brandops.utils import now_local

pytestmark = pytest.mark.anyio


async def test_startup_creates_all_tables(sqlite_storage):
    async with sqlite_storage._engine.connect() as conn:
        tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
    assert set(tables) >= {"users", "brands", "revenue", "ad_spend", "ai_agents", "ad_performance", "ops_tasks"}


async def test_ping_reports_connection_state(sqlite_storage):
    assert await sqlite_storage.ping() is True
    with patch("brandops.storage.sql.check_db_connection", new_callable=AsyncMock, return_value=False):
        assert await sqlite_storage.ping() is False


async def test_unique_constraint_surfaces_as_constraint_violation(sqlite_storage):
    values = {"name": "Acme", "code": "AC", "created_at": now_local()}
    await sqlite_storage._insert(Brand, values)
    with pytest.raises(ConstraintViolationError):
        await sqlite_storage._insert(Brand, {**values, "name": "Other"})
    assert len(await sqlite_storage.get_brands()) == 1


async def test_unreachable_database_raises_storage_error(anyio_backend):
    engine = build_engine("sqlite+aiosqlite:////nonexistent-dir/brandops.db")
    storage = DatabaseStorage(build_session_factory(engine), engine=engine)
    with pytest.raises(StorageError):
        await storage.get_brands()
    assert await storage.ping() is False
    await storage.close()


async def test_storage_without_engine_skips_lifecycle(sqlite_storage):
    storage = DatabaseStorage(sqlite_storage._sessions)
    await storage.startup()
    assert await storage.ping() is True
    assert await storage.get_brands() == []
    await storage.close()
