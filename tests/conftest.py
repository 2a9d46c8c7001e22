"""
Shared fixtures: one Storage per backend, an app wired to a storage, and an
in-process stand-in for the supabase query builder.
"""

import copy
import itertools
import json
from datetime import datetime
from typing import Any, Optional

import pytest
from httpx import AsyncClient, ASGITransport
from postgrest.exceptions import APIError

from brandops.config import Settings
from brandops.database import build_engine, build_session_factory
from brandops.services.insights_service import InsightsService
from brandops.storage.memory import MemoryStorage
from brandops.storage.remote import SupabaseStorage
from brandops.storage.sql import DatabaseStorage


@pytest.fixture
def anyio_backend():
    return "asyncio"


# ── Fake supabase client ───────────────────────────────────────────────

class FakeResponse:
    def __init__(self, data):
        self.data = data


def _comparable(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return value
    return value


class FakeQuery:
    """Records a PostgREST query chain and runs it against the fake's tables."""

    def __init__(self, client: "FakeSupabaseClient", table: str):
        self._client = client
        self._table = table
        self._action = "select"
        self._payload: Optional[dict] = None
        self._filters: list[tuple[str, str, Any]] = []
        self._order: Optional[str] = None
        self._limit: Optional[int] = None

    def select(self, columns: str = "*"):
        self._action = "select"
        return self

    def insert(self, row: dict):
        self._action = "insert"
        self._payload = row
        return self

    def update(self, row: dict):
        self._action = "update"
        self._payload = row
        return self

    def _filter(self, op: str, column: str, value: Any):
        self._filters.append((op, column, value))
        return self

    def eq(self, column, value):
        return self._filter("eq", column, value)

    def gte(self, column, value):
        return self._filter("gte", column, value)

    def lte(self, column, value):
        return self._filter("lte", column, value)

    def lt(self, column, value):
        return self._filter("lt", column, value)

    def order(self, column: str):
        self._order = column
        return self

    def limit(self, count: int):
        self._limit = count
        return self

    def _matches(self, row: dict) -> bool:
        for op, column, value in self._filters:
            current = _comparable(row.get(column))
            wanted = _comparable(value)
            if op == "eq" and current != wanted:
                return False
            if op == "gte" and not current >= wanted:
                return False
            if op == "lte" and not current <= wanted:
                return False
            if op == "lt" and not current < wanted:
                return False
        return True

    def execute(self) -> FakeResponse:
        self._client.calls.append((self._table, self._action))
        if self._client.fail_with is not None:
            raise self._client.fail_with
        rows = self._client.tables.setdefault(self._table, {})

        if self._action == "insert":
            # Rows travel as JSON, exactly like the HTTP API
            row = json.loads(json.dumps(self._payload))
            row["id"] = next(self._client.ids.setdefault(self._table, itertools.count(1)))
            rows[row["id"]] = row
            return FakeResponse([copy.deepcopy(row)])

        matched = [row for row in rows.values() if self._matches(row)]
        if self._action == "update":
            for row in matched:
                row.update(json.loads(json.dumps(self._payload)))
            return FakeResponse(copy.deepcopy(matched))

        if self._order:
            matched.sort(key=lambda row: row[self._order])
        if self._limit is not None:
            matched = matched[: self._limit]
        return FakeResponse(copy.deepcopy(matched))


class FakeSupabaseClient:
    def __init__(self):
        self.tables: dict[str, dict[int, dict]] = {}
        self.ids: dict[str, itertools.count] = {}
        self.calls: list[tuple[str, str]] = []
        self.fail_with: Optional[Exception] = None

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def fail(self, code: str, message: str = "boom"):
        self.fail_with = APIError({"message": message, "code": code, "details": None, "hint": None})


# ── Storages ───────────────────────────────────────────────────────────

@pytest.fixture
def memory_storage():
    return MemoryStorage(seed=False)


@pytest.fixture
async def sqlite_storage(anyio_backend):
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    storage = DatabaseStorage(build_session_factory(engine), engine=engine)
    await storage.startup()
    yield storage
    await storage.close()


@pytest.fixture
def supabase_client():
    return FakeSupabaseClient()


@pytest.fixture
def supabase_storage(supabase_client):
    return SupabaseStorage(supabase_client)


@pytest.fixture(params=["memory", "database", "supabase"])
async def storage(request, anyio_backend):
    """Every backend, empty; contract tests run once per backend."""
    if request.param == "memory":
        yield MemoryStorage(seed=False)
    elif request.param == "database":
        engine = build_engine("sqlite+aiosqlite:///:memory:")
        backend = DatabaseStorage(build_session_factory(engine), engine=engine)
        await backend.startup()
        yield backend
        await backend.close()
    else:
        yield SupabaseStorage(FakeSupabaseClient())


# ── App ────────────────────────────────────────────────────────────────

@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        environment="development",
        storage_backend="memory",
        secret_key="test-secret-key",
        openai_api_key="",
    )


@pytest.fixture
def seeded_storage():
    return MemoryStorage(seed=True)


@pytest.fixture
def insights_service():
    return InsightsService(api_key="")


@pytest.fixture
def app(seeded_storage, settings, insights_service):
    from brandops.main import create_app
    return create_app(storage=seeded_storage, settings=settings, insights_service=insights_service)


@pytest.fixture
async def client(app, anyio_backend):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
