"""
Supabase Storage — hosted Postgres reached through the PostgREST client.

supabase-py is synchronous, so each query runs in a worker thread. Rows come
back as JSON dicts keyed by column name; timestamps arrive as ISO strings and
are parsed by the entity models.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Optional

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client

from brandops.schemas import Brand
from brandops.storage.base import TIMESTAMP_FIELDS, DateRange, E, Storage
from brandops.storage.errors import DuplicateKeyError, InvalidReferenceError, StorageError
from brandops.utils import now_local

logger = logging.getLogger(__name__)

# Postgres SQLSTATE codes relayed by PostgREST
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


def _to_row(values: dict[str, Any]) -> dict[str, Any]:
    """Make column values JSON-ready for PostgREST."""
    return {
        key: value.isoformat() if isinstance(value, datetime) else value
        for key, value in values.items()
    }


def _to_entity(kind: type[E], row: dict[str, Any]) -> E:
    """Map a PostgREST row to an entity, filling timestamps the table left empty."""
    row = dict(row)
    for field in TIMESTAMP_FIELDS:
        if field in kind.model_fields and not row.get(field):
            row[field] = now_local()
    return kind.model_validate(row)


class SupabaseStorage(Storage):
    name = "supabase"

    def __init__(self, client: Client):
        self._client = client

    @classmethod
    def from_credentials(cls, url: str, service_role_key: str) -> "SupabaseStorage":
        return cls(create_client(url, service_role_key))

    async def _execute(self, query, action: str) -> list[dict[str, Any]]:
        try:
            response = await asyncio.to_thread(query.execute)
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise DuplicateKeyError(f"Failed to {action}: {e.message}") from e
            if e.code == FOREIGN_KEY_VIOLATION:
                raise InvalidReferenceError(f"Failed to {action}: {e.message}") from e
            logger.error(f"Supabase error while trying to {action}: {e.code} {e.message}")
            raise StorageError(f"Failed to {action}: {e.message}") from e
        except httpx.HTTPError as e:
            logger.error(f"Supabase unreachable while trying to {action}: {e}")
            raise StorageError(f"Failed to {action}: Supabase unreachable") from e
        return response.data or []

    async def ping(self) -> bool:
        try:
            await self._execute(self._client.table(Brand.table_name).select("id").limit(1), "ping Supabase")
            return True
        except StorageError:
            return False

    async def _get(self, kind: type[E], entity_id: int) -> Optional[E]:
        query = self._client.table(kind.table_name).select("*").eq("id", entity_id).limit(1)
        rows = await self._execute(query, f"get {kind.table_name} {entity_id}")
        return _to_entity(kind, rows[0]) if rows else None

    async def _select(
        self,
        kind: type[E],
        where: dict[str, Any],
        date_range: Optional[DateRange] = None,
    ) -> list[E]:
        query = self._client.table(kind.table_name).select("*")
        for column, value in where.items():
            query = query.eq(column, value)
        if date_range is not None:
            query = query.gte("date", date_range.start.isoformat())
            if date_range.include_end:
                query = query.lte("date", date_range.end.isoformat())
            else:
                query = query.lt("date", date_range.end.isoformat())
        query = query.order("id")
        rows = await self._execute(query, f"list {kind.table_name}")
        return [_to_entity(kind, row) for row in rows]

    async def _insert(self, kind: type[E], values: dict[str, Any]) -> E:
        query = self._client.table(kind.table_name).insert(_to_row(values))
        rows = await self._execute(query, f"create {kind.table_name}")
        if not rows:
            raise StorageError(f"Failed to create {kind.table_name}: no row returned")
        return _to_entity(kind, rows[0])

    async def _update(self, kind: type[E], entity_id: int, values: dict[str, Any]) -> Optional[E]:
        query = self._client.table(kind.table_name).update(_to_row(values)).eq("id", entity_id)
        rows = await self._execute(query, f"update {kind.table_name} {entity_id}")
        return _to_entity(kind, rows[0]) if rows else None
