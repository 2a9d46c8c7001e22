"""
In-memory Storage — one dict per entity kind, keyed by an auto-incrementing id.

Volatile: everything is lost when the process exits. Reads are linear scans,
which is fine at fixture scale. Operations run on the event loop without
awaiting in between, so each one is atomic with respect to the others.
"""

import itertools
import logging
from typing import Any, Optional

from brandops.schemas import ENTITY_KINDS, Brand, Entity, User
from brandops.services.auth_service import hash_password
from brandops.storage.base import DateRange, E, Storage
from brandops.storage.fixtures import DEFAULT_ADMIN, DEFAULT_BRAND, fixture_rows
from brandops.utils import now_local

logger = logging.getLogger(__name__)


class MemoryStorage(Storage):
    name = "memory"

    def __init__(self, seed: bool = True):
        self._tables: dict[type[Entity], dict[int, Entity]] = {kind: {} for kind in ENTITY_KINDS}
        self._ids = {kind: itertools.count(1) for kind in ENTITY_KINDS}
        if seed:
            self._seed()

    def _put(self, kind: type[E], values: dict[str, Any]) -> E:
        entity_id = next(self._ids[kind])
        entity = kind.model_validate({**values, "id": entity_id})
        self._tables[kind][entity_id] = entity
        return entity.model_copy(deep=True)

    def _seed(self) -> None:
        now = now_local()
        brand = self._put(Brand, {**DEFAULT_BRAND, "created_at": now})
        admin = {key: value for key, value in DEFAULT_ADMIN.items() if key != "password"}
        self._put(User, {**admin, "password_hash": hash_password(DEFAULT_ADMIN["password"])})
        for kind, values in fixture_rows(brand.id, now):
            self._put(kind, values)
        logger.info(
            "Seeded in-memory store: "
            + ", ".join(f"{len(rows)} {kind.table_name}" for kind, rows in self._tables.items())
        )

    @staticmethod
    def _matches(entity: Entity, where: dict[str, Any], date_range: Optional[DateRange]) -> bool:
        if any(getattr(entity, column) != value for column, value in where.items()):
            return False
        return date_range is None or date_range.contains(entity.date)

    async def _get(self, kind: type[E], entity_id: int) -> Optional[E]:
        entity = self._tables[kind].get(entity_id)
        return entity.model_copy(deep=True) if entity is not None else None

    async def _select(
        self,
        kind: type[E],
        where: dict[str, Any],
        date_range: Optional[DateRange] = None,
    ) -> list[E]:
        return [
            entity.model_copy(deep=True)
            for entity in self._tables[kind].values()
            if self._matches(entity, where, date_range)
        ]

    async def _insert(self, kind: type[E], values: dict[str, Any]) -> E:
        return self._put(kind, values)

    async def _update(self, kind: type[E], entity_id: int, values: dict[str, Any]) -> Optional[E]:
        current = self._tables[kind].get(entity_id)
        if current is None:
            return None
        updated = current.model_copy(update=values, deep=True)
        self._tables[kind][entity_id] = updated
        return updated.model_copy(deep=True)

    async def ping(self) -> bool:
        return True
