"""
Relational Storage — SQLAlchemy async sessions over PostgreSQL (asyncpg) or SQLite (aiosqlite).

Each operation runs in its own short transaction. Rows are mapped to entities
with ``model_validate`` (entity attributes equal the column names).
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from brandops import models, schemas
from brandops.database import check_db_connection, init_db
from brandops.storage.base import DateRange, E, Storage
from brandops.storage.errors import ConstraintViolationError, StorageError

logger = logging.getLogger(__name__)

_MODELS: dict[type[schemas.Entity], type[models.Base]] = {
    schemas.User: models.User,
    schemas.Brand: models.Brand,
    schemas.Revenue: models.Revenue,
    schemas.AdSpend: models.AdSpend,
    schemas.AIAgent: models.AIAgent,
    schemas.AdPerformance: models.AdPerformance,
    schemas.OpsTask: models.OpsTask,
}


@asynccontextmanager
async def _translate_errors(action: str):
    try:
        yield
    except IntegrityError as e:
        logger.warning(f"Constraint violation while trying to {action}: {e.orig}")
        raise ConstraintViolationError(f"Failed to {action}: constraint violation") from e
    except SQLAlchemyError as e:
        logger.error(f"Database error while trying to {action}: {e}")
        raise StorageError(f"Failed to {action}") from e
    except OSError as e:
        # asyncpg surfaces unreachable hosts as OSError subclasses
        logger.error(f"Database unreachable while trying to {action}: {e}")
        raise StorageError(f"Failed to {action}: database unreachable") from e


class DatabaseStorage(Storage):
    name = "database"

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        engine: Optional[AsyncEngine] = None,
    ):
        self._sessions = session_factory
        self._engine = engine

    async def startup(self) -> None:
        if self._engine is not None:
            await init_db(self._engine)

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()

    async def ping(self) -> bool:
        if self._engine is None:
            return True
        return await check_db_connection(self._engine)

    async def _get(self, kind: type[E], entity_id: int) -> Optional[E]:
        async with _translate_errors(f"get {kind.table_name} {entity_id}"):
            async with self._sessions() as session:
                row = await session.get(_MODELS[kind], entity_id)
                return kind.model_validate(row) if row is not None else None

    async def _select(
        self,
        kind: type[E],
        where: dict[str, Any],
        date_range: Optional[DateRange] = None,
    ) -> list[E]:
        model = _MODELS[kind]
        stmt = select(model)
        for column, value in where.items():
            stmt = stmt.where(getattr(model, column) == value)
        if date_range is not None:
            stmt = stmt.where(model.date >= date_range.start)
            if date_range.include_end:
                stmt = stmt.where(model.date <= date_range.end)
            else:
                stmt = stmt.where(model.date < date_range.end)
        stmt = stmt.order_by(model.id)

        async with _translate_errors(f"list {kind.table_name}"):
            async with self._sessions() as session:
                result = await session.execute(stmt)
                return [kind.model_validate(row) for row in result.scalars().all()]

    async def _insert(self, kind: type[E], values: dict[str, Any]) -> E:
        async with _translate_errors(f"create {kind.table_name}"):
            async with self._sessions.begin() as session:
                row = _MODELS[kind](**values)
                session.add(row)
                await session.flush()
                return kind.model_validate(row)

    async def _update(self, kind: type[E], entity_id: int, values: dict[str, Any]) -> Optional[E]:
        async with _translate_errors(f"update {kind.table_name} {entity_id}"):
            async with self._sessions.begin() as session:
                row = await session.get(_MODELS[kind], entity_id)
                if row is None:
                    return None
                for column, value in values.items():
                    setattr(row, column, value)
                await session.flush()
                return kind.model_validate(row)
