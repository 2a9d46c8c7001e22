"""
Storage Interface — the only way callers read or mutate dashboard records.

``Storage`` implements every public operation once, on top of four backend
primitives (``_get``, ``_select``, ``_insert``, ``_update``). Record invariants
(store-assigned ids, timestamps, brand references, unique usernames and brand
codes, ops-task status/progress coupling, password hashing) therefore hold the
same way whichever backend is active.

Not-found is ``None``. Backend failures raise ``StorageError`` subclasses.
"""

import enum
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, NamedTuple, Optional, TypeVar, Union

from brandops.schemas import (
    AdPerformance,
    AdPerformanceCreate,
    AdSpend,
    AdSpendCreate,
    AdStatus,
    AgentStatus,
    AIAgent,
    AIAgentCreate,
    Brand,
    BrandCreate,
    Entity,
    OpsTask,
    OpsTaskCreate,
    Revenue,
    RevenueCreate,
    TaskStatus,
    User,
    UserCreate,
)
from brandops.services.auth_service import hash_password
from brandops.storage.errors import DuplicateKeyError, InvalidReferenceError
from brandops.utils import local_day_bounds, now_local, to_naive_local

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)

TIMESTAMP_FIELDS = ("created_at", "updated_at")


class DateRange(NamedTuple):
    """Bounds on an entity's ``date`` column. The start is always inclusive."""
    start: datetime
    end: datetime
    include_end: bool = True

    def contains(self, value: datetime) -> bool:
        if value < self.start:
            return False
        return value <= self.end if self.include_end else value < self.end


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, enum.Enum) else value


def task_status_changes(status: Union[TaskStatus, str]) -> dict[str, Any]:
    """Field changes implied by moving an ops task to ``status``."""
    status = TaskStatus(status)
    changes: dict[str, Any] = {"status": status.value}
    if status is TaskStatus.DONE:
        changes["progress"] = 100
    return changes


def task_progress_changes(progress: int) -> dict[str, Any]:
    """
    Field changes implied by moving an ops task to ``progress``.

    100 finishes the task, anything above 0 marks it in progress, and 0 leaves
    the status untouched (a done task stays done).
    """
    if isinstance(progress, bool) or not 0 <= progress <= 100:
        raise ValueError(f"progress must be between 0 and 100 (got {progress!r})")
    changes: dict[str, Any] = {"progress": int(progress)}
    if progress == 100:
        changes["status"] = TaskStatus.DONE.value
    elif progress > 0:
        changes["status"] = TaskStatus.IN_PROGRESS.value
    return changes


class Storage(ABC):
    """Abstract dashboard store. Subclasses supply the primitives below."""

    name: str = "storage"

    # ── Backend primitives ─────────────────────────────────────────────

    @abstractmethod
    async def _get(self, kind: type[E], entity_id: int) -> Optional[E]:
        """Fetch one record by primary key."""

    @abstractmethod
    async def _select(
        self,
        kind: type[E],
        where: dict[str, Any],
        date_range: Optional[DateRange] = None,
    ) -> list[E]:
        """Fetch records whose columns equal ``where`` (and whose ``date`` is in range), ordered by id."""

    @abstractmethod
    async def _insert(self, kind: type[E], values: dict[str, Any]) -> E:
        """Insert a record and return it with its store-assigned id."""

    @abstractmethod
    async def _update(self, kind: type[E], entity_id: int, values: dict[str, Any]) -> Optional[E]:
        """Set ``values`` on one record; ``None`` (and no write) when the id is unknown."""

    @abstractmethod
    async def ping(self) -> bool:
        """True when the backend is reachable."""

    async def startup(self) -> None:
        """Prepare the backend (called once at application start)."""

    async def close(self) -> None:
        """Release backend resources (called once at application shutdown)."""

    # ── Shared helpers ─────────────────────────────────────────────────

    async def _first(self, kind: type[E], **where: Any) -> Optional[E]:
        rows = await self._select(kind, where)
        return rows[0] if rows else None

    async def _create(self, kind: type[E], values: dict[str, Any]) -> E:
        values = {key: _plain(value) for key, value in values.items()}
        values.pop("id", None)
        now = now_local()
        for field in TIMESTAMP_FIELDS:
            if field in kind.model_fields:
                values[field] = now
        return await self._insert(kind, values)

    async def _require_brand(self, brand_id: int) -> None:
        if await self.get_brand(brand_id) is None:
            raise InvalidReferenceError(f"Brand {brand_id} does not exist")

    async def _today_total(self, kind: type[E], brand_id: int) -> float:
        start, end = local_day_bounds()
        rows = await self._select(kind, {"brand_id": brand_id}, DateRange(start, end, include_end=False))
        return float(sum(row.amount for row in rows))

    @staticmethod
    def _range(from_date: datetime, to_date: datetime) -> DateRange:
        return DateRange(to_naive_local(from_date), to_naive_local(to_date))

    # ── Users ──────────────────────────────────────────────────────────

    async def get_user(self, user_id: int) -> Optional[User]:
        return await self._get(User, user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        return await self._first(User, username=username)

    async def create_user(self, data: UserCreate) -> User:
        if await self.get_user_by_username(data.username) is not None:
            raise DuplicateKeyError(f"Username already exists: {data.username}")
        values = data.model_dump(exclude={"password"})
        values["password_hash"] = hash_password(data.password)
        user = await self._create(User, values)
        logger.info(f"Created user {user.username} (id={user.id})")
        return user

    # ── Brands ─────────────────────────────────────────────────────────

    async def get_brands(self) -> list[Brand]:
        return await self._select(Brand, {})

    async def get_brand(self, brand_id: int) -> Optional[Brand]:
        return await self._get(Brand, brand_id)

    async def get_brand_by_code(self, code: str) -> Optional[Brand]:
        return await self._first(Brand, code=code)

    async def create_brand(self, data: BrandCreate) -> Brand:
        if await self.get_brand_by_code(data.code) is not None:
            raise DuplicateKeyError(f"Brand code already exists: {data.code}")
        if await self._first(Brand, name=data.name) is not None:
            raise DuplicateKeyError(f"Brand name already exists: {data.name}")
        return await self._create(Brand, data.model_dump())

    # ── Revenue ────────────────────────────────────────────────────────

    async def get_revenue(self, brand_id: int, from_date: datetime, to_date: datetime) -> list[Revenue]:
        return await self._select(Revenue, {"brand_id": brand_id}, self._range(from_date, to_date))

    async def get_today_revenue(self, brand_id: int) -> float:
        return await self._today_total(Revenue, brand_id)

    async def create_revenue(self, data: RevenueCreate) -> Revenue:
        await self._require_brand(data.brand_id)
        return await self._create(Revenue, data.model_dump())

    # ── Ad spend ───────────────────────────────────────────────────────

    async def get_ad_spend(self, brand_id: int, from_date: datetime, to_date: datetime) -> list[AdSpend]:
        return await self._select(AdSpend, {"brand_id": brand_id}, self._range(from_date, to_date))

    async def get_today_ad_spend(self, brand_id: int) -> float:
        return await self._today_total(AdSpend, brand_id)

    async def create_ad_spend(self, data: AdSpendCreate) -> AdSpend:
        await self._require_brand(data.brand_id)
        return await self._create(AdSpend, data.model_dump())

    # ── AI agents ──────────────────────────────────────────────────────

    async def get_ai_agents(self, brand_id: int) -> list[AIAgent]:
        return await self._select(AIAgent, {"brand_id": brand_id})

    async def get_ai_agent(self, agent_id: int) -> Optional[AIAgent]:
        return await self._get(AIAgent, agent_id)

    async def create_ai_agent(self, data: AIAgentCreate) -> AIAgent:
        await self._require_brand(data.brand_id)
        values = data.model_dump()
        values["cost"] = 0.0
        return await self._create(AIAgent, values)

    async def update_ai_agent_status(self, agent_id: int, status: Union[AgentStatus, str]) -> Optional[AIAgent]:
        values = {"status": AgentStatus(status).value, "updated_at": now_local()}
        return await self._update(AIAgent, agent_id, values)

    async def update_ai_agent_cost(self, agent_id: int, cost: float) -> Optional[AIAgent]:
        return await self._update(AIAgent, agent_id, {"cost": float(cost), "updated_at": now_local()})

    # ── Ad performance ─────────────────────────────────────────────────

    async def get_ad_performance(self, brand_id: int, platform: Optional[str] = None) -> list[AdPerformance]:
        where: dict[str, Any] = {"brand_id": brand_id}
        if platform:
            where["platform"] = platform
        return await self._select(AdPerformance, where)

    async def get_ad_performance_by_id(self, ad_id: int) -> Optional[AdPerformance]:
        return await self._get(AdPerformance, ad_id)

    async def create_ad_performance(self, data: AdPerformanceCreate) -> AdPerformance:
        await self._require_brand(data.brand_id)
        return await self._create(AdPerformance, data.model_dump())

    async def update_ad_status(self, ad_id: int, status: Union[AdStatus, str]) -> Optional[AdPerformance]:
        return await self._update(AdPerformance, ad_id, {"status": AdStatus(status).value})

    # ── Ops tasks ──────────────────────────────────────────────────────

    async def get_ops_tasks(self, brand_id: int, status: Optional[Union[TaskStatus, str]] = None) -> list[OpsTask]:
        where: dict[str, Any] = {"brand_id": brand_id}
        if status:
            where["status"] = _plain(status)
        return await self._select(OpsTask, where)

    async def get_ops_task(self, task_id: int) -> Optional[OpsTask]:
        return await self._get(OpsTask, task_id)

    async def create_ops_task(self, data: OpsTaskCreate) -> OpsTask:
        await self._require_brand(data.brand_id)
        values = data.model_dump()
        if _plain(values["status"]) == TaskStatus.DONE.value:
            values["progress"] = 100
        elif values["progress"] == 100:
            values["status"] = TaskStatus.DONE.value
        return await self._create(OpsTask, values)

    async def update_ops_task_status(self, task_id: int, status: Union[TaskStatus, str]) -> Optional[OpsTask]:
        values = task_status_changes(status)
        values["updated_at"] = now_local()
        return await self._update(OpsTask, task_id, values)

    async def update_ops_task_progress(self, task_id: int, progress: int) -> Optional[OpsTask]:
        values = task_progress_changes(progress)
        values["updated_at"] = now_local()
        return await self._update(OpsTask, task_id, values)
