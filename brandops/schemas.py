"""
Entity Schema — the seven record types and their validated-insert shapes.

Attributes are snake_case and equal the column names of the relational and
Supabase tables, so every backend maps rows with a plain ``model_validate``.
The API speaks camelCase through the alias generator on ``CamelModel``.
"""

import enum
from datetime import datetime
from typing import Annotated, ClassVar, Optional, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from brandops.utils import to_naive_local

LocalDateTime = Annotated[datetime, AfterValidator(to_naive_local)]

# AIAgent.metrics keys differ per agent type; values stay scalar.
MetricValue = Union[bool, int, float, str, None]


# ══════════════════════════════════════════════════════════════════════
#  ENUMS
# ══════════════════════════════════════════════════════════════════════

class AgentStatus(str, enum.Enum):
    ACTIVE = "active"
    PAUSED = "paused"


class AdStatus(str, enum.Enum):
    ACTIVE = "active"
    WARNING = "warning"
    PAUSED = "paused"


class TaskStatus(str, enum.Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )


# ══════════════════════════════════════════════════════════════════════
#  ENTITIES
# ══════════════════════════════════════════════════════════════════════

class Entity(CamelModel):
    """A stored record. ``table_name`` is the relational/remote table."""
    table_name: ClassVar[str]

    id: int


class User(Entity):
    table_name: ClassVar[str] = "users"

    username: str
    password_hash: str = Field(exclude=True, repr=False)
    name: Optional[str] = None
    role: str = "user"


class Brand(Entity):
    table_name: ClassVar[str] = "brands"

    name: str
    code: str
    created_at: LocalDateTime


class Revenue(Entity):
    table_name: ClassVar[str] = "revenue"

    brand_id: int
    date: LocalDateTime
    amount: float
    source: str
    created_at: LocalDateTime


class AdSpend(Entity):
    table_name: ClassVar[str] = "ad_spend"

    brand_id: int
    date: LocalDateTime
    amount: float
    platform: str
    campaign: Optional[str] = None
    ad_set: Optional[str] = None
    created_at: LocalDateTime


class AIAgent(Entity):
    table_name: ClassVar[str] = "ai_agents"

    brand_id: int
    name: str
    type: str
    status: AgentStatus
    cost: float = 0.0
    metrics: Optional[dict[str, MetricValue]] = None
    created_at: LocalDateTime
    updated_at: LocalDateTime


class AdPerformance(Entity):
    table_name: ClassVar[str] = "ad_performance"

    brand_id: int
    ad_set_id: str
    ad_set_name: str
    platform: str
    spend: float
    roas: float
    ctr: float
    status: AdStatus
    thumbnail: Optional[str] = None
    date: LocalDateTime
    created_at: LocalDateTime


class OpsTask(Entity):
    table_name: ClassVar[str] = "ops_tasks"

    brand_id: int
    title: str
    description: Optional[str] = None
    status: TaskStatus
    category: str
    due_date: Optional[LocalDateTime] = None
    progress: int = Field(0, ge=0, le=100)
    created_at: LocalDateTime
    updated_at: LocalDateTime


ENTITY_KINDS: tuple[type[Entity], ...] = (User, Brand, Revenue, AdSpend, AIAgent, AdPerformance, OpsTask)


class UserPublic(CamelModel):
    """User as returned by the API; never carries the password hash."""
    id: int
    username: str
    name: Optional[str] = None
    role: str


# ══════════════════════════════════════════════════════════════════════
#  INSERT SHAPES: validated before storage is invoked
# ══════════════════════════════════════════════════════════════════════

class UserCreate(CamelModel):
    username: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)
    name: Optional[str] = None
    role: str = "user"


class BrandCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    code: str = Field(min_length=1, max_length=32)


class RevenueCreate(CamelModel):
    brand_id: int = Field(gt=0)
    date: LocalDateTime
    amount: float
    source: str = Field(min_length=1)


class AdSpendCreate(CamelModel):
    brand_id: int = Field(gt=0)
    date: LocalDateTime
    amount: float
    platform: str = Field(min_length=1)
    campaign: Optional[str] = None
    ad_set: Optional[str] = None


class AIAgentCreate(CamelModel):
    brand_id: int = Field(gt=0)
    name: str = Field(min_length=1)
    type: str = Field(min_length=1)
    status: AgentStatus
    metrics: Optional[dict[str, MetricValue]] = None


class AdPerformanceCreate(CamelModel):
    brand_id: int = Field(gt=0)
    ad_set_id: str = Field(min_length=1)
    ad_set_name: str = Field(min_length=1)
    platform: str = Field(min_length=1)
    spend: float
    roas: float
    ctr: float
    status: AdStatus
    thumbnail: Optional[str] = None
    date: LocalDateTime


class OpsTaskCreate(CamelModel):
    brand_id: int = Field(gt=0)
    title: str = Field(min_length=1)
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.TODO.value
    category: str = Field(min_length=1)
    due_date: Optional[LocalDateTime] = None
    progress: int = Field(0, ge=0, le=100)
