"""
BrandOps — Database Models
One table per dashboard entity. Every brand-scoped table references brands.id
with ON DELETE CASCADE.
"""

from datetime import datetime
from sqlalchemy import (
    String, Text, Float, Integer, DateTime,
    JSON, ForeignKey, Index,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from brandops.database import Base
from brandops.utils import now_local


def _brand_fk() -> Mapped[int]:
    return mapped_column(Integer, ForeignKey("brands.id", ondelete="CASCADE"), nullable=False)


# ══════════════════════════════════════════════════════════════════════
#  USERS — Dashboard logins (not brand-scoped)
# ══════════════════════════════════════════════════════════════════════

class User(Base):
    """Dashboard user. Passwords are stored as salted bcrypt hashes."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=True)
    role: Mapped[str] = mapped_column(String(50), default="user")  # admin, user


# ══════════════════════════════════════════════════════════════════════
#  BRANDS — Root scoping entity
# ══════════════════════════════════════════════════════════════════════

class Brand(Base):
    """A tenant-like brand; almost every other record belongs to one."""
    __tablename__ = "brands"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    code: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=now_local)

    # Relationships
    revenue: Mapped[list["Revenue"]] = relationship("Revenue", cascade="all, delete-orphan", passive_deletes=True)
    ad_spend: Mapped[list["AdSpend"]] = relationship("AdSpend", cascade="all, delete-orphan", passive_deletes=True)
    ai_agents: Mapped[list["AIAgent"]] = relationship("AIAgent", cascade="all, delete-orphan", passive_deletes=True)
    ad_performance: Mapped[list["AdPerformance"]] = relationship("AdPerformance", cascade="all, delete-orphan", passive_deletes=True)
    ops_tasks: Mapped[list["OpsTask"]] = relationship("OpsTask", cascade="all, delete-orphan", passive_deletes=True)


# ══════════════════════════════════════════════════════════════════════
#  REVENUE & AD SPEND — Daily observations
# ══════════════════════════════════════════════════════════════════════

class Revenue(Base):
    """One revenue observation per (date, source)."""
    __tablename__ = "revenue"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    brand_id: Mapped[int] = _brand_fk()
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    source: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=now_local)

    __table_args__ = (
        Index("ix_revenue_brand_date", "brand_id", "date"),
    )


class AdSpend(Base):
    """One ad spend observation per (date, platform)."""
    __tablename__ = "ad_spend"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    brand_id: Mapped[int] = _brand_fk()
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    platform: Mapped[str] = mapped_column(String(100), nullable=False)
    campaign: Mapped[str] = mapped_column(String(512), nullable=True)
    ad_set: Mapped[str] = mapped_column(String(512), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=now_local)

    __table_args__ = (
        Index("ix_ad_spend_brand_date", "brand_id", "date"),
    )


# ══════════════════════════════════════════════════════════════════════
#  AI AGENTS
# ══════════════════════════════════════════════════════════════════════

class AIAgent(Base):
    """Automated agent working for a brand; status and cost are mutable."""
    __tablename__ = "ai_agents"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    brand_id: Mapped[int] = _brand_fk()
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)  # active, paused
    cost: Mapped[float] = mapped_column(Float, default=0.0)
    metrics: Mapped[dict] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=now_local)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=now_local)

    __table_args__ = (
        Index("ix_ai_agents_brand_id", "brand_id"),
    )


# ══════════════════════════════════════════════════════════════════════
#  AD PERFORMANCE — Per ad set results
# ══════════════════════════════════════════════════════════════════════

class AdPerformance(Base):
    """Ad set performance snapshot; status is mutable."""
    __tablename__ = "ad_performance"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    brand_id: Mapped[int] = _brand_fk()
    ad_set_id: Mapped[str] = mapped_column(String(255), nullable=False)
    ad_set_name: Mapped[str] = mapped_column(String(512), nullable=False)
    platform: Mapped[str] = mapped_column(String(100), nullable=False)
    spend: Mapped[float] = mapped_column(Float, nullable=False)
    roas: Mapped[float] = mapped_column(Float, nullable=False)
    ctr: Mapped[float] = mapped_column(Float, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)  # active, warning, paused
    thumbnail: Mapped[str] = mapped_column(Text, nullable=True)
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=now_local)

    __table_args__ = (
        Index("ix_ad_performance_brand_platform", "brand_id", "platform"),
    )


# ══════════════════════════════════════════════════════════════════════
#  OPS TASKS — Internal workflow board
# ══════════════════════════════════════════════════════════════════════

class OpsTask(Base):
    """Workflow item moving todo → in_progress → done with a 0–100 progress."""
    __tablename__ = "ops_tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    brand_id: Mapped[int] = _brand_fk()
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False)  # todo, in_progress, done
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    due_date: Mapped[datetime] = mapped_column(DateTime, nullable=True)
    progress: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=now_local)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=now_local)

    __table_args__ = (
        Index("ix_ops_tasks_brand_status", "brand_id", "status"),
    )
