"""
Database configuration and session management.
Uses PostgreSQL via asyncpg (or SQLite via aiosqlite locally) with the SQLAlchemy 2 async engine.
"""

import logging
import ssl
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool
from sqlalchemy import text

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def _get_connect_args(url: str) -> dict:
    """Enable SSL for hosted Postgres proxies; SQLite needs no arguments."""
    if url.startswith("sqlite"):
        return {}
    args = {"timeout": 30}  # Fail fast if DB unreachable
    if "rlwy.net" in url or "supabase.co" in url:
        # Hosted Postgres requires SSL; use context that accepts self-signed certs
        ctx = ssl.create_default_context()
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE
        args["ssl"] = ctx
    return args


def build_engine(url: str) -> AsyncEngine:
    if url.startswith("sqlite"):
        # In-memory SQLite must share one connection across sessions
        pool_args = {"poolclass": StaticPool} if ":memory:" in url or url.endswith("://") else {}
        return create_async_engine(url, echo=False, connect_args=_get_connect_args(url), **pool_args)
    return create_async_engine(
        url,
        echo=False,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        connect_args=_get_connect_args(url),
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db(engine: AsyncEngine):
    """
    Create all tables defined in models.
    Uses create_all, which only creates tables that don't exist yet.
    """
    # Import models to ensure they are registered with Base.metadata
    import brandops.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info(f"Database initialized with {len(Base.metadata.tables)} tables: "
                f"{', '.join(Base.metadata.tables.keys())}")


async def check_db_connection(engine: AsyncEngine) -> bool:
    """Test database connectivity."""
    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False
