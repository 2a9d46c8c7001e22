"""
Storage selection — build the configured backend once and hand it to requests.
"""

import logging
from fastapi import Request

from brandops.config import Settings
from brandops.storage.base import Storage

logger = logging.getLogger(__name__)


def build_storage(settings: Settings) -> Storage:
    """Construct the Storage named by STORAGE_BACKEND."""
    backend = settings.storage_backend
    if backend == "database":
        from brandops.database import build_engine, build_session_factory
        from brandops.storage.sql import DatabaseStorage

        engine = build_engine(settings.database_url)
        storage: Storage = DatabaseStorage(build_session_factory(engine), engine=engine)
    elif backend == "supabase":
        from brandops.storage.remote import SupabaseStorage

        storage = SupabaseStorage.from_credentials(settings.supabase_url, settings.supabase_service_role_key)
    else:
        from brandops.storage.memory import MemoryStorage

        storage = MemoryStorage(seed=settings.seed_memory_store)
    logger.info(f"Storage backend: {storage.name}")
    return storage


def get_storage(request: Request) -> Storage:
    """FastAPI dependency: the Storage created at application startup."""
    return request.app.state.storage
