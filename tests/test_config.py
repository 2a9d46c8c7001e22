"""
Tests for application configuration and settings validation.
"""

import os
import pytest
from unittest.mock import patch


def test_settings_loads_defaults():
    """Settings should load with sensible defaults in development."""
    # Clear the lru_cache so we get a fresh Settings instance
    from brandops.config import get_settings
    get_settings.cache_clear()

    with patch.dict(os.environ, {
        "ENVIRONMENT": "development",
        "STORAGE_BACKEND": "memory",
        "SECRET_KEY": "change-me-in-production",
    }, clear=False):
        get_settings.cache_clear()
        settings = get_settings()
        assert settings.environment == "development"
        assert settings.is_production is False
        assert settings.storage_backend == "memory"
        assert settings.openai_model == "gpt-4o"
        get_settings.cache_clear()


def test_settings_cors_origin_list():
    """CORS origins string should be split into a list."""
    from brandops.config import get_settings
    get_settings.cache_clear()

    with patch.dict(os.environ, {
        "ENVIRONMENT": "development",
        "CORS_ORIGINS": "http://localhost:3000, http://example.com",
    }, clear=False):
        get_settings.cache_clear()
        settings = get_settings()
        origins = settings.cors_origin_list
        assert len(origins) == 2
        assert "http://localhost:3000" in origins
        assert "http://example.com" in origins
        get_settings.cache_clear()


def test_plain_postgres_url_is_rewritten_for_asyncpg():
    from brandops.config import Settings
    settings = Settings(_env_file=None, database_url="postgresql://user:pw@db.example.com/brandops")
    assert settings.database_url == "postgresql+asyncpg://user:pw@db.example.com/brandops"


def test_storage_backend_is_normalized_and_validated():
    from brandops.config import Settings
    assert Settings(_env_file=None, storage_backend="Database").storage_backend == "database"
    with pytest.raises(ValueError, match="STORAGE_BACKEND must be one of"):
        Settings(_env_file=None, storage_backend="redis")


def test_supabase_backend_requires_credentials():
    from brandops.config import Settings
    with pytest.raises(ValueError, match="SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY"):
        Settings(_env_file=None, storage_backend="supabase", supabase_url="https://x.supabase.co")

    settings = Settings(
        _env_file=None,
        storage_backend="supabase",
        supabase_url="https://x.supabase.co",
        supabase_service_role_key="service-key",
    )
    assert settings.storage_backend == "supabase"


def test_production_rejects_default_secret():
    """Production mode should reject the default secret key."""
    from brandops.config import get_settings, Settings
    get_settings.cache_clear()

    with pytest.raises(ValueError, match="SECRET_KEY must be set"):
        Settings(
            _env_file=None,
            environment="production",
            secret_key="change-me-in-production",
        )
    get_settings.cache_clear()


def test_production_accepts_real_secret():
    """Production mode should accept a real secret key."""
    from brandops.config import Settings
    settings = Settings(
        _env_file=None,
        environment="production",
        secret_key="a-real-secret-key-that-is-not-the-default",
        storage_backend="database",
        database_url="postgresql+asyncpg://prod-host/db",
    )
    assert settings.is_production is True
    assert settings.secret_key == "a-real-secret-key-that-is-not-the-default"


def test_build_storage_selects_backend():
    from brandops.config import Settings
    from brandops.storage.factory import build_storage
    from brandops.storage.memory import MemoryStorage
    from brandops.storage.remote import SupabaseStorage
    from brandops.storage.sql import DatabaseStorage

    memory = build_storage(Settings(_env_file=None, seed_memory_store=False))
    assert isinstance(memory, MemoryStorage)

    database = build_storage(Settings(_env_file=None, storage_backend="database",
                                      database_url="sqlite+aiosqlite:///:memory:"))
    assert isinstance(database, DatabaseStorage)

    with patch("brandops.storage.remote.create_client") as create_client:
        remote = build_storage(Settings(_env_file=None, storage_backend="supabase",
                                        supabase_url="https://x.supabase.co",
                                        supabase_service_role_key="service-key"))
    assert isinstance(remote, SupabaseStorage)
    create_client.assert_called_once_with("https://x.supabase.co", "service-key")
