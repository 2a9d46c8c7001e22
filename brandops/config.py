import logging
from pydantic_settings import BaseSettings
from pydantic import model_validator, ConfigDict
from functools import lru_cache

logger = logging.getLogger(__name__)

STORAGE_BACKENDS = ("memory", "database", "supabase")


class Settings(BaseSettings):
    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment: "development" or "production"
    environment: str = "development"

    # Which Storage implementation backs the API: memory | database | supabase
    storage_backend: str = "memory"
    seed_memory_store: bool = True

    database_url: str = "postgresql+asyncpg://localhost/brandops"

    @model_validator(mode="before")
    @classmethod
    def _fix_database_url_for_asyncpg(cls, values: dict) -> dict:
        """Hosted Postgres gives postgresql://; asyncpg needs postgresql+asyncpg://."""
        if not isinstance(values, dict):
            return values
        url = values.get("database_url") or ""
        if url.startswith("postgresql://") and "+asyncpg" not in url:
            values["database_url"] = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return values

    supabase_url: str = ""
    supabase_service_role_key: str = ""

    secret_key: str = "change-me-in-production"
    session_max_age: int = 60 * 60 * 24 * 7  # 7 days
    require_login: bool = False  # When true, data routers need a logged-in session
    first_admin_username: str = ""  # Bootstrap: create this admin at startup if missing
    first_admin_password: str = ""
    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    openai_api_key: str = ""
    openai_model: str = "gpt-4o"

    @model_validator(mode="after")
    def _validate_storage_settings(self) -> "Settings":
        backend = self.storage_backend.lower()
        if backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"STORAGE_BACKEND must be one of {', '.join(STORAGE_BACKENDS)} (got {self.storage_backend!r})"
            )
        self.storage_backend = backend
        if backend == "supabase" and (not self.supabase_url or not self.supabase_service_role_key):
            raise ValueError(
                "SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set when STORAGE_BACKEND=supabase."
            )
        return self

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "Settings":
        """Enforce that critical secrets are set when running in production."""
        if self.is_production:
            if self.secret_key == "change-me-in-production":
                raise ValueError(
                    "SECRET_KEY must be set to a secure value in production. "
                    "Generate one with: python -c \"import secrets; print(secrets.token_hex(32))\""
                )
            if self.storage_backend == "memory":
                logger.warning("STORAGE_BACKEND=memory in production: all data is lost on restart.")
            if self.storage_backend == "database" and "localhost" in self.database_url:
                logger.warning("DATABASE_URL appears to point at localhost in production.")
        return self

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def cors_origin_list(self) -> list[str]:
        origins = [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        return origins or ["http://localhost:5173", "http://localhost:3000"]


@lru_cache
def get_settings() -> Settings:
    return Settings()
