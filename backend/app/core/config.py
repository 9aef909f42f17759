# backend/app/core/config.py
"""
Server settings for the personal secrets API.

Values come from environment variables first, then `.env`, then the
defaults below. The defaults are only good enough for a local SQLite run;
SECRET_KEY has to be overridden anywhere tokens matter.
"""
from functools import lru_cache
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./coffer.db"

# scheme prefix -> async driver prefix
_ASYNC_DRIVERS = (
    ("postgres://", "postgresql+asyncpg://"),
    ("postgresql://", "postgresql+asyncpg://"),
    ("sqlite:///", "sqlite+aiosqlite:///"),
)


def is_sqlite_url(url: str) -> bool:
    return url.lower().startswith("sqlite")


class Settings(BaseSettings):
    PROJECT_NAME: str = "Coffer"
    PROJECT_VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"

    # Session tokens
    SECRET_KEY: str = "INSECURE_DEV_KEY_CHANGE_IN_PRODUCTION"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    DATABASE_URL: str = DEFAULT_DATABASE_URL
    DATABASE_ECHO: bool = False

    LOG_LEVEL: str = "INFO"

    # Comma separated; empty means no CORS middleware at all
    CORS_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def normalize_database_url(cls, v: str) -> str:
        """Rewrite plain postgres/sqlite URLs to their asyncpg/aiosqlite forms."""
        if v is None:
            return DEFAULT_DATABASE_URL

        url = v.strip()
        for prefix, async_prefix in _ASYNC_DRIVERS:
            if url.startswith(prefix):
                return url.replace(prefix, async_prefix, 1)
        return url

    @property
    def BACKEND_CORS_ORIGINS(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_sqlite(self) -> bool:
        return is_sqlite_url(self.DATABASE_URL)


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
