"""Application configuration settings.

Provides settings for the database, API behavior and logging. Values come
from the environment (or a ``.env`` file) using the prefixes below.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings."""

    url: str = Field(
        default="sqlite+aiosqlite:///./local.db",
        description="Async SQLAlchemy database URL",
    )
    pool_size: int = Field(default=10, description="Persistent connections in the pool")
    max_overflow: int = Field(default=20, description="Connections allowed beyond pool_size")
    echo: bool = Field(default=False, description="Log every SQL statement")
    create_tables: bool = Field(
        default=False,
        description="Create missing tables on startup (local SQLite setups)",
    )

    model_config = SettingsConfigDict(
        env_prefix="DATABASE_",
        env_file=".env",
        extra="ignore",
    )


class APISettings(BaseSettings):
    """General API settings."""

    title: str = Field(
        default="Agents Manage API",
        description="API title",
    )
    description: str = Field(
        default="Management API for multi-tenant agent graphs",
        description="API description",
    )
    version: str = Field(
        default="0.1.0",
        description="API version",
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    api_prefix: str = Field(default="", description="API route prefix")
    cors_origins: list[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins",
    )

    # Pagination defaults
    default_page_size: int = Field(default=10, description="Default page size")
    max_page_size: int = Field(default=100, description="Maximum page size")

    model_config = SettingsConfigDict(
        env_prefix="API_",
        env_file=".env",
        extra="ignore",
    )


class LoggingSettings(BaseSettings):
    """Logging settings."""

    level: str = Field(default="INFO", description="Minimum log level")
    json_logs: bool = Field(
        default=False,
        alias="LOG_JSON",
        description="Render logs as JSON instead of console output",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings."""
    return DatabaseSettings()


@lru_cache
def get_api_settings() -> APISettings:
    """Get cached API settings."""
    return APISettings()


@lru_cache
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings."""
    return LoggingSettings()
