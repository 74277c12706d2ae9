"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        TASKBOARD_DB_HOST: Database host (default: localhost)
        TASKBOARD_DB_PORT: Database port (default: 5432)
        TASKBOARD_DB_DATABASE: Database name (default: taskboard)
        TASKBOARD_DB_USERNAME: Database user (default: taskboard)
        TASKBOARD_DB_PASSWORD: Database password (required in production)
        TASKBOARD_DB_DRIVERNAME: SQLAlchemy async driver (default: postgresql+asyncpg)
        TASKBOARD_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
        TASKBOARD_DB_ECHO: Log emitted SQL (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="TASKBOARD_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="taskboard", description="Database name")
    username: str = Field(default="taskboard", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    drivername: str = Field(
        default="postgresql+asyncpg",
        description="SQLAlchemy async driver name",
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )
    echo: bool = Field(default=False, description="Log emitted SQL statements")


class WorkspaceSettings(BaseSettings):
    """Workspace membership policy settings.

    Environment variables:
        TASKBOARD_WORKSPACE_PROTECT_LAST_ADMIN: Refuse to remove a workspace's
            last admin (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="TASKBOARD_WORKSPACE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    protect_last_admin: bool = Field(
        default=False,
        description="Refuse to remove the last admin of a workspace",
    )


class Settings(BaseSettings):
    """Process-wide application settings."""

    model_config = SettingsConfigDict(
        env_prefix="TASKBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Minimum log level")


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_workspace_settings() -> WorkspaceSettings:
    """Get cached workspace policy settings."""
    return WorkspaceSettings()
