"""Database configuration using Pydantic Settings.

Supports PostgreSQL (production) and SQLite (development/testing).
All settings can be overridden via environment variables with the DB_ prefix.

Example environment variables:
    DB_DRIVER=postgresql+psycopg2
    DB_HOST=localhost
    DB_PORT=5432
    DB_NAME=resume_submissions
    DB_USER=resumeuser
    DB_PASSWORD=secret
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Full URL wins over the individual parts when set
    url: Optional[str] = Field(default=None, description="Full SQLAlchemy database URL")

    driver: str = Field(
        default="sqlite",
        description="Database driver (postgresql+psycopg2 or sqlite)"
    )

    # PostgreSQL settings
    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    name: str = Field(default="resume_submissions", description="Database name")
    user: str = Field(default="", description="Database user")
    password: str = Field(default="", description="Database password")

    # SQLite settings
    sqlite_path: Path = Field(
        default=Path("data/resume_submissions.db"),
        description="Path to SQLite database file"
    )

    # Connection pool settings (PostgreSQL only)
    pool_size: int = Field(default=5, ge=1, le=100, description="Connections kept in the pool")
    max_overflow: int = Field(default=10, ge=0, le=100, description="Max connections above pool_size")
    pool_recycle: int = Field(default=1800, ge=60, description="Seconds before a connection is recycled")
    pool_pre_ping: bool = Field(default=True, description="Test connections before using them")

    echo_sql: bool = Field(default=False, description="Log all SQL statements (for debugging)")

    @computed_field
    @property
    def is_sqlite(self) -> bool:
        """Check if using SQLite."""
        if self.url:
            return self.url.startswith("sqlite")
        return "sqlite" in self.driver.lower()

    @computed_field
    @property
    def sync_url(self) -> str:
        """
        Get the database URL for the synchronous engine.

        Returns:
            SQLAlchemy database URL.
        """
        if self.url:
            return self.url

        if self.is_sqlite:
            return f"sqlite:///{self.sqlite_path.absolute()}"

        auth = ""
        if self.user:
            auth = f"{self.user}"
            if self.password:
                auth += f":{self.password}"
            auth += "@"

        return f"{self.driver}://{auth}{self.host}:{self.port}/{self.name}"

    def get_connect_args(self) -> dict:
        """Get database-specific connection arguments."""
        if self.is_sqlite:
            return {"check_same_thread": False}
        return {}

    def ensure_sqlite_directory(self) -> None:
        """Create the parent directory of the SQLite file when no URL is set."""
        if self.is_sqlite and not self.url:
            self.sqlite_path.parent.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """
    Get cached database settings instance.

    Returns:
        DatabaseSettings: Cached settings loaded from environment.
    """
    return DatabaseSettings()
