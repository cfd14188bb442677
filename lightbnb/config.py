"""
Configuration management using Pydantic settings.
Handles database connection parameters, pool sizing and logging for the data-access layer.
"""

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings
from typing import Optional
from functools import lru_cache
import logging


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application configuration
    app_name: str = "lightbnb"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Individual database components
    postgres_user: str = "vagrant"
    postgres_password: str = "123"
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "lightbnb"

    # Full database URL, built from the components when not provided
    database_url: Optional[str] = None

    # Connection pool configuration
    pool_size: int = 10  # Connections kept open in the pool
    max_overflow: int = 10  # Extra connections allowed under load
    pool_timeout: int = 30  # Seconds to wait for a free connection
    pool_recycle: int = 3600

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v):
        """Ensure an async driver is used."""
        if v and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        allowed_envs = ["development", "testing", "staging", "production"]
        if v not in allowed_envs:
            raise ValueError(f"Environment must be one of: {allowed_envs}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("pool_size", "max_overflow", "pool_timeout")
    @classmethod
    def validate_pool_numbers(cls, v):
        if v < 0:
            raise ValueError("Pool settings cannot be negative")
        return v

    @model_validator(mode="after")
    def build_database_url(self):
        """Build database URL from components if not provided directly."""
        if not self.database_url:
            self.database_url = (
                f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
                f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
            )
        return self

    @property
    def is_sqlite(self) -> bool:
        """Check if the configured store is SQLite (used for local testing)."""
        return self.database_url.startswith("sqlite")

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        return self.environment == "testing"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one instance of settings throughout the process lifecycle.
    """
    return Settings()


def configure_logging(config: Optional[Settings] = None) -> None:
    """Configure root logging at the configured level."""
    config = config or get_settings()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Global settings instance
settings = get_settings()
