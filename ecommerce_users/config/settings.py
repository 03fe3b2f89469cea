"""Application configuration settings."""
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Environment override for the store connection string.
CONNECTION_STRING_ENV = "ConnectionStrings__DefaultConnection"

# Local development database. Never rely on this in production.
DEFAULT_CONNECTION_STRING = (
    "Host=localhost;Port=32768;Database=ecommerce_db;"
    "Username=ecommerce_user;Password=ecommerce_password"
)


class DatabaseSettings(BaseSettings):
    """Database configuration."""

    model_config = SettingsConfigDict(
        env_prefix="DATABASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    connection_string: str = Field(
        default=DEFAULT_CONNECTION_STRING,
        validation_alias=CONNECTION_STRING_ENV,
    )
    echo: bool = Field(default=False)
    pool_size: int = Field(default=10)
    max_overflow: int = Field(default=20)


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(default="INFO")
    json_logs: bool = Field(default=True)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(default="development")

    # Sub-configurations
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def get_settings() -> Settings:
    """Load settings from the current environment."""
    return Settings()


def resolve_connection_string(
    explicit: Optional[str] = None,
    settings: Optional[DatabaseSettings] = None,
) -> str:
    """Resolve the store connection string.

    Precedence:
      1. ``explicit``, when given and non-empty;
      2. ``ConnectionStrings__DefaultConnection`` from the environment or ``.env``;
      3. :data:`DEFAULT_CONNECTION_STRING`.
    """
    if explicit:
        return explicit
    settings = settings or DatabaseSettings()
    return settings.connection_string
