"""Configuration module."""
from .settings import (
    DEFAULT_CONNECTION_STRING,
    CONNECTION_STRING_ENV,
    DatabaseSettings,
    LoggingSettings,
    Settings,
    get_settings,
    resolve_connection_string,
)

__all__ = [
    "DEFAULT_CONNECTION_STRING",
    "CONNECTION_STRING_ENV",
    "DatabaseSettings",
    "LoggingSettings",
    "Settings",
    "get_settings",
    "resolve_connection_string",
]
