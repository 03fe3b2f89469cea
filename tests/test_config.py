"""Tests for configuration resolution."""
from ecommerce_users.config import (
    CONNECTION_STRING_ENV,
    DEFAULT_CONNECTION_STRING,
    DatabaseSettings,
    Settings,
    resolve_connection_string,
)


def test_default_connection_string():
    """Test development default applies without an override."""
    assert resolve_connection_string() == DEFAULT_CONNECTION_STRING


def test_environment_override(monkeypatch):
    """Test environment variable beats the default."""
    monkeypatch.setenv(CONNECTION_STRING_ENV, "Host=db;Database=shop")

    assert resolve_connection_string() == "Host=db;Database=shop"


def test_explicit_value_wins(monkeypatch):
    """Test explicit argument beats the environment."""
    monkeypatch.setenv(CONNECTION_STRING_ENV, "Host=db;Database=shop")

    assert resolve_connection_string("Host=other;Database=x") == "Host=other;Database=x"


def test_empty_explicit_value_falls_through():
    assert resolve_connection_string("") == DEFAULT_CONNECTION_STRING


def test_settings_object_is_used():
    settings = DatabaseSettings(connection_string="Host=h;Database=d")

    assert resolve_connection_string(settings=settings) == "Host=h;Database=d"


def test_pool_settings_from_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_POOL_SIZE", "3")
    monkeypatch.setenv("DATABASE_ECHO", "true")

    settings = DatabaseSettings()

    assert settings.pool_size == 3
    assert settings.echo is True
    assert settings.max_overflow == 20


def test_aggregate_settings(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    settings = Settings()

    assert settings.logging.log_level == "DEBUG"
    assert settings.database.connection_string == DEFAULT_CONNECTION_STRING
