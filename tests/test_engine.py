"""Tests for database URL building and engine creation."""
import pytest

from ecommerce_users.config import DEFAULT_CONNECTION_STRING, DatabaseSettings
from ecommerce_users.core.exceptions import ConfigurationError
from ecommerce_users.database import (
    build_database_url,
    create_engine,
    parse_connection_string,
)


def test_default_connection_string_translation():
    """Test development default maps to an asyncpg URL."""
    url = build_database_url(DEFAULT_CONNECTION_STRING)

    assert url.drivername == "postgresql+asyncpg"
    assert url.host == "localhost"
    assert url.port == 32768
    assert url.database == "ecommerce_db"
    assert url.username == "ecommerce_user"
    assert url.password == "ecommerce_password"


def test_key_aliases_are_case_insensitive():
    parts = parse_connection_string("SERVER=db.internal; user id=shop; PWD=s3cret; DataBase=orders")

    assert parts == {
        "host": "db.internal",
        "username": "shop",
        "password": "s3cret",
        "database": "orders",
    }


def test_unknown_keys_are_ignored():
    url = build_database_url("Host=db;Database=shop;SSL Mode=Require;")

    assert url.host == "db"
    assert url.database == "shop"
    assert url.port is None
    assert not url.query


def test_sqlalchemy_url_passes_through():
    url = build_database_url("sqlite+aiosqlite:///./local.db")

    assert url.drivername == "sqlite+aiosqlite"
    assert url.database == "./local.db"


@pytest.mark.parametrize(
    "connection_string",
    [
        "Host=db;Database",
        "Database=shop",
        "Host=db",
        "Host=db;Database=shop;Port=abc",
    ],
)
def test_malformed_connection_strings(connection_string):
    with pytest.raises(ConfigurationError):
        build_database_url(connection_string)


@pytest.mark.asyncio
async def test_sqlite_engine_skips_pool_sizing(tmp_path):
    """Test SQLite engines are created without pool arguments."""
    url = build_database_url(f"sqlite+aiosqlite:///{tmp_path / 'engine.db'}")

    engine = create_engine(url, DatabaseSettings(pool_size=2))
    try:
        assert engine.url.get_backend_name() == "sqlite"
    finally:
        await engine.dispose()
