"""Database engine and session factory management."""
import logging
from typing import Dict

from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ..config import DatabaseSettings
from ..core.exceptions import ConfigurationError
from ..models.base import Base

logger = logging.getLogger(__name__)

DEFAULT_DRIVERNAME = "postgresql+asyncpg"

# Key=Value connection string keys, lower-cased, mapped to URL parts.
_KEY_ALIASES: Dict[str, str] = {
    "host": "host",
    "server": "host",
    "port": "port",
    "database": "database",
    "db": "database",
    "username": "username",
    "user id": "username",
    "userid": "username",
    "user": "username",
    "password": "password",
    "pwd": "password",
}


def parse_connection_string(connection_string: str) -> Dict[str, str]:
    """Split a ``Key=Value;Key=Value`` connection string into URL parts."""
    parts: Dict[str, str] = {}

    for segment in connection_string.split(";"):
        segment = segment.strip()
        if not segment:
            continue
        if "=" not in segment:
            raise ConfigurationError(
                "Malformed connection string segment",
                details={"segment": segment},
            )

        key, value = segment.split("=", 1)
        key = key.strip().lower()
        target = _KEY_ALIASES.get(key)
        if target is None:
            logger.warning("Ignoring unsupported connection string key %r", key)
            continue
        parts[target] = value.strip()

    for required in ("host", "database"):
        if not parts.get(required):
            raise ConfigurationError(
                f"Connection string is missing '{required}'",
                details={"missing": required},
            )

    return parts


def build_database_url(connection_string: str) -> URL:
    """Turn a connection string into a SQLAlchemy URL.

    SQLAlchemy URLs (anything with ``://``) are used as given; ``Key=Value``
    strings are translated to ``postgresql+asyncpg``.
    """
    if "://" in connection_string:
        return make_url(connection_string)

    parts = parse_connection_string(connection_string)
    port = parts.get("port")
    if port is not None:
        try:
            port = int(port)
        except ValueError:
            raise ConfigurationError(
                "Connection string port must be an integer",
                details={"port": port},
            ) from None

    return URL.create(
        DEFAULT_DRIVERNAME,
        username=parts.get("username"),
        password=parts.get("password"),
        host=parts["host"],
        port=port,
        database=parts["database"],
    )


def create_engine(url: URL, settings: DatabaseSettings) -> AsyncEngine:
    """Create the async engine for ``url``."""
    options = {
        "echo": settings.echo,
        "pool_pre_ping": True,
    }

    # SQLite pools take no sizing arguments.
    if url.get_backend_name() != "sqlite":
        options.update(
            pool_size=settings.pool_size,
            max_overflow=settings.max_overflow,
            pool_recycle=3600,  # 1 hour
        )

    engine = create_async_engine(url, **options)
    logger.info(
        "Database engine created for %s",
        url.render_as_string(hide_password=True),
    )
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory bound to ``engine``."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """Create missing tables and indexes."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database tables created")


async def close_db(engine: AsyncEngine) -> None:
    """Close the database connections."""
    await engine.dispose()
    logger.info("Database connections closed")
