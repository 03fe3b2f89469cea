"""Database module."""
from .engine import (
    build_database_url,
    close_db,
    create_engine,
    create_session_factory,
    init_db,
    parse_connection_string,
)
from .session import is_unique_violation, session_scope

__all__ = [
    "build_database_url",
    "close_db",
    "create_engine",
    "create_session_factory",
    "init_db",
    "is_unique_violation",
    "parse_connection_string",
    "session_scope",
]
