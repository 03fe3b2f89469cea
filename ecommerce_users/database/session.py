"""Database session scope."""
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..core.exceptions import ConflictError

# SQLSTATE for unique_violation (PostgreSQL).
UNIQUE_VIOLATION_SQLSTATE = "23505"

_SQLITE_UNIQUE_ERRORS = {"SQLITE_CONSTRAINT_UNIQUE", "SQLITE_CONSTRAINT_PRIMARYKEY"}


def is_unique_violation(exc: IntegrityError) -> bool:
    """Tell uniqueness violations apart from NOT NULL, CHECK and FK failures."""
    orig = exc.orig
    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate is not None:
        return sqlstate == UNIQUE_VIOLATION_SQLSTATE

    errorname = getattr(orig, "sqlite_errorname", None)
    if errorname is not None:
        return errorname in _SQLITE_UNIQUE_ERRORS

    return "unique" in str(orig).lower()


@asynccontextmanager
async def session_scope(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Run a unit of work: commit on success, roll back on any error.

    Uniqueness violations surface as :class:`ConflictError` with the store's
    ``IntegrityError`` chained; every other store error, other integrity
    failures included, propagates unchanged.
    """
    session = session_factory()

    try:
        yield session
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        if not is_unique_violation(exc):
            raise
        raise ConflictError(
            "Record conflicts with an existing record",
            details={"reason": str(exc.orig)},
        ) from exc
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()
