"""User record lifecycle service."""
import uuid
from datetime import datetime
from typing import Any, Iterable, List, Optional

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from ..config import DatabaseSettings, resolve_connection_string
from ..core.exceptions import ConflictError, NotFoundError, ServiceClosedError
from ..core.logging import UserEventLogger
from ..core.validators import require_valid_email
from ..database import (
    build_database_url,
    close_db,
    create_engine,
    create_session_factory,
    init_db,
    session_scope,
)
from ..models.base import utcnow
from ..models.user import User, UserRole

logger = UserEventLogger()

# Records matching either marker are treated as disposable test data.
TEST_EMAIL_MARKER = "@test.com"
TEST_NAME_PREFIX = "Test"


def _as_uuid(value: Any) -> Optional[uuid.UUID]:
    """Coerce an id to UUID, or None when it cannot name any record."""
    if isinstance(value, uuid.UUID):
        return value
    if value is None:
        return None
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def _not_found(user_id: Any) -> NotFoundError:
    return NotFoundError(
        f"User with ID {user_id} not found",
        details={"user_id": str(user_id)},
    )


class UserService:
    """Create, read, update and delete User records.

    The service owns one engine (and its connection pool) from construction
    until :meth:`close`. Each operation runs in its own session, so concurrent
    calls never share one; overlapping updates are last-writer-wins.

    Usage::

        async with UserService() as users:
            user = await users.create(User(email="a@b.com", first_name="Ada"))
    """

    def __init__(
        self,
        connection_string: Optional[str] = None,
        settings: Optional[DatabaseSettings] = None,
    ):
        self._settings = settings or DatabaseSettings()
        url = build_database_url(
            resolve_connection_string(connection_string, self._settings)
        )
        self._engine = create_engine(url, self._settings)
        self._session_factory = create_session_factory(self._engine)
        self._closed = False

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @property
    def closed(self) -> bool:
        return self._closed

    async def __aenter__(self) -> "UserService":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Release the store handle. Later calls do nothing."""
        if self._closed:
            return
        self._closed = True
        await close_db(self._engine)

    def _unit_of_work(self):
        if self._closed:
            raise ServiceClosedError()
        return session_scope(self._session_factory)

    async def create_schema(self) -> None:
        """Create the users table and its indexes if they are missing."""
        if self._closed:
            raise ServiceClosedError()
        await init_db(self._engine)

    async def list_all(self) -> List[User]:
        """Return every user in storage order."""
        async with self._unit_of_work() as session:
            result = await session.execute(select(User))
            return list(result.scalars().all())

    async def get_by_id(self, user_id: uuid.UUID) -> User:
        """Return the user with ``user_id`` or raise :class:`NotFoundError`."""
        async with self._unit_of_work() as session:
            return await self._get_existing(session, user_id)

    async def create(self, user: User) -> User:
        """Persist a new user built from ``user``.

        The id and both timestamps are always assigned here; any values the
        caller set on them are ignored.
        """
        require_valid_email(user.email)

        now = utcnow()
        record = User(
            id=uuid.uuid4(),
            email=user.email,
            password_hash=user.password_hash,
            first_name=user.first_name,
            last_name=user.last_name,
            phone=user.phone,
            role=UserRole(user.role),
            is_active=user.is_active,
            email_verified=user.email_verified,
            created_at=now,
            updated_at=now,
        )

        try:
            async with self._unit_of_work() as session:
                session.add(record)
        except ConflictError:
            logger.log_conflict("create", {"email": user.email})
            raise

        logger.log_user_created(record.id, record.email, record.role.value)
        return record

    async def update(self, user: User) -> User:
        """Copy the mutable fields of ``user`` onto the stored record.

        Raises :class:`NotFoundError` when no record has ``user.id``. Returns
        the stored record, not ``user``.
        """
        require_valid_email(user.email)

        try:
            async with self._unit_of_work() as session:
                existing = await self._get_existing(session, user.id)
                changed = self._apply_changes(existing, user, utcnow())
        except ConflictError:
            logger.log_conflict("update", {"user_id": str(user.id), "email": user.email})
            raise

        logger.log_user_updated(existing.id, changed)
        return existing

    async def update_many(self, users: Iterable[User]) -> None:
        """Apply :meth:`update` semantics to every user that exists.

        Unlike :meth:`update`, users with no stored record are skipped without
        error, whatever their email. Emails of matched users are all checked
        before any change is applied. All changes are committed together; if
        the commit fails the store decides how much of the batch survived.
        """
        users = list(users)
        ids = {_as_uuid(user.id) for user in users} - {None}
        skipped: List[Any] = []

        try:
            async with self._unit_of_work() as session:
                stored = {}
                if ids:
                    result = await session.execute(select(User).where(User.id.in_(list(ids))))
                    stored = {record.id: record for record in result.scalars()}

                matched = []
                for user in users:
                    existing = stored.get(_as_uuid(user.id))
                    if existing is None:
                        skipped.append(user.id)
                        continue
                    require_valid_email(user.email)
                    matched.append((existing, user))

                now = utcnow()
                for existing, user in matched:
                    self._apply_changes(existing, user, now)
                updated = len(matched)
        except ConflictError:
            logger.log_conflict("update_many", {"requested": len(users)})
            raise

        logger.log_users_batch_updated(len(users), updated, skipped)

    async def delete(self, user_id: uuid.UUID) -> None:
        """Permanently remove the user with ``user_id``."""
        async with self._unit_of_work() as session:
            existing = await self._get_existing(session, user_id)
            await session.delete(existing)

        logger.log_user_deleted(existing.id)

    async def clear_test_data(self) -> int:
        """Delete users carrying the test email marker or test name prefix.

        Meant for test databases only; nothing here checks the environment.
        Matching is case-sensitive on every backend. Returns the number of
        rows removed.
        """
        # LIKE ignores case on SQLite, so it only narrows the candidates.
        candidates = select(User.id, User.email, User.first_name).where(
            or_(
                User.email.contains(TEST_EMAIL_MARKER, autoescape=True),
                User.first_name.startswith(TEST_NAME_PREFIX, autoescape=True),
            )
        )

        async with self._unit_of_work() as session:
            rows = (await session.execute(candidates)).all()
            doomed = [
                row.id
                for row in rows
                if TEST_EMAIL_MARKER in row.email
                or row.first_name.startswith(TEST_NAME_PREFIX)
            ]

            removed = 0
            if doomed:
                result = await session.execute(
                    delete(User)
                    .where(User.id.in_(doomed))
                    .execution_options(synchronize_session=False)
                )
                removed = result.rowcount

        logger.log_test_data_cleared(
            removed,
            {"email_marker": TEST_EMAIL_MARKER, "name_prefix": TEST_NAME_PREFIX},
        )
        return removed

    @staticmethod
    async def _get_existing(session: AsyncSession, user_id: Any) -> User:
        key = _as_uuid(user_id)
        user = await session.get(User, key) if key is not None else None
        if user is None:
            raise _not_found(user_id)
        return user

    @staticmethod
    def _apply_changes(existing: User, source: User, now: datetime) -> List[str]:
        """Copy mutable fields; id and created_at are never touched."""
        changed = []
        for field in User.MUTABLE_FIELDS:
            value = getattr(source, field)
            if getattr(existing, field) != value:
                setattr(existing, field, value)
                changed.append(field)
        existing.updated_at = now
        return changed
