"""Logging configuration and utilities."""
import logging
import sys
import uuid
from typing import Any, Dict, List, Optional

import structlog
from structlog.stdlib import LoggerFactory

from ..config import LoggingSettings


def configure_logging(settings: Optional[LoggingSettings] = None):
    """Configure structured logging."""
    settings = settings or LoggingSettings()

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.json_logs
        else structlog.dev.ConsoleRenderer()
    )

    # Configure structlog
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Configure standard logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper()),
    )

    # Set third-party log levels
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("asyncpg").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


class UserEventLogger:
    """User lifecycle event logging utility."""

    @staticmethod
    def log_user_created(user_id: uuid.UUID, email: str, role: str):
        """Log user creation."""
        logger = structlog.get_logger("business.user")
        logger.info(
            "User created",
            event_type="user_created",
            user_id=str(user_id),
            email=email,
            role=role,
        )

    @staticmethod
    def log_user_updated(user_id: uuid.UUID, changed_fields: List[str]):
        """Log single user update."""
        logger = structlog.get_logger("business.user")
        logger.info(
            "User updated",
            event_type="user_updated",
            user_id=str(user_id),
            changed_fields=changed_fields,
        )

    @staticmethod
    def log_users_batch_updated(
        requested: int,
        updated: int,
        skipped_ids: List[uuid.UUID],
    ):
        """Log batch update completion."""
        logger = structlog.get_logger("business.user")
        logger.info(
            "Users batch updated",
            event_type="users_batch_updated",
            requested=requested,
            updated=updated,
            skipped=len(skipped_ids),
            skipped_ids=[str(user_id) for user_id in skipped_ids],
        )

    @staticmethod
    def log_user_deleted(user_id: uuid.UUID):
        """Log user deletion."""
        logger = structlog.get_logger("business.user")
        logger.info(
            "User deleted",
            event_type="user_deleted",
            user_id=str(user_id),
        )

    @staticmethod
    def log_test_data_cleared(removed: int, criteria: Dict[str, Any]):
        """Log test data cleanup."""
        logger = structlog.get_logger("business.user")
        logger.warning(
            "Test data cleared",
            event_type="test_data_cleared",
            removed=removed,
            **criteria
        )

    @staticmethod
    def log_conflict(operation: str, details: Dict[str, Any] = None):
        """Log a uniqueness violation reported by the store."""
        logger = structlog.get_logger("business.user")
        logger.warning(
            "Uniqueness constraint violated",
            event_type="user_conflict",
            operation=operation,
            **(details or {})
        )
