"""Database models module."""
from .base import Base, RecordMixin, TZDateTime
from .user import User, UserRole

__all__ = [
    "Base",
    "RecordMixin",
    "TZDateTime",
    "User",
    "UserRole",
]
