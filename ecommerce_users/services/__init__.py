"""Services module."""
from .user import TEST_EMAIL_MARKER, TEST_NAME_PREFIX, UserService

__all__ = [
    "TEST_EMAIL_MARKER",
    "TEST_NAME_PREFIX",
    "UserService",
]
