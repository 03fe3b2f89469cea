"""E-commerce user record store."""
from .core.exceptions import (
    ConfigurationError,
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
    ServiceClosedError,
    ServiceError,
)
from .models import User, UserRole
from .services import UserService

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "ConflictError",
    "InvalidArgumentError",
    "NotFoundError",
    "ServiceClosedError",
    "ServiceError",
    "User",
    "UserRole",
    "UserService",
]
