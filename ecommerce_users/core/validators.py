"""Input validators."""
from typing import Any

from email_validator import EmailNotValidError, validate_email

from .exceptions import InvalidArgumentError


def is_valid_email(value: Any) -> bool:
    """Check ``value`` against the standard ``local@domain`` address grammar.

    No DNS or deliverability lookups are made.
    """
    if not isinstance(value, str) or not value:
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def require_valid_email(value: Any) -> str:
    if not is_valid_email(value):
        raise InvalidArgumentError(
            "Invalid email format",
            details={"field": "email", "value": value},
        )
    return value
