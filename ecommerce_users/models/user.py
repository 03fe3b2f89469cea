"""User model."""
import enum
from typing import Optional

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, RecordMixin


class UserRole(str, enum.Enum):
    """User role, persisted by symbolic name."""

    CUSTOMER = "Customer"
    ADMIN = "Admin"
    VENDOR = "Vendor"


class User(RecordMixin, Base):
    """E-commerce user account."""

    __tablename__ = "users"

    # Fields a caller may change through update / update_many.
    MUTABLE_FIELDS = (
        "email",
        "first_name",
        "last_name",
        "phone",
        "role",
        "is_active",
        "email_verified",
    )

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), default="", nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), default="", nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(50))
    role: Mapped[UserRole] = mapped_column(
        Enum(
            UserRole,
            name="user_role",
            native_enum=False,
            length=20,
            values_callable=lambda roles: [role.value for role in roles],
        ),
        default=UserRole.CUSTOMER,
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(default=True, nullable=False)
    email_verified: Mapped[bool] = mapped_column(default=False, nullable=False)

    def __init__(self, **kwargs):
        # Column defaults only apply at flush; mirror them on the instance.
        kwargs.setdefault("email", "")
        kwargs.setdefault("password_hash", "")
        kwargs.setdefault("first_name", "")
        kwargs.setdefault("last_name", "")
        kwargs.setdefault("role", UserRole.CUSTOMER)
        kwargs.setdefault("is_active", True)
        kwargs.setdefault("email_verified", False)
        super().__init__(**kwargs)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def display_name(self) -> str:
        return f"{self.full_name} ({self.email})"

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={getattr(self.role, 'value', self.role)})>"
