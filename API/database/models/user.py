"""
User model for authentication and role-based access.
Three flat roles: admin, manager, staff.
"""

from enum import Enum as PyEnum
from sqlalchemy import Column, String, Boolean, DateTime, Index

from ..base import BaseModel, TimestampMixin, enum_type


class UserRole(str, PyEnum):
    """Predefined roles."""
    ADMIN = "admin"
    MANAGER = "manager"
    STAFF = "staff"


class User(BaseModel, TimestampMixin):
    """
    Staff account that can sign in to the dashboard.
    Tenants and payments keep the creator id informationally (no FK),
    so deleting a user never cascades.
    """

    __tablename__ = 'users'

    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    phone = Column(String(50), default='', nullable=True)
    password_hash = Column(String(255), nullable=False)

    role = Column(enum_type(UserRole, 'user_role'), default=UserRole.STAFF.value, nullable=False)

    # Status
    is_active = Column(Boolean, default=True, nullable=False)
    last_login = Column(DateTime, nullable=True)

    __table_args__ = (
        Index('ix_users_role', 'role'),
    )

    def to_public_dict(self) -> dict:
        """User info without the password hash."""
        data = self.to_dict()
        data.pop('password_hash', None)
        return data
