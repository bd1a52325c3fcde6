"""
Base model class and common mixins for all database models.
"""

import uuid
from datetime import date, datetime, timezone, timedelta
from decimal import Decimal
from sqlalchemy import Column, String, DateTime, Enum
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Lagos timezone (WAT, UTC+1)
LAGOS_TZ = timezone(timedelta(hours=1))


def get_lagos_now():
    """Get current time in Lagos timezone (as naive datetime)."""
    return datetime.now(LAGOS_TZ).replace(tzinfo=None)


def get_lagos_today() -> date:
    return get_lagos_now().date()


def new_id() -> str:
    return str(uuid.uuid4())


class CreatedAtMixin:
    created_at = Column(DateTime, default=get_lagos_now, nullable=False)


class TimestampMixin(CreatedAtMixin):
    """Mixin for created_at and updated_at timestamps."""

    updated_at = Column(DateTime, default=get_lagos_now, onupdate=get_lagos_now, nullable=False)


class BaseModel(Base):
    """Abstract base model with a UUID string primary key."""

    __abstract__ = True

    id = Column(String(36), primary_key=True, default=new_id)

    def to_dict(self):
        """Convert model to a JSON-ready dictionary."""
        return {c.name: _json_value(getattr(self, c.name)) for c in self.__table__.columns}

    def __repr__(self):
        return f"<{self.__class__.__name__}(id={self.id})>"


def _json_value(value):
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def enum_type(py_enum, name: str):
    """String column type restricted to the values of a Python enum."""
    return Enum(
        *[member.value for member in py_enum],
        name=name,
        native_enum=False,
        create_constraint=True,
        length=20,
    )
