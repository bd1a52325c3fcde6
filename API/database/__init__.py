"""
Database package for EstateIQ.

Usage:
    from database import DatabaseConnection, get_db
    from database.models import User, Tenant, Payment
"""

from .base import Base, BaseModel, TimestampMixin, CreatedAtMixin, get_lagos_now, get_lagos_today
from .connection import (
    DatabaseConnection,
    get_db,
)

# Import all models to ensure they are registered with SQLAlchemy
from .models import *


__all__ = [
    # Base
    'Base',
    'BaseModel',
    'TimestampMixin',
    'CreatedAtMixin',
    'get_lagos_now',
    'get_lagos_today',

    # Connection
    'DatabaseConnection',
    'get_db',
]
