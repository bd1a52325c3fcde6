"""
Maintenance request model.
Loosely linked to a tenant; name/address are a snapshot taken at creation.
"""

from enum import Enum as PyEnum
from sqlalchemy import (
    Column, String, Text, DateTime, ForeignKey, Index
)
from sqlalchemy.orm import relationship

from ..base import BaseModel, TimestampMixin, enum_type


class MaintenanceCategory(str, PyEnum):
    PLUMBING = "plumbing"
    ELECTRICAL = "electrical"
    STRUCTURAL = "structural"
    PAINTING = "painting"
    SECURITY = "security"
    CLEANING = "cleaning"
    OTHER = "other"


class MaintenancePriority(str, PyEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class MaintenanceStatus(str, PyEnum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


# Most pressing first
PRIORITY_ORDER = [
    MaintenancePriority.URGENT.value,
    MaintenancePriority.HIGH.value,
    MaintenancePriority.MEDIUM.value,
    MaintenancePriority.LOW.value,
]


class Maintenance(BaseModel, TimestampMixin):
    """Maintenance ticket."""

    __tablename__ = 'maintenance'

    tenant_id = Column(String(36), ForeignKey('tenants.id', ondelete='SET NULL'), nullable=True, index=True)
    tenant_name = Column(String(255), default='', nullable=True)
    property_address = Column(String(255), default='', nullable=True)

    category = Column(
        enum_type(MaintenanceCategory, 'maintenance_category'),
        default=MaintenanceCategory.OTHER.value,
        nullable=False
    )
    title = Column(String(255), nullable=False)
    description = Column(Text, default='', nullable=True)
    priority = Column(
        enum_type(MaintenancePriority, 'maintenance_priority'),
        default=MaintenancePriority.MEDIUM.value,
        nullable=False
    )
    status = Column(
        enum_type(MaintenanceStatus, 'maintenance_status'),
        default=MaintenanceStatus.OPEN.value,
        nullable=False
    )

    assigned_to = Column(String(36), nullable=True)
    resolved_at = Column(DateTime, nullable=True)
    images = Column(Text, nullable=True)

    # Relationships
    tenant = relationship("Tenant", back_populates="maintenance_requests")

    __table_args__ = (
        Index('ix_maintenance_status', 'status'),
        Index('ix_maintenance_priority', 'priority'),
    )
