"""
Maintenance request schemas.
"""

from typing import Optional
from pydantic import BaseModel, field_validator

from database.models import MaintenanceCategory, MaintenancePriority, MaintenanceStatus
from .base import blank_to_none


class MaintenanceCreate(BaseModel):
    """New ticket. Missing category/priority fall back to other/medium."""

    tenant_id: Optional[str] = None
    tenant_name: Optional[str] = None
    property_address: Optional[str] = None
    category: Optional[MaintenanceCategory] = None
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[MaintenancePriority] = None

    @field_validator("tenant_id", "category", "priority", mode="before")
    @classmethod
    def empty_values(cls, v):
        return blank_to_none(v)


class MaintenanceUpdate(BaseModel):
    status: Optional[MaintenanceStatus] = None
    assigned_to: Optional[str] = None
    priority: Optional[MaintenancePriority] = None

    @field_validator("assigned_to", mode="before")
    @classmethod
    def empty_assignee(cls, v):
        return blank_to_none(v)
