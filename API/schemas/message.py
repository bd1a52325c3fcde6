"""
Messaging schemas (WhatsApp deep links and the message log).
"""

from typing import Optional
from pydantic import BaseModel, field_validator

from database.models import MessageChannel
from .base import blank_to_none


class MessageSend(BaseModel):
    tenant_id: Optional[str] = None
    tenant_name: Optional[str] = None
    phone: Optional[str] = None
    channel: Optional[MessageChannel] = None
    message: Optional[str] = None

    @field_validator("tenant_id", "channel", mode="before")
    @classmethod
    def empty_values(cls, v):
        return blank_to_none(v)


class BulkReminderRequest(BaseModel):
    """Template placeholders: {name}, {amount}, {property}."""

    message_template: Optional[str] = None
