"""
Notifications and the outbound message log (WhatsApp / SMS / email).
Both are write-only audit records; nothing here is actually delivered.
"""

from enum import Enum as PyEnum
from sqlalchemy import (
    Column, String, Text, Boolean, ForeignKey, Index
)

from ..base import BaseModel, CreatedAtMixin, enum_type


class NotificationType(str, PyEnum):
    RENT_DUE = "rent_due"
    RENT_OVERDUE = "rent_overdue"
    LEASE_EXPIRY = "lease_expiry"
    QUIT_NOTICE = "quit_notice"
    MAINTENANCE = "maintenance"
    PAYMENT = "payment"
    SYSTEM = "system"


class MessageChannel(str, PyEnum):
    WHATSAPP = "whatsapp"
    SMS = "sms"
    EMAIL = "email"


class MessageStatus(str, PyEnum):
    SENT = "sent"
    FAILED = "failed"
    PENDING = "pending"


class Notification(BaseModel, CreatedAtMixin):
    """
    Dashboard notification.
    user_id NULL means broadcast to every user.
    """

    __tablename__ = 'notifications'

    type = Column(enum_type(NotificationType, 'notification_type'), nullable=False)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=True)
    tenant_id = Column(String(36), ForeignKey('tenants.id', ondelete='SET NULL'), nullable=True)
    user_id = Column(String(36), nullable=True, index=True)
    is_read = Column(Boolean, default=False, nullable=False)

    __table_args__ = (
        Index('ix_notifications_created_at', 'created_at'),
    )


class MessageLog(BaseModel, CreatedAtMixin):
    """One logged outbound message."""

    __tablename__ = 'message_log'

    tenant_id = Column(String(36), nullable=True, index=True)
    tenant_name = Column(String(255), default='', nullable=True)
    phone = Column(String(50), default='', nullable=True)
    channel = Column(
        enum_type(MessageChannel, 'message_channel'),
        default=MessageChannel.WHATSAPP.value,
        nullable=False
    )
    message = Column(Text, default='', nullable=True)
    status = Column(
        enum_type(MessageStatus, 'message_status'),
        default=MessageStatus.PENDING.value,
        nullable=False
    )
    sent_by = Column(String(36), nullable=True)
