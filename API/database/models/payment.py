"""
Payment model: append-only rent payment history.
"""

from enum import Enum as PyEnum
from sqlalchemy import (
    Column, String, Text, Numeric, Date, ForeignKey, Index, CheckConstraint
)
from sqlalchemy.orm import relationship

from ..base import BaseModel, CreatedAtMixin, enum_type


class PaymentMethod(str, PyEnum):
    CASH = "cash"
    BANK_TRANSFER = "bank_transfer"
    CHEQUE = "cheque"
    POS = "pos"
    ONLINE = "online"


class Payment(BaseModel, CreatedAtMixin):
    """
    One rent payment. Never edited; deleting one reverses its effect on the
    tenant's amount_paid first.
    """

    __tablename__ = 'payments'

    tenant_id = Column(String(36), ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False, index=True)

    amount = Column(Numeric(15, 2), nullable=False)
    payment_date = Column(Date, nullable=False)
    payment_method = Column(
        enum_type(PaymentMethod, 'payment_method'),
        default=PaymentMethod.CASH.value,
        nullable=False
    )
    reference = Column(String(100), default='', nullable=True)
    notes = Column(Text, default='', nullable=True)
    receipt_number = Column(String(50), nullable=True, index=True)

    # Who recorded it (informational, no FK)
    recorded_by = Column(String(36), nullable=True)

    # Relationships
    tenant = relationship("Tenant", back_populates="payments")

    __table_args__ = (
        Index('ix_payments_payment_date', 'payment_date'),
        Index('ix_payments_created_at', 'created_at'),
        CheckConstraint('amount > 0', name='ck_payment_amount_positive'),
    )
