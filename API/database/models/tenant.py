"""
Tenant (lease holder) model, the ledger entity.

Each tenant carries its own running balance: amount_paid against
rent_per_annum. Payment status is derived from that pair and never stored.
"""

from datetime import date, timedelta
from decimal import Decimal
from enum import Enum as PyEnum
from typing import Optional

from sqlalchemy import (
    Column, String, Integer, Boolean, Text, Numeric,
    Date, ForeignKey, Index, and_
)
from sqlalchemy.orm import relationship

from ..base import BaseModel, TimestampMixin


# Lease windows, in days from today (inclusive)
DASHBOARD_EXPIRY_DAYS = 30
ALERT_EXPIRY_DAYS = 60


class PaymentStatus(str, PyEnum):
    """Derived payment state of a tenant."""
    PAID = "paid"
    PARTIAL = "partial"
    UNPAID = "unpaid"


class TenantFilter(str, PyEnum):
    """Values accepted by the tenant list `status` filter."""
    PAID = "paid"
    PARTIAL = "partial"
    UNPAID = "unpaid"
    QUIT = "quit"
    EXPIRING = "expiring"


def _as_decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def derive_payment_status(amount_paid, rent_per_annum) -> Optional[str]:
    """
    paid    : rent > 0 and amount_paid >= rent
    partial : 0 < amount_paid < rent
    unpaid  : amount_paid == 0

    A balance above zero against zero rent matches none of these.
    """
    paid = _as_decimal(amount_paid)
    rent = _as_decimal(rent_per_annum)

    if rent > 0 and paid >= rent:
        return PaymentStatus.PAID.value
    if 0 < paid < rent:
        return PaymentStatus.PARTIAL.value
    if paid == 0:
        return PaymentStatus.UNPAID.value
    return None


class Tenant(BaseModel, TimestampMixin):
    """
    Lease holder with a running balance.

    amount_paid only moves through payment recording/deletion, the
    payment-only patch, or a full edit. It is floored at zero.
    """

    __tablename__ = 'tenants'

    # Display order (spreadsheet "S/N"), independent of id
    sn = Column(Integer, unique=True, nullable=False, index=True)

    tenant_name = Column(String(255), nullable=False)
    accommodation_type = Column(String(100), default='', nullable=True)
    property_address = Column(String(255), default='', nullable=True)
    property_id = Column(String(36), ForeignKey('properties.id', ondelete='SET NULL'), nullable=True)

    # Lease
    period = Column(String(100), default='', nullable=True)
    lease_start = Column(Date, nullable=True)
    lease_end = Column(Date, nullable=True)

    # Balance
    rent_per_annum = Column(Numeric(15, 2), default=0, nullable=False)
    amount_paid = Column(Numeric(15, 2), default=0, nullable=False)

    # Contact
    phone = Column(String(50), default='', nullable=True)
    email = Column(String(255), default='', nullable=True)
    whatsapp = Column(String(50), default='', nullable=True)
    notes = Column(Text, default='', nullable=True)

    # Quit notice
    quit_notice = Column(Boolean, default=False, nullable=False)
    quit_notice_date = Column(Date, nullable=True)

    created_by = Column(String(36), nullable=True)

    # Relationships
    payments = relationship(
        "Payment",
        back_populates="tenant",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Payment.payment_date.desc()",
    )
    maintenance_requests = relationship(
        "Maintenance",
        back_populates="tenant",
        passive_deletes=True,
        order_by="Maintenance.created_at.desc()",
    )

    __table_args__ = (
        Index('ix_tenants_lease_end', 'lease_end'),
        Index('ix_tenants_quit_notice', 'quit_notice'),
    )

    def __repr__(self):
        return f"<Tenant(id={self.id}, sn={self.sn}, name='{self.tenant_name}')>"

    @property
    def payment_status(self) -> Optional[str]:
        return derive_payment_status(self.amount_paid, self.rent_per_annum)

    @property
    def amount_owed(self) -> Decimal:
        owed = _as_decimal(self.rent_per_annum) - _as_decimal(self.amount_paid)
        return owed if owed > 0 else Decimal("0")

    def to_dict(self):
        data = super().to_dict()
        data['payment_status'] = self.payment_status
        return data

    # ==================== SQL PREDICATES ====================
    # Same rules as derive_payment_status, for WHERE clauses and aggregates.

    @classmethod
    def paid_clause(cls):
        return and_(cls.rent_per_annum > 0, cls.amount_paid >= cls.rent_per_annum)

    @classmethod
    def partial_clause(cls):
        return and_(cls.amount_paid > 0, cls.amount_paid < cls.rent_per_annum)

    @classmethod
    def unpaid_clause(cls):
        return cls.amount_paid == 0

    @classmethod
    def quit_clause(cls):
        return cls.quit_notice == True  # noqa: E712

    @classmethod
    def expiring_clause(cls, today: date, days: int = DASHBOARD_EXPIRY_DAYS):
        return cls.lease_end.between(today, today + timedelta(days=days))

    @classmethod
    def overdue_clause(cls):
        return and_(cls.rent_per_annum > 0, cls.amount_paid < cls.rent_per_annum)

    @classmethod
    def status_clause(cls, status: str, today: date):
        """WHERE clause for a TenantFilter value, or None for unknown values."""
        clauses = {
            TenantFilter.PAID.value: cls.paid_clause,
            TenantFilter.PARTIAL.value: cls.partial_clause,
            TenantFilter.UNPAID.value: cls.unpaid_clause,
            TenantFilter.QUIT.value: cls.quit_clause,
        }
        if status == TenantFilter.EXPIRING.value:
            return cls.expiring_clause(today)
        builder = clauses.get(status)
        return builder() if builder else None
