"""
Payment schemas.
"""

from typing import Optional
from datetime import date
from decimal import Decimal
from pydantic import BaseModel, field_validator

from database.models import PaymentMethod
from .base import blank_to_none


class PaymentCreate(BaseModel):
    """Record a payment. tenant_id and amount are checked by the service."""

    tenant_id: Optional[str] = None
    amount: Optional[Decimal] = None
    payment_date: Optional[date] = None
    payment_method: Optional[PaymentMethod] = None
    reference: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("payment_date", "payment_method", "tenant_id", "amount", mode="before")
    @classmethod
    def empty_values(cls, v):
        return blank_to_none(v)
