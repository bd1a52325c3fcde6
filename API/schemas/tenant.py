"""
Tenant (lease holder) schemas.
"""

from typing import Optional
from datetime import date
from decimal import Decimal
from pydantic import BaseModel, Field, field_validator

from .base import blank_to_none, none_to_zero


class TenantBase(BaseModel):
    """Fields shared by create and full update."""

    tenant_name: Optional[str] = None
    accommodation_type: Optional[str] = None
    property_address: Optional[str] = None
    period: Optional[str] = None
    lease_start: Optional[date] = None
    lease_end: Optional[date] = None
    rent_per_annum: Decimal = Field(default=Decimal("0"), ge=0)
    amount_paid: Decimal = Field(default=Decimal("0"), ge=0)
    phone: Optional[str] = None
    email: Optional[str] = None
    whatsapp: Optional[str] = None
    notes: Optional[str] = None
    quit_notice: bool = False

    @field_validator("lease_start", "lease_end", mode="before")
    @classmethod
    def empty_date(cls, v):
        return blank_to_none(v)

    @field_validator("rent_per_annum", "amount_paid", mode="before")
    @classmethod
    def empty_amount(cls, v):
        return none_to_zero(v)

    @field_validator("quit_notice", mode="before")
    @classmethod
    def empty_flag(cls, v):
        return False if v is None else v


class TenantCreate(TenantBase):
    pass


class TenantUpdate(TenantBase):
    """Full edit: every mutable field is replaced, amount_paid included."""


class TenantPaymentPatch(BaseModel):
    """Raw balance correction: amount_paid is set, not incremented."""

    amount_paid: Decimal = Field(default=Decimal("0"), ge=0)

    @field_validator("amount_paid", mode="before")
    @classmethod
    def empty_amount(cls, v):
        return none_to_zero(v)


class TenantQuitPatch(BaseModel):
    quit_notice: bool = False

    @field_validator("quit_notice", mode="before")
    @classmethod
    def empty_flag(cls, v):
        return False if v is None else v
