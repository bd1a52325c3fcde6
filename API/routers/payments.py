"""
Rent payments router.
Endpoints: /api/payments/...
"""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_db
from core.dependencies import get_current_user, require_manager_or_admin
from core.security import TokenData
from schemas.payment import PaymentCreate
from schemas.base import SuccessResponse
from services.payment import PaymentService


router = APIRouter()


@router.get("")
def list_payments(
    tenant_id: Optional[str] = None,
    date_from: Optional[date] = Query(None, alias="from"),
    date_to: Optional[date] = Query(None, alias="to"),
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Payments newest first; from/to are inclusive."""
    return PaymentService(db).list_payments(tenant_id, date_from, date_to)


@router.post("", status_code=status.HTTP_201_CREATED)
def record_payment(
    data: PaymentCreate,
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Record a payment and add it to the tenant's amount_paid."""
    return PaymentService(db).record_payment(data, recorded_by=current_user.id)


@router.delete("/{payment_id}", response_model=SuccessResponse)
def delete_payment(
    payment_id: str,
    current_user: TokenData = Depends(require_manager_or_admin),
    db: Session = Depends(get_db)
):
    PaymentService(db).delete_payment(payment_id)
    return SuccessResponse()
