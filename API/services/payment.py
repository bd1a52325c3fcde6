"""
Payment service. Records and deletes rent payments and keeps the tenant's
running balance in step with the payment log.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from loguru import logger
from sqlalchemy import case
from sqlalchemy.orm import Session

from core.config import settings
from core.exceptions import NotFoundError, ValidationError
from database.models import Payment, PaymentMethod, Tenant, NotificationType
from schemas.payment import PaymentCreate
from services.notification import NotificationService
from utils.helpers import get_lagos_now, get_lagos_today, format_amount


RECEIPT_PREFIX = "RCP"


class PaymentService:
    def __init__(self, db: Session):
        self.db = db

    # ==================== QUERIES ====================

    def list_payments(
        self,
        tenant_id: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> list:
        q = self.db.query(
            Payment, Tenant.tenant_name, Tenant.property_address
        ).outerjoin(Tenant, Tenant.id == Payment.tenant_id)

        if tenant_id:
            q = q.filter(Payment.tenant_id == tenant_id)
        if date_from:
            q = q.filter(Payment.payment_date >= date_from)
        if date_to:
            q = q.filter(Payment.payment_date <= date_to)

        rows = q.order_by(Payment.payment_date.desc(), Payment.created_at.desc()).all()
        return [
            self._to_dict(p, tenant_name=name, property_address=address)
            for p, name, address in rows
        ]

    def next_receipt_number(self, year: Optional[int] = None) -> str:
        """
        RCP-<year>-<seq>: seq is one past the suffix of the most recently
        created payment, whatever year that one carries.
        """
        year = year or get_lagos_now().year
        last = self.db.query(Payment.receipt_number).order_by(
            Payment.created_at.desc()
        ).first()

        seq = 1
        if last and last[0]:
            try:
                seq = int(last[0].rsplit("-", 1)[-1]) + 1
            except ValueError:
                seq = 1

        return f"{RECEIPT_PREFIX}-{year}-{seq:04d}"

    # ==================== WRITES ====================

    def record_payment(self, data: PaymentCreate, recorded_by: Optional[str] = None) -> dict:
        if not data.tenant_id or data.amount is None or data.amount <= 0:
            raise ValidationError("tenant_id and a positive amount required")

        tenant = self.db.query(Tenant).filter(Tenant.id == data.tenant_id).first()
        if not tenant:
            raise NotFoundError("Tenant not found")

        amount = Decimal(str(data.amount))
        payment = Payment(
            tenant_id=tenant.id,
            amount=amount,
            payment_date=data.payment_date or get_lagos_today(),
            payment_method=(data.payment_method or PaymentMethod.CASH).value,
            reference=data.reference or "",
            notes=data.notes or "",
            receipt_number=self.next_receipt_number(),
            recorded_by=recorded_by,
        )
        self.db.add(payment)
        self.db.commit()

        # Relative update, evaluated by the database
        self.db.query(Tenant).filter(Tenant.id == tenant.id).update(
            {Tenant.amount_paid: Tenant.amount_paid + amount},
            synchronize_session=False,
        )
        NotificationService(self.db).add(
            NotificationType.PAYMENT,
            title=f"Payment received: {tenant.tenant_name}",
            message=f"{settings.currency_symbol}{format_amount(amount)} received ({payment.receipt_number})",
            tenant_id=tenant.id,
        )
        self.db.commit()
        self.db.expire(tenant)
        self.db.refresh(payment)

        logger.info(
            f"Payment {payment.receipt_number} recorded: tenant={tenant.id} amount={amount}"
        )
        return self._to_dict(payment, tenant_name=tenant.tenant_name)

    def delete_payment(self, payment_id: str) -> None:
        """Reverse the payment's effect on the balance (floored at 0), then delete it."""
        payment = self.db.query(Payment).filter(Payment.id == payment_id).first()
        if not payment:
            raise NotFoundError("Payment not found")

        remaining = Tenant.amount_paid - payment.amount
        self.db.query(Tenant).filter(Tenant.id == payment.tenant_id).update(
            {Tenant.amount_paid: case((remaining < 0, 0), else_=remaining)},
            synchronize_session=False,
        )
        self.db.commit()
        self.db.expire_all()

        self.db.delete(payment)
        self.db.commit()
        logger.info(f"Payment deleted: {payment_id}")

    # ==================== HELPERS ====================

    def _to_dict(self, p: Payment, **extra) -> dict:
        data = p.to_dict()
        data.update(extra)
        return data
