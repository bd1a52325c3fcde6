"""
Tenant ledger service.

Owns every write to a tenant's lease facts and running balance except
payment recording, which lives in PaymentService.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from loguru import logger
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError, ValidationError
from database.models import Tenant, NotificationType, SequenceCounter, TENANT_SN
from schemas.tenant import TenantCreate, TenantUpdate
from services.notification import NotificationService
from utils.helpers import get_lagos_today


# Columns a full edit replaces
EDITABLE_FIELDS = (
    "tenant_name", "accommodation_type", "property_address", "period",
    "lease_start", "lease_end", "rent_per_annum", "amount_paid",
    "phone", "email", "whatsapp", "notes", "quit_notice",
)

# Returned by the public tenant portal
PORTAL_FIELDS = (
    "id", "tenant_name", "accommodation_type", "property_address", "period",
    "lease_start", "lease_end", "rent_per_annum", "amount_paid", "phone",
)


class TenantService:
    """Tenant (lease holder) management service."""

    def __init__(self, db: Session):
        self.db = db

    # ==================== QUERIES ====================

    def get_tenant(self, tenant_id: str) -> Tenant:
        tenant = self.db.query(Tenant).filter(Tenant.id == tenant_id).first()
        if not tenant:
            raise NotFoundError("Not found")
        return tenant

    def list_tenants(
        self,
        search: Optional[str] = None,
        status: Optional[str] = None,
        today: Optional[date] = None,
    ) -> List[Tenant]:
        """
        Filtered list in S/N order.
        Unknown status values are ignored.
        """
        query = self.db.query(Tenant)

        if search:
            like = f"%{search}%"
            query = query.filter(
                or_(
                    Tenant.tenant_name.ilike(like),
                    Tenant.accommodation_type.ilike(like),
                    Tenant.property_address.ilike(like),
                    Tenant.email.ilike(like),
                )
            )

        if status:
            clause = Tenant.status_clause(status, today or get_lagos_today())
            if clause is not None:
                query = query.filter(clause)

        return query.order_by(Tenant.sn.asc()).all()

    def get_tenant_detail(self, tenant_id: str) -> dict:
        """Tenant with its payment and maintenance history."""
        tenant = self.get_tenant(tenant_id)
        data = tenant.to_dict()
        data["payments"] = [p.to_dict() for p in tenant.payments]
        data["maintenance"] = [m.to_dict() for m in tenant.maintenance_requests]
        return data

    def get_portal_view(self, tenant_id: str) -> dict:
        """Reduced public view for the tenant portal."""
        tenant = self.get_tenant(tenant_id)
        full = tenant.to_dict()
        data = {key: full[key] for key in PORTAL_FIELDS}
        data["payment_status"] = tenant.payment_status
        data["payments"] = [
            {
                "amount": float(p.amount),
                "payment_date": p.payment_date.isoformat() if p.payment_date else None,
                "payment_method": p.payment_method,
                "receipt_number": p.receipt_number,
            }
            for p in tenant.payments
        ]
        return data

    # ==================== WRITES ====================

    def next_sn(self) -> int:
        """
        Next display number, taken from the tenant_sn counter by a relative
        UPDATE. The row lock it takes is held until the caller commits, so
        concurrent creates get distinct numbers, and numbers freed by a
        delete are never reissued.

        The counter row is created on first use, starting past any sn
        already stored.
        """
        bumped = self.db.query(SequenceCounter).filter(
            SequenceCounter.name == TENANT_SN
        ).update(
            {SequenceCounter.value: SequenceCounter.value + 1},
            synchronize_session=False,
        )
        if bumped:
            return self.db.query(SequenceCounter.value).filter(
                SequenceCounter.name == TENANT_SN
            ).scalar()

        start = (self.db.query(func.max(Tenant.sn)).scalar() or 0) + 1
        self.db.add(SequenceCounter(name=TENANT_SN, value=start))
        self.db.flush()
        return start

    def create_tenant(self, data: TenantCreate, created_by: Optional[str] = None) -> Tenant:
        if not data.tenant_name or not data.tenant_name.strip():
            raise ValidationError("tenant_name required")

        tenant = Tenant(
            sn=self.next_sn(),
            tenant_name=data.tenant_name,
            accommodation_type=data.accommodation_type or "",
            property_address=data.property_address or "",
            period=data.period or "",
            lease_start=data.lease_start,
            lease_end=data.lease_end,
            rent_per_annum=data.rent_per_annum or Decimal("0"),
            amount_paid=data.amount_paid or Decimal("0"),
            phone=data.phone or "",
            email=data.email or "",
            whatsapp=data.whatsapp or "",
            notes=data.notes or "",
            quit_notice=bool(data.quit_notice),
            created_by=created_by,
        )
        self.db.add(tenant)
        self.db.commit()
        self.db.refresh(tenant)

        logger.info(f"Tenant created: {tenant.tenant_name} (sn={tenant.sn})")
        return tenant

    def update_tenant(self, tenant_id: str, data: TenantUpdate) -> Tenant:
        """
        Full edit. amount_paid is written directly and does not touch the
        payment log, so the two can diverge after this call.
        """
        tenant = self.get_tenant(tenant_id)
        if not data.tenant_name or not data.tenant_name.strip():
            raise ValidationError("tenant_name required")

        values = data.model_dump(include=set(EDITABLE_FIELDS))
        for key in ("accommodation_type", "property_address", "period",
                    "phone", "email", "whatsapp", "notes"):
            if values[key] is None:
                values[key] = ""

        for key, value in values.items():
            setattr(tenant, key, value)

        self.db.commit()
        self.db.refresh(tenant)
        return tenant

    def set_amount_paid(self, tenant_id: str, amount_paid: Decimal) -> Tenant:
        """Balance correction: sets the value, does not increment."""
        tenant = self.get_tenant(tenant_id)
        tenant.amount_paid = amount_paid if amount_paid > 0 else Decimal("0")
        self.db.commit()
        self.db.refresh(tenant)
        return tenant

    def set_quit_notice(self, tenant_id: str, quit_notice: bool, today: Optional[date] = None) -> Tenant:
        """Toggle the flag; the date is stamped on true and cleared on false."""
        tenant = self.get_tenant(tenant_id)

        tenant.quit_notice = bool(quit_notice)
        tenant.quit_notice_date = (today or get_lagos_today()) if quit_notice else None

        if quit_notice:
            NotificationService(self.db).add(
                NotificationType.QUIT_NOTICE,
                title=f"Quit notice: {tenant.tenant_name}",
                message=f"{tenant.tenant_name} ({tenant.property_address or 'no address'}) gave quit notice",
                tenant_id=tenant.id,
            )

        self.db.commit()
        self.db.refresh(tenant)
        return tenant

    def delete_tenant(self, tenant_id: str) -> None:
        """Delete; payments cascade, maintenance tickets are unlinked."""
        tenant = self.get_tenant(tenant_id)
        self.db.delete(tenant)
        self.db.commit()
        logger.info(f"Tenant deleted: {tenant_id}")
