"""
Dashboard statistics and alert lists.
"""

import calendar
from datetime import date
from typing import Optional

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from database.models import (
    Maintenance, Payment, Tenant,
    ALERT_EXPIRY_DAYS, DASHBOARD_EXPIRY_DAYS,
)
from utils.helpers import get_lagos_today


def months_ago(today: date, months: int) -> date:
    """Same day `months` earlier, clamped to the end of shorter months."""
    month_index = today.year * 12 + (today.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(today.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _count_where(clause):
    return func.coalesce(func.sum(case((clause, 1), else_=0)), 0)


class ReportService:
    def __init__(self, db: Session):
        self.db = db

    # ==================== STATS ====================

    def get_stats(self, today: Optional[date] = None) -> dict:
        today = today or get_lagos_today()
        return {
            "summary": self._summary(today),
            "monthly": self._monthly_payments(today),
            "by_type": self._by_type(),
            "maintenance": self._maintenance_by_status(),
        }

    def _summary(self, today: date) -> dict:
        outstanding = Tenant.rent_per_annum - Tenant.amount_paid

        row = self.db.query(
            func.count(Tenant.id),
            func.coalesce(func.sum(Tenant.rent_per_annum), 0),
            func.coalesce(func.sum(Tenant.amount_paid), 0),
            func.coalesce(func.sum(case((outstanding > 0, outstanding), else_=0)), 0),
            _count_where(Tenant.quit_clause()),
            _count_where(Tenant.paid_clause()),
            _count_where(Tenant.partial_clause()),
            _count_where(Tenant.unpaid_clause()),
            _count_where(Tenant.expiring_clause(today, DASHBOARD_EXPIRY_DAYS)),
        ).one()

        return {
            "total_tenants": int(row[0] or 0),
            "total_rent": float(row[1] or 0),
            "total_paid": float(row[2] or 0),
            "total_outstanding": float(row[3] or 0),
            "quit_count": int(row[4] or 0),
            "fully_paid": int(row[5] or 0),
            "partial_paid": int(row[6] or 0),
            "unpaid_count": int(row[7] or 0),
            "expiring_soon": int(row[8] or 0),
        }

    def _monthly_payments(self, today: date) -> list:
        """Payment totals for the last 12 months, oldest month first."""
        payments = self.db.query(Payment.payment_date, Payment.amount).filter(
            Payment.payment_date >= months_ago(today, 12)
        ).all()

        grouped = {}
        for payment_date, amount in payments:
            key = f"{payment_date.year}-{payment_date.month:02d}"
            if key not in grouped:
                grouped[key] = {
                    "month": payment_date.strftime("%b %Y"),
                    "month_key": key,
                    "total": 0.0,
                }
            grouped[key]["total"] += float(amount)

        return [grouped[k] for k in sorted(grouped)]

    def _by_type(self) -> list:
        count = func.count(Tenant.id)
        rows = self.db.query(
            Tenant.accommodation_type,
            count,
            func.coalesce(func.sum(Tenant.rent_per_annum), 0),
        ).group_by(Tenant.accommodation_type).order_by(count.desc()).all()

        return [
            {"type": t, "count": int(c), "total_rent": float(r)}
            for t, c, r in rows
        ]

    def _maintenance_by_status(self) -> list:
        rows = self.db.query(
            Maintenance.status, func.count(Maintenance.id)
        ).group_by(Maintenance.status).all()
        return [{"status": s, "count": int(c)} for s, c in rows]

    # ==================== ALERTS ====================

    def get_alerts(self, today: Optional[date] = None) -> dict:
        today = today or get_lagos_today()

        expiring = self.db.query(Tenant).filter(
            Tenant.expiring_clause(today, ALERT_EXPIRY_DAYS)
        ).order_by(Tenant.lease_end.asc()).all()

        overdue = self.db.query(Tenant).filter(
            Tenant.overdue_clause()
        ).order_by((Tenant.rent_per_annum - Tenant.amount_paid).desc()).all()

        quit_notices = self.db.query(Tenant).filter(
            Tenant.quit_clause()
        ).order_by(Tenant.sn.asc()).all()

        return {
            "expiring": [
                {
                    "id": t.id,
                    "tenant_name": t.tenant_name,
                    "property_address": t.property_address,
                    "lease_end": t.lease_end.isoformat(),
                    "phone": t.phone,
                    "days_remaining": (t.lease_end - today).days,
                }
                for t in expiring
            ],
            "overdue": [
                {
                    "id": t.id,
                    "tenant_name": t.tenant_name,
                    "property_address": t.property_address,
                    "rent_per_annum": float(t.rent_per_annum),
                    "amount_paid": float(t.amount_paid),
                    "phone": t.phone,
                    "amount_owed": float(t.amount_owed),
                }
                for t in overdue
            ],
            "quit_notices": [
                {
                    "id": t.id,
                    "tenant_name": t.tenant_name,
                    "property_address": t.property_address,
                    "quit_notice_date": t.quit_notice_date.isoformat() if t.quit_notice_date else None,
                    "phone": t.phone,
                }
                for t in quit_notices
            ],
        }
