"""
Dashboard statistics and alerts.
Endpoints: /api/stats, /api/alerts
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from core.dependencies import get_current_user
from core.security import TokenData
from services.reports import ReportService


router = APIRouter()


@router.get("/stats")
def get_stats(
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Portfolio summary, 12-month payment chart, type and maintenance breakdowns."""
    return ReportService(db).get_stats()


@router.get("/alerts")
def get_alerts(
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Leases ending within 60 days, tenants owing rent, and quit notices."""
    return ReportService(db).get_alerts()
