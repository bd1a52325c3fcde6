"""
Public tenant portal. No authentication: the tenant id is the access key.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from services.tenant import TenantService


router = APIRouter()


@router.get("/{tenant_id}")
def get_portal(tenant_id: str, db: Session = Depends(get_db)):
    return TenantService(db).get_portal_view(tenant_id)
