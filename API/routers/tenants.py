"""
Tenant ledger router.
Endpoints: /api/tenants/...
"""

from typing import Optional
from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from sqlalchemy.orm import Session

from database import get_db
from core.dependencies import get_current_user, require_manager_or_admin
from core.exceptions import ValidationError
from core.security import TokenData
from schemas.tenant import TenantCreate, TenantUpdate, TenantPaymentPatch, TenantQuitPatch
from schemas.base import SuccessResponse
from services.tenant import TenantService
from services.tenant_import import TenantImportService


router = APIRouter()


@router.get("")
def list_tenants(
    search: Optional[str] = Query(None, description="Name, type, address or email"),
    status: Optional[str] = Query(None, description="paid | partial | unpaid | quit | expiring"),
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    tenants = TenantService(db).list_tenants(search=search, status=status)
    return [t.to_dict() for t in tenants]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_tenant(
    data: TenantCreate,
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    tenant = TenantService(db).create_tenant(data, created_by=current_user.id)
    return tenant.to_dict()


@router.post("/import")
async def import_tenants(
    file: Optional[UploadFile] = File(None),
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Bulk import from a CSV export of the tenant spreadsheet."""
    if file is None:
        raise ValidationError("No file")

    content = await file.read()
    return TenantImportService(db).import_csv(content, created_by=current_user.id)


@router.get("/{tenant_id}")
def get_tenant(
    tenant_id: str,
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return TenantService(db).get_tenant_detail(tenant_id)


@router.put("/{tenant_id}")
def update_tenant(
    tenant_id: str,
    data: TenantUpdate,
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return TenantService(db).update_tenant(tenant_id, data).to_dict()


@router.patch("/{tenant_id}/payment")
def patch_amount_paid(
    tenant_id: str,
    data: TenantPaymentPatch,
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Set amount_paid directly (balance correction)."""
    return TenantService(db).set_amount_paid(tenant_id, data.amount_paid).to_dict()


@router.patch("/{tenant_id}/quit")
def patch_quit_notice(
    tenant_id: str,
    data: TenantQuitPatch,
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return TenantService(db).set_quit_notice(tenant_id, data.quit_notice).to_dict()


@router.delete("/{tenant_id}", response_model=SuccessResponse)
def delete_tenant(
    tenant_id: str,
    current_user: TokenData = Depends(require_manager_or_admin),
    db: Session = Depends(get_db)
):
    TenantService(db).delete_tenant(tenant_id)
    return SuccessResponse()
