"""
Maintenance requests router.
"""

from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_db
from database.models import MaintenancePriority, MaintenanceStatus
from core.dependencies import get_current_user, require_manager_or_admin
from core.security import TokenData
from schemas.maintenance import MaintenanceCreate, MaintenanceUpdate
from schemas.base import SuccessResponse
from services.maintenance import MaintenanceService


router = APIRouter()


@router.get("")
def list_requests(
    status: Optional[MaintenanceStatus] = None,
    priority: Optional[MaintenancePriority] = None,
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return MaintenanceService(db).list_requests(
        status=status.value if status else None,
        priority=priority.value if priority else None,
    )


@router.post("", status_code=status.HTTP_201_CREATED)
def create_request(
    data: MaintenanceCreate,
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return MaintenanceService(db).create_request(data).to_dict()


@router.patch("/{ticket_id}")
def update_request(
    ticket_id: str,
    data: MaintenanceUpdate,
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return MaintenanceService(db).update_request(ticket_id, data).to_dict()


@router.delete("/{ticket_id}", response_model=SuccessResponse)
def delete_request(
    ticket_id: str,
    current_user: TokenData = Depends(require_manager_or_admin),
    db: Session = Depends(get_db)
):
    MaintenanceService(db).delete_request(ticket_id)
    return SuccessResponse()
