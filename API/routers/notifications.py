"""
Notifications router.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from core.dependencies import get_current_user
from core.security import TokenData
from schemas.base import SuccessResponse
from services.notification import NotificationService


router = APIRouter()


@router.get("")
def list_notifications(
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return [n.to_dict() for n in NotificationService(db).list_for_user(current_user.id)]


@router.patch("/read-all", response_model=SuccessResponse)
def mark_all_read(
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    NotificationService(db).mark_all_read(current_user.id)
    return SuccessResponse()


@router.patch("/{notification_id}/read", response_model=SuccessResponse)
def mark_read(
    notification_id: str,
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    NotificationService(db).mark_read(notification_id)
    return SuccessResponse()
