"""
User management router (admin screens).
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from core.dependencies import require_admin, require_manager_or_admin
from core.security import TokenData
from schemas.auth import UserUpdate
from schemas.base import SuccessResponse
from services.user import UserService


router = APIRouter()


@router.get("")
def list_users(
    current_user: TokenData = Depends(require_manager_or_admin),
    db: Session = Depends(get_db)
):
    return [u.to_public_dict() for u in UserService(db).list_users()]


@router.put("/{user_id}")
def update_user(
    user_id: str,
    data: UserUpdate,
    current_user: TokenData = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return UserService(db).update_user(user_id, data).to_public_dict()


@router.delete("/{user_id}", response_model=SuccessResponse)
def delete_user(
    user_id: str,
    current_user: TokenData = Depends(require_admin),
    db: Session = Depends(get_db)
):
    UserService(db).delete_user(user_id)
    return SuccessResponse()
