"""
Authentication router.
Handles login, registration, profile and password change.
Endpoints: /api/auth/...
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_db
from core.dependencies import get_current_user, require_admin
from core.exceptions import ValidationError
from core.security import TokenData
from schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    ProfileUpdate,
    ChangePasswordRequest,
    UserInfo,
)
from schemas.base import SuccessResponse, ErrorResponse
from services.auth import AuthService


router = APIRouter()


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Email and password required"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    }
)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    """Login with email and password; returns a 7-day bearer token."""
    auth_service = AuthService(db)
    user = auth_service.authenticate_user(data.email, data.password)

    return LoginResponse(
        token=auth_service.create_token(user),
        user=UserInfo.model_validate(user),
    )


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse, "description": "Email already exists"}},
)
def register(
    data: RegisterRequest,
    current_user: TokenData = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Create a staff account (admin only)."""
    user = AuthService(db).register(data)
    return user.to_public_dict()


@router.get("/me")
def get_me(
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return AuthService(db).get_user(current_user.id).to_public_dict()


@router.put("/me")
def update_me(
    data: ProfileUpdate,
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return AuthService(db).update_profile(current_user.id, data).to_public_dict()


@router.put("/change-password", response_model=SuccessResponse)
def change_password(
    data: ChangePasswordRequest,
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    success, message = AuthService(db).change_password(
        current_user.id,
        data.current_password,
        data.new_password
    )
    if not success:
        raise ValidationError(message)

    return SuccessResponse()
