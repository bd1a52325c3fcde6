"""
Auth and user-management schemas.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from database.models import UserRole


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserInfo(BaseModel):
    """User info returned by login and /auth/me."""

    id: str
    name: str
    email: str
    role: str
    phone: Optional[str] = None

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    token: str
    user: UserInfo


class RegisterRequest(BaseModel):
    """Create a user (admin only)."""

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[UserRole] = None
    phone: Optional[str] = None


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None


class ChangePasswordRequest(BaseModel):
    """Accepts the camelCase keys the dashboard sends."""

    model_config = ConfigDict(populate_by_name=True)

    current_password: str = Field(..., alias="currentPassword")
    new_password: str = Field(..., alias="newPassword", min_length=1)


class UserUpdate(BaseModel):
    """Admin edit of any user."""

    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[UserRole] = None
    phone: Optional[str] = None
    is_active: Optional[bool] = None
