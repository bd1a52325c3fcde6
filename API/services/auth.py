"""
Authentication service.
Handles login, registration, profile and password changes.
"""

from typing import Optional, Tuple
from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database.models import User, UserRole
from core.exceptions import AuthError, ConflictError, NotFoundError, ValidationError
from core.security import (
    verify_password,
    get_password_hash,
    create_access_token,
    TokenData,
)
from schemas.auth import RegisterRequest, ProfileUpdate
from utils.helpers import get_lagos_now


INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    """Authentication service class."""

    def __init__(self, db: Session):
        self.db = db

    def authenticate_user(self, email: Optional[str], password: Optional[str]) -> User:
        """
        Authenticate by email and password.

        Unknown email, disabled account and wrong password all raise the
        same AuthError so callers cannot tell them apart.
        """
        if not email or not password:
            raise ValidationError("Email and password required")

        user = self.db.query(User).filter(
            User.email == email.strip().lower(),
            User.is_active == True  # noqa: E712
        ).first()

        if not user or not verify_password(password, user.password_hash):
            logger.info(f"Failed login for {email!r}")
            raise AuthError(INVALID_CREDENTIALS)

        user.last_login = get_lagos_now()
        self.db.commit()

        return user

    def create_token(self, user: User) -> str:
        token_data = TokenData(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
        )
        return create_access_token(token_data.to_dict())

    def register(self, data: RegisterRequest) -> User:
        """Create a new user (admin only)."""
        if not data.name or not data.email or not data.password:
            raise ValidationError("name, email, password required")

        email = data.email.strip().lower()
        if self.db.query(User).filter(User.email == email).first():
            raise ConflictError("Email already exists")

        user = User(
            name=data.name,
            email=email,
            phone=data.phone or "",
            password_hash=get_password_hash(data.password),
            role=(data.role or UserRole.STAFF).value,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Email already exists")

        logger.info(f"User registered: {user.email} ({user.role})")
        return user

    def get_user(self, user_id: str) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError("User not found")
        return user

    def update_profile(self, user_id: str, data: ProfileUpdate) -> User:
        """Self-service update of name and phone."""
        user = self.get_user(user_id)
        if data.name is not None:
            if not data.name.strip():
                raise ValidationError("name cannot be empty")
            user.name = data.name
        if data.phone is not None:
            user.phone = data.phone
        self.db.commit()
        return user

    def change_password(
        self,
        user_id: str,
        current_password: str,
        new_password: str
    ) -> Tuple[bool, str]:
        """Change user password."""
        user = self.get_user(user_id)

        if not verify_password(current_password, user.password_hash):
            return False, "Current password incorrect"

        user.password_hash = get_password_hash(new_password)
        self.db.commit()
        logger.info(f"Password changed for user {user.id}")
        return True, "Password changed"
