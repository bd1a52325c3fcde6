"""
User management service (admin screens).
"""

from typing import List
from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.config import settings
from core.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from database.models import User
from schemas.auth import UserUpdate


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def list_users(self) -> List[User]:
        return self.db.query(User).order_by(User.created_at).all()

    def update_user(self, user_id: str, data: UserUpdate) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError("User not found")

        update_data = data.model_dump(exclude_unset=True)

        if "email" in update_data and update_data["email"] is not None:
            email = update_data["email"].strip().lower()
            taken = self.db.query(User).filter(User.email == email, User.id != user_id).first()
            if taken:
                raise ConflictError("Email already exists")
            update_data["email"] = email

        if "name" in update_data and not (update_data["name"] or "").strip():
            raise ValidationError("name cannot be empty")

        if update_data.get("role") is not None:
            update_data["role"] = update_data["role"].value

        for key, value in update_data.items():
            if value is None and key in ("email", "role", "is_active"):
                continue
            setattr(user, key, value)

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Email already exists")
        return user

    def delete_user(self, user_id: str) -> None:
        """Hard delete. Tenants/payments keep the id informationally."""
        if user_id == settings.primary_admin_id:
            raise ForbiddenError("Cannot delete primary admin")

        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError("User not found")

        self.db.delete(user)
        self.db.commit()
        logger.info(f"User deleted: {user_id}")
