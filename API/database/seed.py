"""
Database seed: creates the primary admin on first run.
"""
from loguru import logger
from sqlalchemy.orm import Session

from .models import User, UserRole


def seed_primary_admin(session: Session, settings) -> None:
    """Create the primary admin account if no users exist yet."""
    from core.security import get_password_hash

    if session.query(User).first():
        logger.info("Users already exist, skipping admin seed")
        return

    session.add(User(
        id=settings.primary_admin_id,
        name=settings.admin_name,
        email=settings.admin_email.lower(),
        phone=settings.admin_phone,
        password_hash=get_password_hash(settings.admin_password),
        role=UserRole.ADMIN.value,
        is_active=True,
    ))
    session.commit()
    logger.info(f"Primary admin created (email={settings.admin_email})")
