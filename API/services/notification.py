"""
Notification service: the dashboard alerts feed.
"""

from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError
from database.models import Notification, NotificationType


FEED_LIMIT = 50


class NotificationService:
    def __init__(self, db: Session):
        self.db = db

    def _visible_to(self, user_id: str):
        return or_(Notification.user_id == user_id, Notification.user_id.is_(None))

    def list_for_user(self, user_id: str) -> List[Notification]:
        """Latest notifications addressed to the user or broadcast."""
        return (
            self.db.query(Notification)
            .filter(self._visible_to(user_id))
            .order_by(Notification.created_at.desc())
            .limit(FEED_LIMIT)
            .all()
        )

    def mark_read(self, notification_id: str) -> None:
        notification = self.db.query(Notification).filter(
            Notification.id == notification_id
        ).first()
        if not notification:
            raise NotFoundError("Notification not found")
        notification.is_read = True
        self.db.commit()

    def mark_all_read(self, user_id: str) -> int:
        updated = (
            self.db.query(Notification)
            .filter(self._visible_to(user_id), Notification.is_read == False)  # noqa: E712
            .update({"is_read": True}, synchronize_session=False)
        )
        self.db.commit()
        return updated

    def add(
        self,
        type: NotificationType,
        title: str,
        message: str = None,
        tenant_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> Notification:
        """Queue a notification on the session. The caller commits."""
        notification = Notification(
            type=type.value,
            title=title,
            message=message,
            tenant_id=tenant_id,
            user_id=user_id,
            is_read=False,
        )
        self.db.add(notification)
        return notification
