"""
Messaging router: message log and WhatsApp reminder links.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from core.dependencies import get_current_user, require_manager_or_admin
from core.security import TokenData
from schemas.message import MessageSend, BulkReminderRequest
from services.messaging import MessagingService


router = APIRouter()


@router.post("/send")
def send_message(
    data: MessageSend,
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Log the message and return a click-to-chat link for it."""
    return MessagingService(db).send(data, sent_by=current_user.id)


@router.get("")
def list_messages(
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return [m.to_dict() for m in MessagingService(db).list_messages()]


@router.post("/bulk-reminder")
def bulk_reminder(
    data: BulkReminderRequest,
    current_user: TokenData = Depends(require_manager_or_admin),
    db: Session = Depends(get_db)
):
    """
    Reminder links for every tenant with a phone number who still owes rent.
    Placeholders: {name}, {amount}, {property}.
    """
    return MessagingService(db).bulk_reminder(data.message_template, sent_by=current_user.id)
