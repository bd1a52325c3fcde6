"""
Messaging service.

Nothing is delivered from here: each message is written to the log and a
WhatsApp click-to-chat link is built for the operator to open.
"""

from typing import List, Optional
from urllib.parse import quote

from loguru import logger
from sqlalchemy.orm import Session

from core.config import settings
from database.models import MessageLog, MessageChannel, MessageStatus, Tenant
from schemas.message import MessageSend
from utils.helpers import format_amount, to_international_phone


LOG_LIMIT = 100

DEFAULT_REMINDER_TEMPLATE = (
    "Dear {name}, your outstanding rent balance is ₦{amount}. "
    "Please contact us. - EstateIQ"
)


def whatsapp_link(phone: str, message: str, country_code: str = None) -> str:
    """https://wa.me/<international digits>?text=<percent-encoded message>"""
    digits = to_international_phone(phone, country_code or settings.whatsapp_country_code)
    return f"https://wa.me/{digits}?text={quote(message or '', safe='')}"


def render_reminder(template: str, name: str, amount, property_address: str) -> str:
    """Substitute the first {name}, {amount} and {property} placeholder."""
    return (
        template
        .replace("{name}", name or "", 1)
        .replace("{amount}", format_amount(amount), 1)
        .replace("{property}", property_address or "", 1)
    )


class MessagingService:
    def __init__(self, db: Session):
        self.db = db

    def send(self, data: MessageSend, sent_by: Optional[str] = None) -> dict:
        entry = MessageLog(
            tenant_id=data.tenant_id,
            tenant_name=data.tenant_name or "",
            phone=data.phone or "",
            channel=(data.channel or MessageChannel.WHATSAPP).value,
            message=data.message or "",
            status=MessageStatus.SENT.value,
            sent_by=sent_by,
        )
        self.db.add(entry)
        self.db.commit()

        return {
            "success": True,
            "id": entry.id,
            "whatsapp_link": whatsapp_link(entry.phone, entry.message),
            "message": "Message logged. Use the WhatsApp link to send.",
        }

    def list_messages(self) -> List[MessageLog]:
        return (
            self.db.query(MessageLog)
            .order_by(MessageLog.created_at.desc())
            .limit(LOG_LIMIT)
            .all()
        )

    def bulk_reminder(self, template: Optional[str] = None, sent_by: Optional[str] = None) -> dict:
        """One reminder per tenant with a phone number and an outstanding balance."""
        template = template or DEFAULT_REMINDER_TEMPLATE

        tenants = (
            self.db.query(Tenant)
            .filter(
                Tenant.amount_paid < Tenant.rent_per_annum,
                Tenant.phone.isnot(None),
                Tenant.phone != "",
            )
            .order_by(Tenant.sn.asc())
            .all()
        )

        links = []
        for t in tenants:
            owed = t.amount_owed
            text = render_reminder(template, t.tenant_name, owed, t.property_address)

            self.db.add(MessageLog(
                tenant_id=t.id,
                tenant_name=t.tenant_name,
                phone=t.phone,
                channel=MessageChannel.WHATSAPP.value,
                message=text,
                status=MessageStatus.SENT.value,
                sent_by=sent_by,
            ))
            links.append({
                "tenant": t.tenant_name,
                "phone": t.phone,
                "link": whatsapp_link(t.phone, text),
                "amount_owed": float(owed),
            })

        self.db.commit()
        logger.info(f"Bulk reminder: {len(links)} messages logged")
        return {"sent": len(links), "links": links}
