"""
Maintenance ticket service.
"""

from typing import List, Optional

from loguru import logger
from sqlalchemy import case
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError, ValidationError
from database.models import (
    Maintenance, MaintenanceCategory, MaintenancePriority, MaintenanceStatus,
    NotificationType, Tenant, User, PRIORITY_ORDER,
)
from schemas.maintenance import MaintenanceCreate, MaintenanceUpdate
from services.notification import NotificationService
from utils.helpers import get_lagos_now


class MaintenanceService:
    def __init__(self, db: Session):
        self.db = db

    def _get(self, ticket_id: str) -> Maintenance:
        ticket = self.db.query(Maintenance).filter(Maintenance.id == ticket_id).first()
        if not ticket:
            raise NotFoundError("Not found")
        return ticket

    def list_requests(
        self,
        status: Optional[str] = None,
        priority: Optional[str] = None,
    ) -> List[dict]:
        """Most pressing first, newest first within a priority."""
        priority_rank = case(
            {value: rank for rank, value in enumerate(PRIORITY_ORDER)},
            value=Maintenance.priority,
            else_=len(PRIORITY_ORDER),
        )

        q = self.db.query(Maintenance, User.name).outerjoin(
            User, User.id == Maintenance.assigned_to
        )
        if status:
            q = q.filter(Maintenance.status == status)
        if priority:
            q = q.filter(Maintenance.priority == priority)

        rows = q.order_by(priority_rank, Maintenance.created_at.desc()).all()

        result = []
        for ticket, assigned_name in rows:
            data = ticket.to_dict()
            data["assigned_name"] = assigned_name
            result.append(data)
        return result

    def create_request(self, data: MaintenanceCreate) -> Maintenance:
        if not data.title or not data.title.strip():
            raise ValidationError("title required")

        tenant_name = data.tenant_name
        property_address = data.property_address
        if data.tenant_id:
            tenant = self.db.query(Tenant).filter(Tenant.id == data.tenant_id).first()
            if not tenant:
                raise NotFoundError("Tenant not found")
            tenant_name = tenant_name or tenant.tenant_name
            property_address = property_address or tenant.property_address

        ticket = Maintenance(
            tenant_id=data.tenant_id,
            tenant_name=tenant_name or "",
            property_address=property_address or "",
            category=(data.category or MaintenanceCategory.OTHER).value,
            title=data.title,
            description=data.description or "",
            priority=(data.priority or MaintenancePriority.MEDIUM).value,
            status=MaintenanceStatus.OPEN.value,
        )
        self.db.add(ticket)
        self.db.flush()

        NotificationService(self.db).add(
            NotificationType.MAINTENANCE,
            title=f"New maintenance request: {ticket.title}",
            message=f"{ticket.priority} priority, {ticket.property_address or 'no address'}",
            tenant_id=ticket.tenant_id,
        )
        self.db.commit()
        self.db.refresh(ticket)

        logger.info(f"Maintenance ticket opened: {ticket.id} ({ticket.priority})")
        return ticket

    def update_request(self, ticket_id: str, data: MaintenanceUpdate) -> Maintenance:
        ticket = self._get(ticket_id)
        fields = data.model_dump(exclude_unset=True)

        if fields.get("status") is not None:
            ticket.status = data.status.value
            ticket.resolved_at = (
                get_lagos_now() if data.status == MaintenanceStatus.RESOLVED else None
            )
        if "assigned_to" in fields:
            ticket.assigned_to = data.assigned_to
        if fields.get("priority") is not None:
            ticket.priority = data.priority.value

        self.db.commit()
        self.db.refresh(ticket)
        return ticket

    def delete_request(self, ticket_id: str) -> None:
        ticket = self._get(ticket_id)
        self.db.delete(ticket)
        self.db.commit()
