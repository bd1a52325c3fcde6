"""
Bulk tenant import from a spreadsheet export (CSV with a header row).
"""

import csv
import io
import re
from typing import Dict, List, Optional

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import ValidationError
from database.models import Tenant
from services.tenant import TenantService
from utils.helpers import parse_amount


# Target field -> accepted header names, in priority order
HEADER_SYNONYMS = {
    "tenant_name": ("nameoftenant", "tenant", "name"),
    "accommodation_type": ("typeofaccommodation", "type", "accommodation"),
    "property_address": ("property", "address", "block"),
    "period": ("period",),
    "rent_per_annum": ("rentperannum", "rent"),
    "amount_paid": ("amountpaid", "paid"),
    "phone": ("phone", "mobile"),
    "email": ("email",),
    "notes": ("notes", "remarks"),
    "quit_notice": ("quitnotice", "quit"),
}

_HEADER_NOISE = re.compile(r"[\s_]")


def normalize_header(header: str) -> str:
    return _HEADER_NOISE.sub("", (header or "").lower())


def pick(row: Dict[str, str], field: str) -> str:
    """First non-empty cell among the field's synonyms, or ''."""
    for synonym in HEADER_SYNONYMS[field]:
        for header, value in row.items():
            if normalize_header(header) == synonym:
                if value:
                    return value
                break
    return ""


def read_rows(content: bytes) -> List[Dict[str, str]]:
    """Parse the upload into trimmed dict rows; blank lines are dropped."""
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise ValidationError("File must be UTF-8 encoded CSV")

    reader = csv.DictReader(io.StringIO(text))
    rows = []
    for raw in reader:
        row = {
            header.strip(): (value or "").strip()
            for header, value in raw.items()
            if isinstance(header, str) and isinstance(value, (str, type(None)))
        }
        if any(row.values()):
            rows.append(row)
    return rows


def row_to_tenant_fields(row: Dict[str, str]) -> Optional[dict]:
    """Column values for one row, or None when the row has no tenant name."""
    name = pick(row, "tenant_name")
    if not name:
        return None

    return {
        "tenant_name": name,
        "accommodation_type": pick(row, "accommodation_type"),
        "property_address": pick(row, "property_address"),
        "period": pick(row, "period"),
        "rent_per_annum": parse_amount(pick(row, "rent_per_annum")),
        "amount_paid": parse_amount(pick(row, "amount_paid")),
        "phone": pick(row, "phone"),
        "email": pick(row, "email"),
        "notes": pick(row, "notes"),
        "quit_notice": pick(row, "quit_notice").lower() == "yes",
    }


class TenantImportService:
    def __init__(self, db: Session):
        self.db = db

    def import_csv(self, content: bytes, created_by: Optional[str] = None) -> dict:
        """
        Insert one tenant per named row. A row that fails to insert is
        logged and skipped; rows before it stay committed.
        """
        ledger = TenantService(self.db)
        imported = []

        for row_no, row in enumerate(read_rows(content), start=1):
            fields = row_to_tenant_fields(row)
            if fields is None:
                continue

            try:
                tenant = Tenant(sn=ledger.next_sn(), created_by=created_by, **fields)
                self.db.add(tenant)
                self.db.commit()
                self.db.refresh(tenant)
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.warning(f"CSV import: row {row_no} skipped ({fields['tenant_name']!r}): {e}")
                continue

            imported.append(tenant)

        logger.info(f"CSV import: {len(imported)} tenants imported")
        return {
            "imported": len(imported),
            "tenants": [t.to_dict() for t in imported],
        }
