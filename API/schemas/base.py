"""
Shared response schemas and field coercion helpers.
"""

from decimal import Decimal
from pydantic import BaseModel


class SuccessResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    error: str


def blank_to_none(value):
    """'' (as sent by HTML forms) means "no value"."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def none_to_zero(value):
    if value is None or (isinstance(value, str) and not value.strip()):
        return Decimal("0")
    return value
