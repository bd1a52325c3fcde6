"""
Small shared helpers: money parsing/formatting and phone numbers.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Union

from database.base import get_lagos_now, get_lagos_today  # noqa: F401

_NON_NUMERIC = re.compile(r"[^0-9.]")
_NON_DIGIT = re.compile(r"\D")


def parse_amount(raw: str) -> Decimal:
    """
    Parse a spreadsheet money cell such as "₦150,000" or "150000.50".
    Everything except digits and '.' is stripped; unparsable values give 0.
    """
    cleaned = _NON_NUMERIC.sub("", raw or "")
    if not cleaned:
        return Decimal("0")
    # "1.200.000" style cells: keep the leading numeric prefix
    match = re.match(r"\d*\.?\d*", cleaned)
    try:
        return Decimal(match.group(0)) if match and match.group(0) not in ("", ".") else Decimal("0")
    except InvalidOperation:
        return Decimal("0")


def format_amount(value: Union[Decimal, float, int]) -> str:
    """Thousands separators, at most 2 decimals: 150000 -> '150,000', 1250.5 -> '1,250.5'."""
    amount = Decimal(str(value)).quantize(Decimal("0.01"))
    text = f"{amount:,.2f}"
    if text.endswith(".00"):
        return text[:-3]
    if text.endswith("0"):
        return text[:-1]
    return text


def to_international_phone(phone: str, country_code: str = "234") -> str:
    """Digits only; a leading local trunk '0' is replaced by the country code."""
    digits = _NON_DIGIT.sub("", phone or "")
    if digits.startswith("0"):
        return country_code + digits[1:]
    return digits
