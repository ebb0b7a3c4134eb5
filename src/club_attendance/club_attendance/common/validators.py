from __future__ import annotations

from datetime import date

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def require_iso_date(value: str | date, field_name: str) -> date:
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value).strip())
    except ValueError:
        raise ValidationError(f"Invalid {field_name} format. Use YYYY-MM-DD") from None


def require_date_range(start: date, end: date) -> None:
    if start > end:
        raise ValidationError("startDate cannot be greater than endDate.")


def require_positive_id(value: int | str, field_name: str) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        parsed = 0
    if parsed <= 0:
        raise ValidationError(f"{field_name} must be a positive integer")
    return parsed
