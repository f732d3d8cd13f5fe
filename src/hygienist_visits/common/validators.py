from __future__ import annotations

from ..core.constants import MAX_REPORT_YEAR, MIN_REPORT_YEAR
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_positive_int(value, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number", code="INVALID_PARAMETERS")
    if number <= 0:
        raise ValidationError(f"{field_name} must be a positive number", code="INVALID_PARAMETERS")
    return number


def require_year(value) -> int:
    try:
        year = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Year must be a number", code="INVALID_PARAMETERS")
    if year < MIN_REPORT_YEAR or year > MAX_REPORT_YEAR:
        raise ValidationError(
            f"Year must be between {MIN_REPORT_YEAR} and {MAX_REPORT_YEAR}",
            code="INVALID_YEAR",
        )
    return year


def require_year_month(year, month) -> tuple[int, int]:
    y = require_year(year)
    try:
        m = int(month)
    except (TypeError, ValueError):
        raise ValidationError("Month must be a number", code="INVALID_PARAMETERS")
    if m < 1 or m > 12:
        raise ValidationError("Month must be between 1 and 12", code="INVALID_MONTH")
    return y, m
