from __future__ import annotations

import re
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import minutes_between, parse_iso_date
from ..core.enums import VisitStatus
from .engine import FormValidator, ValidationRule

VALIDATION_PATTERNS = {
    "email": re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$"),
    "phone": re.compile(r"^[\d\-()+\s]+$"),
    "code": re.compile(r"^[A-Za-z0-9\-_]+$"),
    "time": re.compile(r"^([01][0-9]|2[0-3]):[0-5][0-9]$"),
}

FIELD_DISPLAY_NAMES = {
    "name": "Name",
    "patient_code": "Patient code",
    "staff_code": "Staff code",
    "phone": "Phone number",
    "email": "Email address",
    "address": "Address",
    "license_number": "License number",
    "patient_id": "Patient",
    "hygienist_id": "Hygienist",
    "visit_date": "Visit date",
    "start_time": "Start time",
    "end_time": "End time",
    "status": "Status",
    "cancellation_reason": "Cancellation reason",
    "notes": "Notes",
}


def _code_chars(label: str):
    def check(value: Any, _values: Mapping[str, Any]) -> Optional[str]:
        if not VALIDATION_PATTERNS["code"].match(str(value)):
            return f"{label} may contain only letters, digits, hyphens and underscores"
        return None

    return check


def _selected(message: str):
    def check(value: Any, _values: Mapping[str, Any]) -> Optional[str]:
        try:
            ok = int(value) > 0
        except (TypeError, ValueError):
            ok = False
        return None if ok else message

    return check


def _valid_date(value: Any, _values: Mapping[str, Any]) -> Optional[str]:
    if isinstance(value, date):
        return None
    try:
        parse_iso_date(str(value))
    except ValueError:
        return "Enter a valid visit date (YYYY-MM-DD)"
    return None


def _end_after_start(value: Any, values: Mapping[str, Any]) -> Optional[str]:
    start = values.get("start_time")
    if not start:
        return None
    return validate_time_range(start, value)


def _known_status(value: Any, _values: Mapping[str, Any]) -> Optional[str]:
    if value not in tuple(s.value for s in VisitStatus):
        return "Select a valid status"
    return None


def _reason_when_cancelled(value: Any, values: Mapping[str, Any]) -> Optional[str]:
    if values.get("status") == VisitStatus.CANCELLED and (not value or not str(value).strip()):
        return "Cancellation reason is required when a visit is cancelled"
    return None


PATIENT_RULES = {
    "name": ValidationRule(required=True, min_length=1, max_length=100),
    "patient_code": ValidationRule(
        required=True, min_length=1, max_length=50, custom=_code_chars("Patient code")
    ),
    "phone": ValidationRule(max_length=20, pattern=VALIDATION_PATTERNS["phone"]),
    "email": ValidationRule(max_length=100, pattern=VALIDATION_PATTERNS["email"]),
    "address": ValidationRule(max_length=500),
}

HYGIENIST_RULES = {
    "name": ValidationRule(required=True, min_length=1, max_length=100),
    "staff_code": ValidationRule(
        required=True, min_length=1, max_length=50, custom=_code_chars("Staff code")
    ),
    "license_number": ValidationRule(max_length=50),
    "phone": ValidationRule(max_length=20, pattern=VALIDATION_PATTERNS["phone"]),
    "email": ValidationRule(max_length=100, pattern=VALIDATION_PATTERNS["email"]),
}

VISIT_RECORD_RULES = {
    "patient_id": ValidationRule(required=True, custom=_selected("Select a patient")),
    "hygienist_id": ValidationRule(required=True, custom=_selected("Select a hygienist")),
    "visit_date": ValidationRule(required=True, custom=_valid_date),
    "start_time": ValidationRule(pattern=VALIDATION_PATTERNS["time"]),
    "end_time": ValidationRule(pattern=VALIDATION_PATTERNS["time"], custom=_end_after_start),
    "status": ValidationRule(required=True, custom=_known_status),
    "cancellation_reason": ValidationRule(
        max_length=500, custom=_reason_when_cancelled, custom_on_empty=True
    ),
    "notes": ValidationRule(max_length=1000),
}


def form_for(rules: Mapping[str, ValidationRule], initial_values: Mapping[str, Any]) -> FormValidator:
    return FormValidator(initial_values, rules, display_names=FIELD_DISPLAY_NAMES)


def validate_time_range(start_time: Optional[str], end_time: Optional[str]) -> Optional[str]:
    if not start_time or not end_time:
        return None

    pattern = VALIDATION_PATTERNS["time"]
    if not pattern.match(str(start_time)) or not pattern.match(str(end_time)):
        return "Time must be in HH:MM format"

    if minutes_between(start_time, end_time) is None:
        return "End time must be after start time"
    return None


def validate_date_range(start_date, end_date) -> Optional[str]:
    if not start_date or not end_date:
        return None

    try:
        start = start_date if isinstance(start_date, date) else parse_iso_date(str(start_date))
        end = end_date if isinstance(end_date, date) else parse_iso_date(str(end_date))
    except ValueError:
        return "Enter a valid date (YYYY-MM-DD)"

    if end < start:
        return "End date must be on or after start date"
    return None
