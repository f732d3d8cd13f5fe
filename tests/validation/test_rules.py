from __future__ import annotations

import pytest

from hygienist_visits.validation.rules import (
    HYGIENIST_RULES,
    PATIENT_RULES,
    VISIT_RECORD_RULES,
    form_for,
    validate_date_range,
    validate_time_range,
)


def _visit(**overrides):
    values = {
        "patient_id": 1,
        "hygienist_id": 1,
        "visit_date": "2024-01-15",
        "start_time": "09:00",
        "end_time": "10:00",
        "status": "scheduled",
        "cancellation_reason": "",
        "notes": "",
    }
    values.update(overrides)
    return values


def test_cancelled_without_reason_is_rejected():
    form = form_for(VISIT_RECORD_RULES, _visit(status="cancelled", cancellation_reason=""))
    result = form.validate_all()
    assert result.errors == {"cancellation_reason": "Cancellation reason is required when a visit is cancelled"}


def test_cancelled_with_reason_is_accepted():
    form = form_for(VISIT_RECORD_RULES, _visit(status="cancelled", cancellation_reason="x"))
    assert form.validate_all().is_valid is True


def test_completed_without_reason_is_accepted():
    form = form_for(VISIT_RECORD_RULES, _visit(status="completed", cancellation_reason=""))
    assert form.validate_all().is_valid is True


def test_unknown_status_is_rejected():
    form = form_for(VISIT_RECORD_RULES, _visit(status="postponed"))
    assert "status" in form.validate_all().errors


def test_end_time_must_follow_start_time():
    form = form_for(VISIT_RECORD_RULES, _visit(start_time="10:00", end_time="09:00"))
    assert form.validate_all().errors == {"end_time": "End time must be after start time"}


def test_unselected_patient_is_rejected():
    form = form_for(VISIT_RECORD_RULES, _visit(patient_id="0"))
    assert form.validate_all().errors == {"patient_id": "Select a patient"}


def test_invalid_visit_date_is_rejected():
    form = form_for(VISIT_RECORD_RULES, _visit(visit_date="2024-02-30"))
    assert "visit_date" in form.validate_all().errors


@pytest.mark.parametrize(
    "start, end, expected",
    [
        ("09:00", "10:00", None),
        ("10:00", "09:00", "End time must be after start time"),
        ("09:00", "09:00", "End time must be after start time"),
        ("9am", "10:00", "Time must be in HH:MM format"),
        ("09:00", "24:00", "Time must be in HH:MM format"),
        ("", "10:00", None),
    ],
)
def test_validate_time_range(start, end, expected):
    assert validate_time_range(start, end) == expected


def test_validate_date_range():
    assert validate_date_range("2024-01-01", "2024-01-01") is None
    assert validate_date_range("2024-01-02", "2024-01-01") == "End date must be on or after start date"
    assert validate_date_range("bad", "2024-01-01") == "Enter a valid date (YYYY-MM-DD)"


def test_patient_rules_check_code_characters_and_email():
    form = form_for(
        PATIENT_RULES,
        {"name": "Taro", "patient_code": "P 001", "email": "nope", "phone": "", "address": ""},
    )
    errors = form.validate_all().errors
    assert set(errors) == {"patient_code", "email"}


def test_hygienist_rules_require_name_and_staff_code():
    form = form_for(HYGIENIST_RULES, {"name": "", "staff_code": "", "license_number": "", "phone": "", "email": ""})
    errors = form.validate_all().errors
    assert errors == {"name": "Name is required", "staff_code": "Staff code is required"}
