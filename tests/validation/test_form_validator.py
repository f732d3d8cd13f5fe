from __future__ import annotations

import pytest

from hygienist_visits.validation.engine import FormValidator, ValidationRule, check_payload
from hygienist_visits.core.exceptions import ValidationError


RULES = {
    "name": ValidationRule(required=True, min_length=3, max_length=10),
    "code": ValidationRule(required=True, pattern=r"^[A-Z]+$"),
    "note": ValidationRule(max_length=5),
}

INITIAL = {"name": "", "code": "", "note": ""}


def test_validate_all_on_blank_form_reports_each_required_field_once():
    form = FormValidator(INITIAL, RULES)

    result = form.validate_all()

    assert result.is_valid is False
    assert set(result.errors) == {"name", "code"}
    assert form.is_valid is False
    assert form.has_errors is True


@pytest.mark.parametrize("value, has_error", [("ab", True), ("abc", False)])
def test_min_length_boundary(value, has_error):
    form = FormValidator(INITIAL, RULES)
    assert bool(form.validate_field("name", value)) is has_error


def test_max_length_and_pattern_messages():
    form = FormValidator(INITIAL, RULES, display_names={"name": "Name", "code": "Code"})

    assert form.validate_field("name", "x" * 11) == "Name must be at most 10 characters"
    assert form.validate_field("code", "abc") == "Code has an invalid format"
    assert form.validate_field("code", "ABC") == ""


def test_whitespace_only_counts_as_empty_for_required():
    form = FormValidator(INITIAL, RULES, display_names={"name": "Name"})
    assert form.validate_field("name", "   ") == "Name is required"


def test_optional_empty_value_skips_other_checks():
    calls = []

    def custom(value, values):
        calls.append(value)
        return "never"

    form = FormValidator({"x": ""}, {"x": ValidationRule(min_length=4, custom=custom)})

    assert form.validate_field("x", "") == ""
    assert calls == []


def test_custom_on_empty_runs_with_all_values():
    def needs_other(value, values):
        return "needed" if values.get("flag") and not value else None

    rules = {"x": ValidationRule(custom=needs_other, custom_on_empty=True)}
    form = FormValidator({"x": "", "flag": True}, rules)

    assert form.validate_field("x", "") == "needed"
    assert form.validate_field("x", "", {"flag": False}) == ""


def test_set_value_only_revalidates_touched_fields():
    form = FormValidator(INITIAL, RULES)

    form.set_value("name", "a")
    assert form.errors == {}

    form.set_field_touched("name")
    assert "name" in form.errors

    form.set_value("name", "abcd")
    assert form.errors == {}
    assert form.is_valid is True


def test_reset_form_restores_initial_values_and_clears_state():
    form = FormValidator(INITIAL, RULES)
    form.set_value("name", "abcd")
    form.set_field_touched("name")
    form.validate_all()

    form.reset_form()

    assert form.values == INITIAL
    assert form.errors == {}
    assert form.touched == {}


def test_values_property_is_a_copy():
    form = FormValidator(INITIAL, RULES)
    form.values["name"] = "changed"
    assert form.values["name"] == ""


def test_check_payload_raises_with_field_map():
    with pytest.raises(ValidationError) as ei:
        check_payload(RULES, {"name": "ab", "code": "ABC"})

    assert ei.value.code == "VALIDATION_ERROR"
    assert set(ei.value.details) == {"name"}


@pytest.mark.parametrize("value", [12345, ["abc"], {"a": 1}])
def test_text_rules_reject_non_string_values(value):
    form = FormValidator(INITIAL, RULES)
    assert form.validate_field("name", value) == "name must be text"
    assert form.validate_field("code", value) == "code must be text"


def test_rules_without_text_checks_accept_other_types():
    rules = {"count": ValidationRule(required=True, custom=lambda v, _: None if v > 0 else "count must be positive")}
    form = FormValidator({"count": 0}, rules)
    assert form.validate_field("count", 3) == ""
    assert form.validate_field("count", -1) == "count must be positive"
