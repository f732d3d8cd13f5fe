"""Declarative per-field form validation.

A :class:`FormValidator` keeps the current values of one form together with
per-field touched flags and error messages. Fields are checked against a map of
:class:`ValidationRule` objects either one at a time (real-time validation of
touched fields) or all at once (on submit).

The validator never raises for invalid input: every outcome is a message in
the error map, and an empty string means "no error".
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Pattern, Union

from ..core.exceptions import ValidationError

CustomCheck = Callable[[Any, Mapping[str, Any]], Optional[str]]


@dataclass(frozen=True)
class ValidationRule:
    required: bool = False
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[Union[str, Pattern[str]]] = None
    custom: Optional[CustomCheck] = None
    # Run ``custom`` even when the value is empty (cross-field requirements).
    custom_on_empty: bool = False


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: dict[str, str]


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return not value


class FormValidator:
    def __init__(
        self,
        initial_values: Mapping[str, Any],
        rules: Mapping[str, ValidationRule],
        *,
        display_names: Optional[Mapping[str, str]] = None,
    ):
        self._initial = dict(initial_values)
        self._rules = dict(rules)
        self._display_names = dict(display_names or {})
        self._values: dict[str, Any] = dict(initial_values)
        self._errors: dict[str, str] = {}
        self._touched: dict[str, bool] = {}

    @property
    def values(self) -> dict[str, Any]:
        return dict(self._values)

    @property
    def errors(self) -> dict[str, str]:
        return dict(self._errors)

    @property
    def touched(self) -> dict[str, bool]:
        return dict(self._touched)

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def has_errors(self) -> bool:
        return any(self._errors.values())

    def label(self, field: str) -> str:
        return self._display_names.get(field, field)

    def validate_field(self, field: str, value: Any, all_values: Optional[Mapping[str, Any]] = None) -> str:
        rule = self._rules.get(field)
        if rule is None:
            return ""

        if all_values is None:
            all_values = {**self._values, field: value}

        name = self.label(field)
        empty = is_empty(value)

        if rule.required and empty:
            return f"{name} is required"

        if empty:
            if rule.custom and rule.custom_on_empty:
                return rule.custom(value, all_values) or ""
            return ""

        text_checks = rule.min_length is not None or rule.max_length is not None or rule.pattern is not None
        if text_checks and not isinstance(value, str):
            return f"{name} must be text"

        if isinstance(value, str):
            if rule.min_length is not None and len(value) < rule.min_length:
                return f"{name} must be at least {rule.min_length} characters"
            if rule.max_length is not None and len(value) > rule.max_length:
                return f"{name} must be at most {rule.max_length} characters"
            if rule.pattern is not None and not re.search(rule.pattern, value):
                return f"{name} has an invalid format"

        if rule.custom:
            return rule.custom(value, all_values) or ""

        return ""

    def validate_all(self) -> ValidationResult:
        errors: dict[str, str] = {}
        for field in self._rules:
            message = self.validate_field(field, self._values.get(field), self._values)
            if message:
                errors[field] = message

        self._errors = errors
        return ValidationResult(is_valid=not errors, errors=dict(errors))

    def set_value(self, field: str, value: Any) -> None:
        self._values[field] = value
        if self._touched.get(field):
            self._record(field, self.validate_field(field, value))

    def set_values(self, values: Mapping[str, Any]) -> None:
        """Bulk update without validation (e.g. loading a record into the form)."""
        self._values.update(values)

    def set_field_touched(self, field: str, touched: bool = True) -> None:
        self._touched[field] = touched
        if touched:
            self._record(field, self.validate_field(field, self._values.get(field)))

    def reset_form(self) -> None:
        self._values = dict(self._initial)
        self._errors = {}
        self._touched = {}

    def _record(self, field: str, message: str) -> None:
        if message:
            self._errors[field] = message
        else:
            self._errors.pop(field, None)


def check_payload(
    rules: Mapping[str, ValidationRule],
    payload: Mapping[str, Any],
    *,
    display_names: Optional[Mapping[str, str]] = None,
) -> None:
    """Server-side use of the same rules: raise ValidationError on any violation."""

    result = FormValidator(payload, rules, display_names=display_names).validate_all()
    if not result.is_valid:
        raise ValidationError("; ".join(result.errors.values()), details=result.errors)
