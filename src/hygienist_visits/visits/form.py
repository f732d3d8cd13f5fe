"""Visit record form driven by explicit commands.

The controller is independent of any rendering layer: a UI (or a test) sends
command objects to :meth:`VisitRecordFormController.handle` and reads
:attr:`VisitRecordFormController.state` back. Field errors stay inline in the
form; failures of the service call go to the notification sink.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Union

from ..core.enums import Severity, VisitStatus
from ..core.exceptions import DomainError
from ..notifications.sink import NotificationSink, notify_error
from ..validation.engine import FormValidator
from ..validation.rules import VISIT_RECORD_RULES, form_for
from .model import VisitRecord
from .service import VisitRecordService

logger = logging.getLogger(__name__)

# Re-check these (when touched) after the key field changes.
DEPENDENT_FIELDS = {
    "status": ("cancellation_reason",),
    "start_time": ("end_time",),
}


@dataclass(frozen=True)
class OpenCreate:
    visit_date: date


@dataclass(frozen=True)
class OpenEdit:
    record_id: int


@dataclass(frozen=True)
class EditField:
    field: str
    value: Any


@dataclass(frozen=True)
class TouchField:
    field: str


@dataclass(frozen=True)
class Submit:
    pass


@dataclass(frozen=True)
class Close:
    pass


FormCommand = Union[OpenCreate, OpenEdit, EditField, TouchField, Submit, Close]


@dataclass(frozen=True)
class FormState:
    is_open: bool
    editing_id: Optional[int]
    values: dict
    errors: dict
    touched: dict
    refresh_counter: int


def blank_values(visit_date: Optional[date] = None) -> dict:
    return {
        "patient_id": "",
        "hygienist_id": "",
        "visit_date": visit_date.isoformat() if visit_date else "",
        "start_time": "",
        "end_time": "",
        "status": VisitStatus.SCHEDULED.value,
        "cancellation_reason": "",
        "notes": "",
    }


def record_values(record: VisitRecord) -> dict:
    return {
        "patient_id": record.patient_id,
        "hygienist_id": record.hygienist_id,
        "visit_date": record.visit_date.isoformat(),
        "start_time": record.start_time or "",
        "end_time": record.end_time or "",
        "status": record.status.value,
        "cancellation_reason": record.cancellation_reason or "",
        "notes": record.notes or "",
    }


class VisitRecordFormController:
    def __init__(self, service: VisitRecordService, sink: NotificationSink):
        self._service = service
        self._sink = sink
        self._form: FormValidator = form_for(VISIT_RECORD_RULES, blank_values())
        self._is_open = False
        self._editing_id: Optional[int] = None
        self._refresh_counter = 0

    @property
    def form(self) -> FormValidator:
        return self._form

    @property
    def refresh_counter(self) -> int:
        return self._refresh_counter

    @property
    def state(self) -> FormState:
        return FormState(
            is_open=self._is_open,
            editing_id=self._editing_id,
            values=self._form.values,
            errors=self._form.errors,
            touched=self._form.touched,
            refresh_counter=self._refresh_counter,
        )

    def handle(self, command: FormCommand) -> FormState:
        handlers = {
            OpenCreate: self._open_create,
            OpenEdit: self._open_edit,
            EditField: self._edit_field,
            TouchField: self._touch_field,
            Submit: self._submit,
            Close: self._close,
        }
        handler = handlers.get(type(command))
        if handler is None:
            raise TypeError(f"Unsupported form command: {command!r}")
        handler(command)
        return self.state

    def _open_create(self, command: OpenCreate) -> None:
        self._form = form_for(VISIT_RECORD_RULES, blank_values(command.visit_date))
        self._editing_id = None
        self._is_open = True

    def _open_edit(self, command: OpenEdit) -> None:
        try:
            record = self._service.get(command.record_id)
        except DomainError as e:
            notify_error(self._sink, e)
            return
        self._form = form_for(VISIT_RECORD_RULES, record_values(record))
        self._editing_id = record.id
        self._is_open = True

    def _edit_field(self, command: EditField) -> None:
        self._form.set_value(command.field, command.value)
        values = self._form.values
        for dependent in DEPENDENT_FIELDS.get(command.field, ()):
            self._form.set_value(dependent, values.get(dependent))

    def _touch_field(self, command: TouchField) -> None:
        self._form.set_field_touched(command.field)

    def _submit(self, _command: Submit) -> None:
        if not self._is_open:
            return

        result = self._form.validate_all()
        if not result.is_valid:
            return

        try:
            if self._editing_id is None:
                record = self._service.create(self._form.values)
                message = "Visit record created"
            else:
                record = self._service.update(self._editing_id, self._form.values)
                message = "Visit record updated"
        except DomainError as e:
            notify_error(self._sink, e)
            return

        logger.debug("form saved visit record %s", record.id)
        self._sink.notify(message, Severity.SUCCESS)
        self._refresh_counter += 1
        self._close(Close())

    def _close(self, _command: Close) -> None:
        self._form.reset_form()
        self._is_open = False
        self._editing_id = None
