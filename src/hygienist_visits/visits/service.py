from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import month_bounds, parse_hhmm, parse_iso_date
from ..common.payload import pick
from ..common.validators import require_year, require_year_month
from ..core.enums import VisitStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..hygienists.repository import HygienistRepository
from ..patients.repository import PatientRepository
from ..validation.engine import check_payload
from ..validation.rules import FIELD_DISPLAY_NAMES, VISIT_RECORD_RULES
from .model import VisitRecord
from .repository import VisitRecordRepository
from .status import StatusChange, transition

logger = logging.getLogger(__name__)

VISIT_FIELDS = (
    "patient_id",
    "hygienist_id",
    "visit_date",
    "start_time",
    "end_time",
    "status",
    "cancellation_reason",
    "notes",
)


@dataclass(frozen=True)
class CompletedVisitCount:
    entity_id: int
    name: str
    visit_count: int

    def to_dict(self, id_key: str, name_key: str) -> dict:
        return {id_key: self.entity_id, name_key: self.name, "visit_count": self.visit_count}


@dataclass(frozen=True)
class MonthlyOverview:
    year: int
    month: int
    total_completed: int
    patient_stats: list[CompletedVisitCount] = field(default_factory=list)
    hygienist_stats: list[CompletedVisitCount] = field(default_factory=list)
    visit_records: list[VisitRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "total_visits": self.total_completed,
            "patient_stats": [s.to_dict("patient_id", "patient_name") for s in self.patient_stats],
            "hygienist_stats": [s.to_dict("hygienist_id", "hygienist_name") for s in self.hygienist_stats],
            "visit_records": [r.to_dict() for r in self.visit_records],
        }


def _normalize_time(value: Optional[str]) -> Optional[str]:
    t = parse_hhmm(value) if value else None
    return t.strftime("%H:%M") if t else None


def _as_date(value) -> date:
    return value if isinstance(value, date) else parse_iso_date(str(value))


class VisitRecordService:
    """Use case: record visits and move them through their status lifecycle."""

    def __init__(
        self,
        visits: VisitRecordRepository,
        patients: PatientRepository,
        hygienists: HygienistRepository,
    ):
        self._visits = visits
        self._patients = patients
        self._hygienists = hygienists

    # ---- queries ----

    def list(
        self,
        *,
        year: Optional[int] = None,
        month: Optional[int] = None,
        visit_date: Optional[date] = None,
        patient_id: Optional[int] = None,
        hygienist_id: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Sequence[VisitRecord]:
        start = end = None
        if visit_date is not None:
            start = end = visit_date
        elif year is not None and month is not None:
            start, end = month_bounds(*require_year_month(year, month))
        elif year is not None:
            y = require_year(year)
            start, end = date(y, 1, 1), date(y, 12, 31)
        elif month is not None:
            raise ValidationError("Year is required when month is given", code="INVALID_PARAMETERS")

        return self._visits.list(
            start=start,
            end=end,
            patient_id=patient_id,
            hygienist_id=hygienist_id,
            limit=limit,
        )

    def list_for_day(self, visit_date: date) -> Sequence[VisitRecord]:
        return self._visits.list(start=visit_date, end=visit_date)

    def calendar(self, year: int, month: int) -> dict[str, list[VisitRecord]]:
        """Records of one month grouped by ISO day, days in ascending order."""
        days: dict[str, list[VisitRecord]] = {}
        for record in self.list(year=year, month=month):
            days.setdefault(record.visit_date.isoformat(), []).append(record)
        return days

    def get(self, record_id: int) -> VisitRecord:
        record = self._visits.get_by_id(int(record_id))
        if not record:
            raise NotFoundError("Visit record not found", code="VISIT_RECORD_NOT_FOUND")
        return record

    # ---- commands ----

    def create(self, payload: Mapping[str, Any]) -> VisitRecord:
        data = pick(payload, VISIT_FIELDS)
        if not data.get("status"):
            data["status"] = VisitStatus.SCHEDULED.value

        check_payload(VISIT_RECORD_RULES, data, display_names=FIELD_DISPLAY_NAMES)
        self._ensure_references(data["patient_id"], data["hygienist_id"])
        change = transition(None, data["status"], data.get("cancellation_reason"))

        record = self._visits.create(
            patient_id=int(data["patient_id"]),
            hygienist_id=int(data["hygienist_id"]),
            visit_date=_as_date(data["visit_date"]),
            start_time=_normalize_time(data.get("start_time")),
            end_time=_normalize_time(data.get("end_time")),
            status=change.status,
            cancellation_reason=change.cancellation_reason,
            notes=data.get("notes"),
        )
        logger.info("visit record %s created (%s)", record.id, record.status.value)
        return record

    def update(self, record_id: int, changes: Mapping[str, Any]) -> VisitRecord:
        current = self.get(record_id)
        data = pick(changes, VISIT_FIELDS)

        merged = {
            "patient_id": current.patient_id,
            "hygienist_id": current.hygienist_id,
            "visit_date": current.visit_date,
            "start_time": current.start_time,
            "end_time": current.end_time,
            "status": current.status.value,
            "cancellation_reason": current.cancellation_reason,
            "notes": current.notes,
        }
        merged.update(data)
        if merged["status"] is None:
            merged["status"] = current.status.value

        check_payload(VISIT_RECORD_RULES, merged, display_names=FIELD_DISPLAY_NAMES)
        self._ensure_references(merged["patient_id"], merged["hygienist_id"])
        change = transition(current.status, merged["status"], merged.get("cancellation_reason"))

        return self._apply(
            current,
            change,
            patient_id=int(merged["patient_id"]),
            hygienist_id=int(merged["hygienist_id"]),
            visit_date=_as_date(merged["visit_date"]),
            start_time=_normalize_time(merged.get("start_time")),
            end_time=_normalize_time(merged.get("end_time")),
            notes=merged.get("notes"),
        )

    def change_status(self, record_id: int, status, cancellation_reason: Optional[str] = None) -> VisitRecord:
        current = self.get(record_id)
        change = transition(current.status, status, cancellation_reason)
        return self._apply(current, change)

    def delete(self, record_id: int) -> None:
        record = self.get(record_id)
        self._visits.delete(record.id)
        logger.info("visit record %s deleted", record.id)

    def monthly_overview(self, year: int, month: int) -> MonthlyOverview:
        """Completed visits of a month counted per patient and per hygienist."""

        y, m = require_year_month(year, month)
        records = list(self.list(year=y, month=m))
        completed = [r for r in records if r.status == VisitStatus.COMPLETED]

        per_patient: dict[int, int] = {}
        per_hygienist: dict[int, int] = {}
        for r in completed:
            per_patient[r.patient_id] = per_patient.get(r.patient_id, 0) + 1
            per_hygienist[r.hygienist_id] = per_hygienist.get(r.hygienist_id, 0) + 1

        def patient_name(pid: int) -> str:
            p = self._patients.get_by_id(pid)
            return p.name if p else ""

        def hygienist_name(hid: int) -> str:
            h = self._hygienists.get_by_id(hid)
            return h.name if h else ""

        return MonthlyOverview(
            year=y,
            month=m,
            total_completed=len(completed),
            patient_stats=[CompletedVisitCount(pid, patient_name(pid), n) for pid, n in per_patient.items()],
            hygienist_stats=[CompletedVisitCount(hid, hygienist_name(hid), n) for hid, n in per_hygienist.items()],
            visit_records=records,
        )

    # ---- helpers ----

    def _ensure_references(self, patient_id, hygienist_id) -> None:
        if not self._patients.get_by_id(int(patient_id)):
            raise NotFoundError("Patient not found", code="PATIENT_NOT_FOUND")
        if not self._hygienists.get_by_id(int(hygienist_id)):
            raise NotFoundError("Hygienist not found", code="HYGIENIST_NOT_FOUND")

    def _apply(self, current: VisitRecord, change: StatusChange, **fields) -> VisitRecord:
        updated = self._visits.update(
            current.id,
            changes={
                **fields,
                "status": change.status,
                "cancellation_reason": change.cancellation_reason,
            },
        )
        if not updated:
            raise NotFoundError("Visit record not found", code="VISIT_RECORD_NOT_FOUND")
        if change.changed:
            logger.info(
                "visit record %s: %s -> %s",
                current.id,
                change.previous.value if change.previous else None,
                change.status.value,
            )
        return updated
