from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional


def _display(value: float) -> float:
    return round(float(value), 2)


@dataclass(frozen=True)
class ReportSubject:
    """The patient or hygienist a report is about."""

    kind: str  # "patient" | "hygienist"
    id: int
    code: str
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None


@dataclass(frozen=True)
class VisitDetail:
    id: int
    visit_date: date
    start_time: Optional[str]
    end_time: Optional[str]
    status: str
    duration_minutes: Optional[int]
    patient_id: int
    patient_code: str
    patient_name: str
    hygienist_id: int
    staff_code: str
    hygienist_name: str
    cancellation_reason: Optional[str] = None
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "visit_date": self.visit_date.strftime("%Y-%m-%d"),
            "start_time": self.start_time,
            "end_time": self.end_time,
            "status": self.status,
            "duration": self.duration_minutes,
            "patient_id": self.patient_id,
            "patient_code": self.patient_code,
            "patient_name": self.patient_name,
            "hygienist_id": self.hygienist_id,
            "staff_code": self.staff_code,
            "hygienist_name": self.hygienist_name,
            "cancellation_reason": self.cancellation_reason,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class MonthlyStats:
    subject: ReportSubject
    year: int
    month: int
    total_visits: int
    completed_visits: int
    cancelled_visits: int
    scheduled_visits: int
    total_hours: float
    average_visit_duration: float
    visit_details: list[VisitDetail] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)

    @property
    def completion_rate(self) -> int:
        if not self.total_visits:
            return 0
        return round(self.completed_visits / self.total_visits * 100)

    def to_dict(self) -> dict:
        kind = self.subject.kind
        data = {
            f"{kind}_id": self.subject.id,
            f"{kind}_name": self.subject.name,
            "code": self.subject.code,
            "year": self.year,
            "month": self.month,
            "total_visits": self.total_visits,
            "completed_visits": self.completed_visits,
            "cancelled_visits": self.cancelled_visits,
            "scheduled_visits": self.scheduled_visits,
            "total_hours": _display(self.total_hours),
            "average_visit_duration": _display(self.average_visit_duration),
            "visit_details": [d.to_dict() for d in self.visit_details],
            "issues": list(self.issues),
        }
        if kind == "patient":
            data.update(
                {
                    "phone": self.subject.phone,
                    "email": self.subject.email,
                    "address": self.subject.address,
                    "completion_rate": self.completion_rate,
                }
            )
        return data


@dataclass(frozen=True)
class ComparisonReport:
    kind: str
    year: int
    month: int
    entries: list[MonthlyStats]
    total_entities: int
    average_visits_per_entity: float

    def to_dict(self) -> dict:
        plural = f"{self.kind}s"
        return {
            "year": self.year,
            "month": self.month,
            plural: [e.to_dict() for e in self.entries],
            f"total_{plural}": self.total_entities,
            f"average_visits_per_{self.kind}": _display(self.average_visits_per_entity),
        }
