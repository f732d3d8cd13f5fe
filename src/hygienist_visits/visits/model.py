from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import VisitStatus


@dataclass(frozen=True)
class VisitRecord:
    """Domain entity: one visit of a hygienist to a patient.

    Times are "HH:MM" strings; ``cancellation_reason`` is only kept while the
    record is cancelled.
    """

    id: int
    patient_id: int
    hygienist_id: int
    visit_date: date
    start_time: Optional[str]
    end_time: Optional[str]
    status: VisitStatus
    cancellation_reason: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        status = self.status.value if isinstance(self.status, VisitStatus) else self.status
        return {
            "id": self.id,
            "patient_id": self.patient_id,
            "hygienist_id": self.hygienist_id,
            "visit_date": self.visit_date.strftime("%Y-%m-%d"),
            "start_time": self.start_time,
            "end_time": self.end_time,
            "status": status,
            "cancellation_reason": self.cancellation_reason,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
