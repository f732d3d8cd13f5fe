from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import VisitStatus
from .model import VisitRecord


class VisitRecordRepository(Protocol):
    def list(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        patient_id: Optional[int] = None,
        hygienist_id: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Sequence[VisitRecord]:
        """Records inside [start, end], ordered by date, start time and id; all of them unless limit is given."""
        raise NotImplementedError

    def get_by_id(self, record_id: int) -> Optional[VisitRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        patient_id: int,
        hygienist_id: int,
        visit_date: date,
        start_time: Optional[str],
        end_time: Optional[str],
        status: VisitStatus,
        cancellation_reason: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> VisitRecord:
        raise NotImplementedError

    def update(self, record_id: int, *, changes: dict) -> Optional[VisitRecord]:
        raise NotImplementedError

    def delete(self, record_id: int) -> bool:
        raise NotImplementedError

    def count_references(self, *, patient_id: Optional[int] = None, hygienist_id: Optional[int] = None) -> int:
        raise NotImplementedError
