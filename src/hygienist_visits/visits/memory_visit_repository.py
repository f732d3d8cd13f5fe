from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.enums import VisitStatus
from ..database.memory_store import InMemoryStore, store_cursor
from .model import VisitRecord
from .repository import VisitRecordRepository


def _sort_key(record: VisitRecord):
    return (record.visit_date, record.start_time or "", record.id)


class MemoryVisitRecordRepository(VisitRecordRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    def list(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        patient_id: Optional[int] = None,
        hygienist_id: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Sequence[VisitRecord]:
        with store_cursor(self._store) as tables:
            rows = list(tables.visit_records.values())

        if start is not None:
            rows = [r for r in rows if r.visit_date >= start]
        if end is not None:
            rows = [r for r in rows if r.visit_date <= end]
        if patient_id is not None:
            rows = [r for r in rows if r.patient_id == int(patient_id)]
        if hygienist_id is not None:
            rows = [r for r in rows if r.hygienist_id == int(hygienist_id)]

        rows.sort(key=_sort_key)
        if limit is not None:
            rows = rows[: int(limit)]
        return rows

    def get_by_id(self, record_id: int) -> Optional[VisitRecord]:
        with store_cursor(self._store) as tables:
            return tables.visit_records.get(int(record_id))

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
        now = now_local()
        with store_cursor(self._store) as tables:
            rid = tables.next_id("visit_records")
            record = VisitRecord(
                id=rid,
                patient_id=int(patient_id),
                hygienist_id=int(hygienist_id),
                visit_date=visit_date,
                start_time=start_time,
                end_time=end_time,
                status=status,
                cancellation_reason=cancellation_reason,
                notes=notes,
                created_at=now,
                updated_at=now,
            )
            tables.visit_records[rid] = record
            return record

    def update(self, record_id: int, *, changes: dict) -> Optional[VisitRecord]:
        with store_cursor(self._store) as tables:
            current = tables.visit_records.get(int(record_id))
            if not current:
                return None
            updated = replace(current, **changes, updated_at=now_local())
            tables.visit_records[current.id] = updated
            return updated

    def delete(self, record_id: int) -> bool:
        with store_cursor(self._store) as tables:
            return tables.visit_records.pop(int(record_id), None) is not None

    def count_references(self, *, patient_id: Optional[int] = None, hygienist_id: Optional[int] = None) -> int:
        with store_cursor(self._store) as tables:
            rows = list(tables.visit_records.values())
        count = 0
        for r in rows:
            if patient_id is not None and r.patient_id == int(patient_id):
                count += 1
            elif hygienist_id is not None and r.hygienist_id == int(hygienist_id):
                count += 1
        return count
