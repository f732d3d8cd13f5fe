from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..database.memory_store import InMemoryStore, store_cursor
from .model import Patient
from .repository import PatientRepository


class MemoryPatientRepository(PatientRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    def list_all(self, *, q: Optional[str] = None) -> Sequence[Patient]:
        with store_cursor(self._store) as tables:
            rows = sorted(tables.patients.values(), key=lambda p: p.id)
        if q:
            needle = q.strip().lower()
            rows = [
                p
                for p in rows
                if needle in p.name.lower()
                or needle in p.patient_code.lower()
                or needle in (p.phone or "")
                or needle in (p.email or "").lower()
            ]
        return rows

    def get_by_id(self, patient_id: int) -> Optional[Patient]:
        with store_cursor(self._store) as tables:
            return tables.patients.get(int(patient_id))

    def get_by_code(self, patient_code: str) -> Optional[Patient]:
        with store_cursor(self._store) as tables:
            for p in tables.patients.values():
                if p.patient_code == patient_code:
                    return p
        return None

    def create(
        self,
        *,
        patient_code: str,
        name: str,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        address: Optional[str] = None,
    ) -> Patient:
        now = now_local()
        with store_cursor(self._store) as tables:
            pid = tables.next_id("patients")
            patient = Patient(
                id=pid,
                patient_code=patient_code,
                name=name,
                phone=phone,
                email=email,
                address=address,
                created_at=now,
                updated_at=now,
            )
            tables.patients[pid] = patient
            return patient

    def update(self, patient_id: int, *, changes: dict) -> Optional[Patient]:
        with store_cursor(self._store) as tables:
            current = tables.patients.get(int(patient_id))
            if not current:
                return None
            updated = replace(current, **changes, updated_at=now_local())
            tables.patients[current.id] = updated
            return updated

    def delete(self, patient_id: int) -> bool:
        with store_cursor(self._store) as tables:
            return tables.patients.pop(int(patient_id), None) is not None
