from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..database.memory_store import InMemoryStore, store_cursor
from .model import Hygienist
from .repository import HygienistRepository


class MemoryHygienistRepository(HygienistRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    def list_all(self, *, q: Optional[str] = None) -> Sequence[Hygienist]:
        with store_cursor(self._store) as tables:
            rows = sorted(tables.hygienists.values(), key=lambda h: h.id)
        if q:
            needle = q.strip().lower()
            rows = [
                h
                for h in rows
                if needle in h.name.lower()
                or needle in h.staff_code.lower()
                or needle in (h.license_number or "").lower()
            ]
        return rows

    def get_by_id(self, hygienist_id: int) -> Optional[Hygienist]:
        with store_cursor(self._store) as tables:
            return tables.hygienists.get(int(hygienist_id))

    def get_by_code(self, staff_code: str) -> Optional[Hygienist]:
        with store_cursor(self._store) as tables:
            for h in tables.hygienists.values():
                if h.staff_code == staff_code:
                    return h
        return None

    def create(
        self,
        *,
        staff_code: str,
        name: str,
        license_number: Optional[str] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
    ) -> Hygienist:
        now = now_local()
        with store_cursor(self._store) as tables:
            hid = tables.next_id("hygienists")
            hygienist = Hygienist(
                id=hid,
                staff_code=staff_code,
                name=name,
                license_number=license_number,
                phone=phone,
                email=email,
                created_at=now,
                updated_at=now,
            )
            tables.hygienists[hid] = hygienist
            return hygienist

    def update(self, hygienist_id: int, *, changes: dict) -> Optional[Hygienist]:
        with store_cursor(self._store) as tables:
            current = tables.hygienists.get(int(hygienist_id))
            if not current:
                return None
            updated = replace(current, **changes, updated_at=now_local())
            tables.hygienists[current.id] = updated
            return updated

    def delete(self, hygienist_id: int) -> bool:
        with store_cursor(self._store) as tables:
            return tables.hygienists.pop(int(hygienist_id), None) is not None
