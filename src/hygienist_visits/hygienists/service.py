from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..common.payload import pick
from ..core.exceptions import ConflictError, NotFoundError
from ..validation.engine import check_payload
from ..validation.rules import FIELD_DISPLAY_NAMES, HYGIENIST_RULES
from ..visits.repository import VisitRecordRepository
from .model import Hygienist
from .repository import HygienistRepository

logger = logging.getLogger(__name__)

HYGIENIST_FIELDS = ("staff_code", "name", "license_number", "phone", "email")


class HygienistService:
    def __init__(self, hygienists: HygienistRepository, visits: VisitRecordRepository):
        self._hygienists = hygienists
        self._visits = visits

    def list(self, *, q: Optional[str] = None) -> Sequence[Hygienist]:
        return self._hygienists.list_all(q=q)

    def get(self, hygienist_id: int) -> Hygienist:
        hygienist = self._hygienists.get_by_id(int(hygienist_id))
        if not hygienist:
            raise NotFoundError("Hygienist not found", code="HYGIENIST_NOT_FOUND")
        return hygienist

    def create(self, payload: Mapping[str, Any]) -> Hygienist:
        data = pick(payload, HYGIENIST_FIELDS)
        check_payload(HYGIENIST_RULES, data, display_names=FIELD_DISPLAY_NAMES)

        if self._hygienists.get_by_code(data["staff_code"]):
            raise ConflictError("Staff code already exists", details={"staff_code": data["staff_code"]})

        hygienist = self._hygienists.create(
            staff_code=data["staff_code"],
            name=data["name"],
            license_number=data.get("license_number"),
            phone=data.get("phone"),
            email=data.get("email"),
        )
        logger.info("hygienist %s created (%s)", hygienist.id, hygienist.staff_code)
        return hygienist

    def update(self, hygienist_id: int, changes: Mapping[str, Any]) -> Hygienist:
        current = self.get(hygienist_id)
        data = pick(changes, HYGIENIST_FIELDS)

        merged = {f: getattr(current, f) for f in HYGIENIST_FIELDS}
        merged.update(data)
        check_payload(HYGIENIST_RULES, merged, display_names=FIELD_DISPLAY_NAMES)

        code = merged["staff_code"]
        if code != current.staff_code:
            other = self._hygienists.get_by_code(code)
            if other and other.id != current.id:
                raise ConflictError("Staff code already exists", details={"staff_code": code})

        updated = self._hygienists.update(current.id, changes=data)
        if not updated:
            raise NotFoundError("Hygienist not found", code="HYGIENIST_NOT_FOUND")
        return updated

    def delete(self, hygienist_id: int) -> None:
        hygienist = self.get(hygienist_id)
        refs = self._visits.count_references(hygienist_id=hygienist.id)
        if refs:
            raise ConflictError(
                "Hygienist has visit records and cannot be deleted",
                details={"visit_records": refs},
            )
        self._hygienists.delete(hygienist.id)
        logger.info("hygienist %s deleted", hygienist.id)
