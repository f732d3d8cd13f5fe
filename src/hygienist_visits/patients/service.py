from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..common.payload import pick
from ..core.exceptions import ConflictError, NotFoundError
from ..validation.engine import check_payload
from ..validation.rules import FIELD_DISPLAY_NAMES, PATIENT_RULES
from ..visits.repository import VisitRecordRepository
from .model import Patient
from .repository import PatientRepository

logger = logging.getLogger(__name__)

PATIENT_FIELDS = ("patient_code", "name", "phone", "email", "address")


class PatientService:
    """Use case: manage patient master data."""

    def __init__(self, patients: PatientRepository, visits: VisitRecordRepository):
        self._patients = patients
        self._visits = visits

    def list(self, *, q: Optional[str] = None) -> Sequence[Patient]:
        return self._patients.list_all(q=q)

    def get(self, patient_id: int) -> Patient:
        patient = self._patients.get_by_id(int(patient_id))
        if not patient:
            raise NotFoundError("Patient not found", code="PATIENT_NOT_FOUND")
        return patient

    def create(self, payload: Mapping[str, Any]) -> Patient:
        data = pick(payload, PATIENT_FIELDS)
        check_payload(PATIENT_RULES, data, display_names=FIELD_DISPLAY_NAMES)

        if self._patients.get_by_code(data["patient_code"]):
            raise ConflictError("Patient code already exists", details={"patient_code": data["patient_code"]})

        patient = self._patients.create(
            patient_code=data["patient_code"],
            name=data["name"],
            phone=data.get("phone"),
            email=data.get("email"),
            address=data.get("address"),
        )
        logger.info("patient %s created (%s)", patient.id, patient.patient_code)
        return patient

    def update(self, patient_id: int, changes: Mapping[str, Any]) -> Patient:
        current = self.get(patient_id)
        data = pick(changes, PATIENT_FIELDS)

        merged = {f: getattr(current, f) for f in PATIENT_FIELDS}
        merged.update(data)
        check_payload(PATIENT_RULES, merged, display_names=FIELD_DISPLAY_NAMES)

        code = merged["patient_code"]
        if code != current.patient_code:
            other = self._patients.get_by_code(code)
            if other and other.id != current.id:
                raise ConflictError("Patient code already exists", details={"patient_code": code})

        updated = self._patients.update(current.id, changes=data)
        if not updated:
            raise NotFoundError("Patient not found", code="PATIENT_NOT_FOUND")
        return updated

    def delete(self, patient_id: int) -> None:
        patient = self.get(patient_id)
        refs = self._visits.count_references(patient_id=patient.id)
        if refs:
            raise ConflictError(
                "Patient has visit records and cannot be deleted",
                details={"visit_records": refs},
            )
        self._patients.delete(patient.id)
        logger.info("patient %s deleted", patient.id)
