from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Patient


class PatientRepository(Protocol):
    """Repository interface for Patient.

    Note (DIP): the service depends on this interface, not on a concrete store.
    """

    def list_all(self, *, q: Optional[str] = None) -> Sequence[Patient]:
        raise NotImplementedError

    def get_by_id(self, patient_id: int) -> Optional[Patient]:
        raise NotImplementedError

    def get_by_code(self, patient_code: str) -> Optional[Patient]:
        raise NotImplementedError

    def create(
        self,
        *,
        patient_code: str,
        name: str,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        address: Optional[str] = None,
    ) -> Patient:
        raise NotImplementedError

    def update(self, patient_id: int, *, changes: dict) -> Optional[Patient]:
        raise NotImplementedError

    def delete(self, patient_id: int) -> bool:
        raise NotImplementedError
