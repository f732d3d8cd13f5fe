from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Hygienist


class HygienistRepository(Protocol):
    def list_all(self, *, q: Optional[str] = None) -> Sequence[Hygienist]:
        raise NotImplementedError

    def get_by_id(self, hygienist_id: int) -> Optional[Hygienist]:
        raise NotImplementedError

    def get_by_code(self, staff_code: str) -> Optional[Hygienist]:
        raise NotImplementedError

    def create(
        self,
        *,
        staff_code: str,
        name: str,
        license_number: Optional[str] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
    ) -> Hygienist:
        raise NotImplementedError

    def update(self, hygienist_id: int, *, changes: dict) -> Optional[Hygienist]:
        raise NotImplementedError

    def delete(self, hygienist_id: int) -> bool:
        raise NotImplementedError
