from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Hygienist:
    """Domain entity: a dental hygienist (staff member)."""

    id: int
    staff_code: str
    name: str
    license_number: Optional[str]
    phone: Optional[str]
    email: Optional[str]
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "staff_code": self.staff_code,
            "name": self.name,
            "license_number": self.license_number,
            "phone": self.phone,
            "email": self.email,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
