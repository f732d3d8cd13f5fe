from __future__ import annotations

from enum import Enum

from .exceptions import DataIntegrityError


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    USER = "user"


class VisitStatus(str, Enum):
    """Lifecycle state of a visit record as stored."""

    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, value) -> "VisitStatus":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise DataIntegrityError(f"Unknown visit status: {value!r}")

    @property
    def label(self) -> str:
        return {
            VisitStatus.SCHEDULED: "Scheduled",
            VisitStatus.COMPLETED: "Completed",
            VisitStatus.CANCELLED: "Cancelled",
        }[self]


class Severity(str, Enum):
    """Severity of a user-facing notification."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    SUCCESS = "success"
