"""Visit status transitions.

Any status may move to any other. The only rule is about data: a visit that
enters (or stays in) ``cancelled`` needs a non-empty cancellation reason given
with the transition, and leaving ``cancelled`` drops the reason.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import VisitStatus
from ..core.exceptions import DataIntegrityError, ValidationError


@dataclass(frozen=True)
class StatusChange:
    previous: Optional[VisitStatus]
    status: VisitStatus
    cancellation_reason: Optional[str]

    @property
    def changed(self) -> bool:
        return self.previous != self.status


def transition(
    current: Optional[VisitStatus],
    new_status,
    cancellation_reason: Optional[str] = None,
) -> StatusChange:
    try:
        status = VisitStatus.parse(new_status)
    except DataIntegrityError:
        # input, not stored data
        raise ValidationError("Select a valid status", details={"status": "Select a valid status"})
    reason = (cancellation_reason or "").strip() or None

    if status == VisitStatus.CANCELLED:
        if not reason:
            raise ValidationError(
                "Cancellation reason is required when a visit is cancelled",
                details={"cancellation_reason": "Cancellation reason is required when a visit is cancelled"},
            )
        return StatusChange(previous=current, status=status, cancellation_reason=reason)

    return StatusChange(previous=current, status=status, cancellation_reason=None)
