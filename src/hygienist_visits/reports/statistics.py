"""Pure aggregation over visit records.

Nothing here touches storage or raises for bad rows: a record with an unknown
status is listed in ``VisitAggregate.issues`` and left out of every count, and
a record without a usable time range simply has no duration.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol, Sequence, TypeVar

from ..common.datetime_utils import minutes_between
from ..core.enums import VisitStatus
from ..core.exceptions import DataIntegrityError
from ..visits.model import VisitRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VisitAggregate:
    total_visits: int
    completed_visits: int
    cancelled_visits: int
    scheduled_visits: int
    total_minutes: int
    total_hours: float
    average_visit_duration: float
    issues: tuple[str, ...] = ()


class HasTotalVisits(Protocol):
    @property
    def total_visits(self) -> int: ...


T = TypeVar("T", bound=HasTotalVisits)


def visit_duration_minutes(record: VisitRecord) -> Optional[int]:
    """Minutes between start and end; None unless end is strictly after start."""
    return minutes_between(record.start_time, record.end_time)


def compute_monthly_stats(records: Iterable[VisitRecord]) -> VisitAggregate:
    counts = {s: 0 for s in VisitStatus}
    durations: list[int] = []
    issues: list[str] = []

    for record in records:
        try:
            status = VisitStatus.parse(record.status)
        except DataIntegrityError as e:
            issues.append(f"visit record {record.id}: {e.message}")
            logger.warning("skipping visit record %s in statistics: %s", record.id, e.message)
            continue

        counts[status] += 1
        minutes = visit_duration_minutes(record)
        if minutes is not None:
            durations.append(minutes)

    total_minutes = sum(durations)
    return VisitAggregate(
        total_visits=sum(counts.values()),
        completed_visits=counts[VisitStatus.COMPLETED],
        cancelled_visits=counts[VisitStatus.CANCELLED],
        scheduled_visits=counts[VisitStatus.SCHEDULED],
        total_minutes=total_minutes,
        total_hours=total_minutes / 60,
        average_visit_duration=(total_minutes / len(durations)) if durations else 0.0,
        issues=tuple(issues),
    )


def sort_by_total_visits(items: Sequence[T]) -> list[T]:
    """Descending by total visits; ties keep their incoming order."""
    return sorted(items, key=lambda item: item.total_visits, reverse=True)
