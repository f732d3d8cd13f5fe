from __future__ import annotations

import copy
from dataclasses import dataclass
from datetime import date

from hygienist_visits.core.enums import VisitStatus
from hygienist_visits.reports.statistics import compute_monthly_stats, sort_by_total_visits, visit_duration_minutes
from hygienist_visits.visits.model import VisitRecord


def _rec(rid: int, status, start=None, end=None, reason=None) -> VisitRecord:
    return VisitRecord(
        id=rid,
        patient_id=1,
        hygienist_id=1,
        visit_date=date(2024, 1, 15),
        start_time=start,
        end_time=end,
        status=status,
        cancellation_reason=reason,
    )


def test_end_to_end_month():
    records = [
        _rec(1, VisitStatus.COMPLETED, "09:00", "10:00"),
        _rec(2, VisitStatus.COMPLETED, "14:00", "15:30"),
        _rec(3, VisitStatus.CANCELLED, reason="sick"),
    ]

    stats = compute_monthly_stats(records)

    assert stats.total_visits == 3
    assert stats.completed_visits == 2
    assert stats.cancelled_visits == 1
    assert stats.scheduled_visits == 0
    assert stats.total_minutes == 150
    assert stats.total_hours == 2.5
    assert stats.average_visit_duration == 75
    assert stats.issues == ()


def test_inverted_or_partial_times_have_no_duration():
    inverted = _rec(1, VisitStatus.COMPLETED, "10:00", "09:00")
    start_only = _rec(2, VisitStatus.SCHEDULED, "10:00", None)
    good = _rec(3, VisitStatus.COMPLETED, "09:00", "09:30")

    assert visit_duration_minutes(inverted) is None
    assert visit_duration_minutes(start_only) is None

    stats = compute_monthly_stats([inverted, start_only, good])
    assert stats.total_visits == 3
    assert stats.total_hours == 0.5
    assert stats.average_visit_duration == 30


def test_empty_input_gives_zeroes():
    stats = compute_monthly_stats([])
    assert stats.total_visits == 0
    assert stats.total_hours == 0
    assert stats.average_visit_duration == 0


def test_unknown_status_is_reported_not_counted():
    records = [_rec(1, "postponed", "09:00", "10:00"), _rec(2, VisitStatus.SCHEDULED)]

    stats = compute_monthly_stats(records)

    assert stats.total_visits == 1
    assert stats.scheduled_visits == 1
    assert stats.total_minutes == 0
    assert len(stats.issues) == 1
    assert "visit record 1" in stats.issues[0]


def test_same_input_gives_same_output_and_is_not_mutated():
    records = [
        _rec(1, VisitStatus.COMPLETED, "09:00", "10:00"),
        _rec(2, VisitStatus.SCHEDULED),
    ]
    before = copy.deepcopy(records)

    first = compute_monthly_stats(records)
    second = compute_monthly_stats(records)

    assert first == second
    assert records == before


def test_generator_input_is_accepted():
    stats = compute_monthly_stats(r for r in [_rec(1, VisitStatus.COMPLETED, "09:00", "09:45")])
    assert stats.average_visit_duration == 45


@dataclass(frozen=True)
class _Row:
    name: str
    total_visits: int


def test_sort_by_total_visits_is_descending_and_stable():
    rows = [_Row("a", 1), _Row("b", 3), _Row("c", 1), _Row("d", 3)]
    assert [r.name for r in sort_by_total_visits(rows)] == ["b", "d", "a", "c"]
    assert [r.name for r in rows] == ["a", "b", "c", "d"]
