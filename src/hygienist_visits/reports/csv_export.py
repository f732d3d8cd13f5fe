"""CSV files for monthly reports.

Columns are described once as typed ``Column`` objects (header plus a
formatter for one row type), then written with the stdlib csv writer and
encoded as UTF-8 with BOM so spreadsheet tools pick the right charset.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, Sequence, TypeVar

from ..core.constants import CSV_ENCODING, CSV_MIMETYPE
from ..core.enums import VisitStatus
from .model import MonthlyStats, VisitDetail

T = TypeVar("T")


@dataclass(frozen=True)
class Column(Generic[T]):
    header: str
    format: Callable[[T], object]


@dataclass(frozen=True)
class ExportFile:
    filename: str
    content: bytes
    mimetype: str = CSV_MIMETYPE


def _text(value) -> str:
    return "" if value is None else str(value)


def _number(value: float) -> str:
    rounded = round(float(value), 2)
    return str(int(rounded)) if rounded.is_integer() else str(rounded)


def status_label(status: str) -> str:
    try:
        return VisitStatus(status).label
    except ValueError:
        return status


def _rows(columns: Sequence[Column[T]], items: Iterable[T]) -> list[list[str]]:
    return [[_text(c.format(item)) for c in columns] for item in items]


def _period(stats: MonthlyStats) -> str:
    return f"{stats.year}-{stats.month:02d}"


SUMMARY_COLUMNS: list[Column[MonthlyStats]] = [
    Column("Period", _period),
    Column("Total visits", lambda s: s.total_visits),
    Column("Completed", lambda s: s.completed_visits),
    Column("Cancelled", lambda s: s.cancelled_visits),
    Column("Scheduled", lambda s: s.scheduled_visits),
    Column("Total hours", lambda s: _number(s.total_hours)),
    Column("Average visit duration (min)", lambda s: _number(s.average_visit_duration)),
]

PATIENT_SUMMARY_COLUMNS: list[Column[MonthlyStats]] = SUMMARY_COLUMNS + [
    Column("Completion rate (%)", lambda s: f"{s.completion_rate}%"),
]

PATIENT_DETAIL_COLUMNS: list[Column[VisitDetail]] = [
    Column("Visit date", lambda d: d.visit_date.strftime("%Y-%m-%d")),
    Column("Start time", lambda d: d.start_time),
    Column("End time", lambda d: d.end_time),
    Column("Duration (min)", lambda d: d.duration_minutes),
    Column("Status", lambda d: status_label(d.status)),
    Column("Hygienist", lambda d: d.hygienist_name),
    Column("Staff code", lambda d: d.staff_code),
    Column("Cancellation reason", lambda d: d.cancellation_reason),
    Column("Notes", lambda d: d.notes),
]

HYGIENIST_DETAIL_COLUMNS: list[Column[VisitDetail]] = [
    Column("Visit date", lambda d: d.visit_date.strftime("%Y-%m-%d")),
    Column("Patient", lambda d: d.patient_name),
    Column("Patient code", lambda d: d.patient_code),
    Column("Start time", lambda d: d.start_time),
    Column("End time", lambda d: d.end_time),
    Column("Duration (min)", lambda d: d.duration_minutes),
    Column("Status", lambda d: status_label(d.status)),
    Column("Cancellation reason", lambda d: d.cancellation_reason),
    Column("Notes", lambda d: d.notes),
]


def _encode(rows: list[list[str]]) -> bytes:
    out = io.StringIO()
    writer = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerows(rows)
    return out.getvalue().encode(CSV_ENCODING)


def _safe_name(value: str) -> str:
    return "".join(ch if ch.isalnum() or ch in "-_" else "_" for ch in value.strip()) or "report"


def export_patient_report(stats: MonthlyStats) -> ExportFile:
    subject = stats.subject
    rows: list[list[str]] = [
        ["Patient name", subject.name],
        ["Patient code", subject.code],
        ["Phone", _text(subject.phone)],
        ["Email", _text(subject.email)],
        ["Address", _text(subject.address)],
        [],
        [c.header for c in PATIENT_SUMMARY_COLUMNS],
        *_rows(PATIENT_SUMMARY_COLUMNS, [stats]),
        [],
        [c.header for c in PATIENT_DETAIL_COLUMNS],
        *_rows(PATIENT_DETAIL_COLUMNS, stats.visit_details),
    ]
    filename = f"patient_report_{_safe_name(subject.code)}_{stats.year}_{stats.month:02d}.csv"
    return ExportFile(filename=filename, content=_encode(rows))


def export_hygienist_report(stats: MonthlyStats) -> ExportFile:
    subject = stats.subject
    rows: list[list[str]] = [
        ["Hygienist name", subject.name],
        ["Staff code", subject.code],
        [],
        [c.header for c in SUMMARY_COLUMNS],
        *_rows(SUMMARY_COLUMNS, [stats]),
        [],
        [c.header for c in HYGIENIST_DETAIL_COLUMNS],
        *_rows(HYGIENIST_DETAIL_COLUMNS, stats.visit_details),
    ]
    filename = f"hygienist_report_{_safe_name(subject.code)}_{stats.year}_{stats.month:02d}.csv"
    return ExportFile(filename=filename, content=_encode(rows))
