from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from ..common.validators import require_positive_int, require_year, require_year_month
from ..core.enums import VisitStatus
from ..core.exceptions import NotFoundError
from ..hygienists.repository import HygienistRepository
from ..patients.repository import PatientRepository
from ..visits.model import VisitRecord
from ..visits.service import VisitRecordService
from .model import ComparisonReport, MonthlyStats, ReportSubject, VisitDetail
from .statistics import compute_monthly_stats, sort_by_total_visits, visit_duration_minutes

logger = logging.getLogger(__name__)

NOT_SET = "Not set"


class ReportService:
    """Use case: monthly, yearly and comparison statistics per patient or hygienist."""

    def __init__(
        self,
        visits: VisitRecordService,
        patients: PatientRepository,
        hygienists: HygienistRepository,
    ):
        self._visits = visits
        self._patients = patients
        self._hygienists = hygienists

    # ---- patients ----

    def patient_monthly_stats(self, patient_id: int, year: int, month: int) -> MonthlyStats:
        subject = self._patient_subject(patient_id)
        y, m = require_year_month(year, month)
        records = self._visits.list(year=y, month=m, patient_id=subject.id)
        return self._build(subject, y, m, records)

    def patient_yearly_stats(self, patient_id: int, year: int) -> list[MonthlyStats]:
        y = require_year(year)
        return self._yearly(lambda m: self.patient_monthly_stats(patient_id, y, m))

    def patient_comparison(self, year: int, month: int) -> ComparisonReport:
        y, m = require_year_month(year, month)
        ids = {r.patient_id for r in self._visits.list(year=y, month=m)}
        subjects = [s for s in (self._patient_subject_or_none(i) for i in ids) if s]
        return self._compare("patient", y, m, subjects)

    # ---- hygienists ----

    def hygienist_monthly_stats(self, hygienist_id: int, year: int, month: int) -> MonthlyStats:
        subject = self._hygienist_subject(hygienist_id)
        y, m = require_year_month(year, month)
        records = self._visits.list(year=y, month=m, hygienist_id=subject.id)
        return self._build(subject, y, m, records)

    def hygienist_yearly_stats(self, hygienist_id: int, year: int) -> list[MonthlyStats]:
        y = require_year(year)
        return self._yearly(lambda m: self.hygienist_monthly_stats(hygienist_id, y, m))

    def hygienist_comparison(self, year: int, month: int) -> ComparisonReport:
        y, m = require_year_month(year, month)
        ids = {r.hygienist_id for r in self._visits.list(year=y, month=m)}
        subjects = [s for s in (self._hygienist_subject_or_none(i) for i in ids) if s]
        return self._compare("hygienist", y, m, subjects)

    # ---- helpers ----

    def _build(self, subject: ReportSubject, year: int, month: int, records: Sequence[VisitRecord]) -> MonthlyStats:
        aggregate = compute_monthly_stats(records)
        if aggregate.issues:
            logger.warning(
                "%s %s %04d-%02d: %d malformed visit records",
                subject.kind,
                subject.id,
                year,
                month,
                len(aggregate.issues),
            )

        return MonthlyStats(
            subject=subject,
            year=year,
            month=month,
            total_visits=aggregate.total_visits,
            completed_visits=aggregate.completed_visits,
            cancelled_visits=aggregate.cancelled_visits,
            scheduled_visits=aggregate.scheduled_visits,
            total_hours=aggregate.total_hours,
            average_visit_duration=aggregate.average_visit_duration,
            visit_details=[self._detail(r) for r in records],
            issues=list(aggregate.issues),
        )

    def _detail(self, record: VisitRecord) -> VisitDetail:
        patient = self._patients.get_by_id(record.patient_id)
        hygienist = self._hygienists.get_by_id(record.hygienist_id)
        status = record.status.value if isinstance(record.status, VisitStatus) else str(record.status)
        return VisitDetail(
            id=record.id,
            visit_date=record.visit_date,
            start_time=record.start_time,
            end_time=record.end_time,
            status=status,
            duration_minutes=visit_duration_minutes(record),
            patient_id=record.patient_id,
            patient_code=patient.patient_code if patient else "",
            patient_name=patient.name if patient else NOT_SET,
            hygienist_id=record.hygienist_id,
            staff_code=hygienist.staff_code if hygienist else "",
            hygienist_name=hygienist.name if hygienist else NOT_SET,
            cancellation_reason=record.cancellation_reason,
            notes=record.notes,
        )

    @staticmethod
    def _yearly(monthly: Callable[[int], MonthlyStats]) -> list[MonthlyStats]:
        out = []
        for month in range(1, 13):
            stats = monthly(month)
            if stats.total_visits > 0:
                out.append(stats)
        return out

    def _compare(self, kind: str, year: int, month: int, subjects: list[ReportSubject]) -> ComparisonReport:
        subjects.sort(key=lambda s: (s.name, s.id))
        if kind == "patient":
            entries = [self.patient_monthly_stats(s.id, year, month) for s in subjects]
        else:
            entries = [self.hygienist_monthly_stats(s.id, year, month) for s in subjects]

        entries = sort_by_total_visits(entries)
        total = len(entries)
        average = sum(e.total_visits for e in entries) / total if total else 0.0
        return ComparisonReport(
            kind=kind,
            year=year,
            month=month,
            entries=entries,
            total_entities=total,
            average_visits_per_entity=average,
        )

    def _patient_subject_or_none(self, patient_id: int) -> Optional[ReportSubject]:
        p = self._patients.get_by_id(patient_id)
        if not p:
            return None
        return ReportSubject(
            kind="patient",
            id=p.id,
            code=p.patient_code,
            name=p.name,
            phone=p.phone,
            email=p.email,
            address=p.address,
        )

    def _patient_subject(self, patient_id) -> ReportSubject:
        subject = self._patient_subject_or_none(require_positive_int(patient_id, "Patient ID"))
        if not subject:
            raise NotFoundError("Patient not found", code="PATIENT_NOT_FOUND")
        return subject

    def _hygienist_subject_or_none(self, hygienist_id: int) -> Optional[ReportSubject]:
        h = self._hygienists.get_by_id(hygienist_id)
        if not h:
            return None
        return ReportSubject(
            kind="hygienist",
            id=h.id,
            code=h.staff_code,
            name=h.name,
            phone=h.phone,
            email=h.email,
        )

    def _hygienist_subject(self, hygienist_id) -> ReportSubject:
        subject = self._hygienist_subject_or_none(require_positive_int(hygienist_id, "Hygienist ID"))
        if not subject:
            raise NotFoundError("Hygienist not found", code="HYGIENIST_NOT_FOUND")
        return subject
