from __future__ import annotations

from datetime import date

import pytest

from hygienist_visits.core.enums import VisitStatus
from hygienist_visits.core.exceptions import NotFoundError, ValidationError
from hygienist_visits.hygienists.memory_hygienist_repository import MemoryHygienistRepository
from hygienist_visits.patients.memory_patient_repository import MemoryPatientRepository
from hygienist_visits.visits.memory_visit_repository import MemoryVisitRecordRepository
from hygienist_visits.visits.service import VisitRecordService


@pytest.fixture()
def service(store):
    patients = MemoryPatientRepository(store)
    hygienists = MemoryHygienistRepository(store)
    patients.create(patient_code="P001", name="Taro")
    patients.create(patient_code="P002", name="Hanako")
    hygienists.create(staff_code="H001", name="Misaki")
    return VisitRecordService(MemoryVisitRecordRepository(store), patients, hygienists)


def _payload(**overrides):
    data = {"patient_id": 1, "hygienist_id": 1, "visit_date": "2024-01-15", "start_time": "09:00", "end_time": "10:00"}
    data.update(overrides)
    return data


def test_create_defaults_to_scheduled(service):
    record = service.create(_payload())
    assert record.status == VisitStatus.SCHEDULED
    assert record.visit_date == date(2024, 1, 15)
    assert record.cancellation_reason is None


def test_create_cancelled_requires_reason(service):
    with pytest.raises(ValidationError) as ei:
        service.create(_payload(status="cancelled"))
    assert "cancellation_reason" in ei.value.details


def test_create_rejects_unknown_patient(service):
    with pytest.raises(NotFoundError) as ei:
        service.create(_payload(patient_id=99))
    assert ei.value.code == "PATIENT_NOT_FOUND"


def test_create_rejects_single_digit_hour(service):
    with pytest.raises(ValidationError) as ei:
        service.create(_payload(start_time="9:05", end_time="10:30"))
    assert "start_time" in ei.value.details


def test_change_status_requires_exact_status_value(service):
    record = service.create(_payload())

    with pytest.raises(ValidationError) as ei:
        service.change_status(record.id, " CANCELLED ", "sick")
    assert "status" in ei.value.details
    assert service.get(record.id).status == VisitStatus.SCHEDULED


def test_list_applies_limit_only_when_given(service):
    for day in (15, 16, 17):
        service.create(_payload(visit_date=f"2024-01-{day}"))

    assert len(service.list(year=2024, month=1)) == 3
    assert [r.visit_date.day for r in service.list(year=2024, month=1, limit=2)] == [15, 16]


def test_change_status_clears_reason_when_leaving_cancelled(service):
    record = service.create(_payload())

    cancelled = service.change_status(record.id, "cancelled", "sick")
    assert cancelled.status == VisitStatus.CANCELLED
    assert cancelled.cancellation_reason == "sick"

    completed = service.change_status(record.id, "completed")
    assert completed.status == VisitStatus.COMPLETED
    assert completed.cancellation_reason is None


def test_update_revalidates_merged_record(service):
    record = service.create(_payload())

    with pytest.raises(ValidationError):
        service.update(record.id, {"end_time": "08:00"})

    updated = service.update(record.id, {"notes": "brought X-ray"})
    assert updated.notes == "brought X-ray"
    assert updated.start_time == "09:00"


def test_failed_update_leaves_record_untouched(service):
    record = service.create(_payload())
    with pytest.raises(ValidationError):
        service.update(record.id, {"status": "cancelled"})
    assert service.get(record.id).status == VisitStatus.SCHEDULED


def test_list_filters_by_month_and_day(service):
    service.create(_payload(visit_date="2024-01-15"))
    service.create(_payload(visit_date="2024-01-31", patient_id=2))
    service.create(_payload(visit_date="2024-02-01"))

    assert len(service.list(year=2024, month=1)) == 2
    assert len(service.list(year=2024, month=1, patient_id=2)) == 1
    assert len(service.list_for_day(date(2024, 2, 1))) == 1
    assert len(service.list(year=2024)) == 3


def test_list_rejects_month_out_of_range(service):
    with pytest.raises(ValidationError) as ei:
        service.list(year=2024, month=13)
    assert ei.value.code == "INVALID_MONTH"


def test_calendar_groups_by_day(service):
    service.create(_payload(visit_date="2024-01-15", start_time="13:00", end_time="14:00"))
    service.create(_payload(visit_date="2024-01-15"))
    service.create(_payload(visit_date="2024-01-02"))

    days = service.calendar(2024, 1)

    assert list(days) == ["2024-01-02", "2024-01-15"]
    assert [r.start_time for r in days["2024-01-15"]] == ["09:00", "13:00"]


def test_monthly_overview_counts_completed_only(service):
    a = service.create(_payload())
    b = service.create(_payload(patient_id=2))
    service.create(_payload(visit_date="2024-01-20"))
    service.change_status(a.id, "completed")
    service.change_status(b.id, "completed")

    overview = service.monthly_overview(2024, 1)

    assert overview.total_completed == 2
    assert sorted((s.entity_id, s.visit_count) for s in overview.patient_stats) == [(1, 1), (2, 1)]
    assert [(s.name, s.visit_count) for s in overview.hygienist_stats] == [("Misaki", 2)]
    assert len(overview.visit_records) == 3


def test_delete_then_get_raises(service):
    record = service.create(_payload())
    service.delete(record.id)
    with pytest.raises(NotFoundError):
        service.get(record.id)
