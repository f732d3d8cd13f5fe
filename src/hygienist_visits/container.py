from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .database.memory_store import InMemoryStore
from .hygienists.memory_hygienist_repository import MemoryHygienistRepository
from .hygienists.service import HygienistService
from .patients.memory_patient_repository import MemoryPatientRepository
from .patients.service import PatientService
from .reports.service import ReportService
from .users.memory_user_repository import MemoryUserRepository
from .users.service import AuthService
from .visits.memory_visit_repository import MemoryVisitRecordRepository
from .visits.service import VisitRecordService


@dataclass(frozen=True)
class Container:
    store: InMemoryStore

    users_repo: MemoryUserRepository
    patients_repo: MemoryPatientRepository
    hygienists_repo: MemoryHygienistRepository
    visits_repo: MemoryVisitRecordRepository

    auth_service: AuthService
    patient_service: PatientService
    hygienist_service: HygienistService
    visit_service: VisitRecordService
    report_service: ReportService


def build_container(*, store: Optional[InMemoryStore] = None) -> Container:
    store = store or InMemoryStore()

    users_repo = MemoryUserRepository(store)
    patients_repo = MemoryPatientRepository(store)
    hygienists_repo = MemoryHygienistRepository(store)
    visits_repo = MemoryVisitRecordRepository(store)

    auth_service = AuthService(users_repo)
    patient_service = PatientService(patients_repo, visits_repo)
    hygienist_service = HygienistService(hygienists_repo, visits_repo)
    visit_service = VisitRecordService(visits_repo, patients_repo, hygienists_repo)
    report_service = ReportService(visit_service, patients_repo, hygienists_repo)

    return Container(
        store=store,
        users_repo=users_repo,
        patients_repo=patients_repo,
        hygienists_repo=hygienists_repo,
        visits_repo=visits_repo,
        auth_service=auth_service,
        patient_service=patient_service,
        hygienist_service=hygienist_service,
        visit_service=visit_service,
        report_service=report_service,
    )
