from __future__ import annotations

import logging
from datetime import date, datetime

from werkzeug.security import generate_password_hash

from ..core.enums import Role, VisitStatus
from ..hygienists.model import Hygienist
from ..patients.model import Patient
from ..users.model import User
from ..visits.model import VisitRecord
from .memory_store import InMemoryStore, store_cursor

logger = logging.getLogger(__name__)


def seed_demo_data(store: InMemoryStore, *, now: datetime | None = None) -> None:
    """Fill an empty store with demo master data, visits and accounts."""

    now = now or datetime.now()

    with store_cursor(store) as tables:
        if tables.patients or tables.hygienists:
            logger.info("store already populated, skipping demo seed")
            return

        def add_patient(code: str, name: str, phone: str, email: str) -> int:
            pid = tables.next_id("patients")
            tables.patients[pid] = Patient(
                id=pid,
                patient_code=code,
                name=name,
                phone=phone,
                email=email,
                address=None,
                created_at=now,
                updated_at=now,
            )
            return pid

        def add_hygienist(code: str, name: str, license_number: str, phone: str) -> int:
            hid = tables.next_id("hygienists")
            tables.hygienists[hid] = Hygienist(
                id=hid,
                staff_code=code,
                name=name,
                license_number=license_number,
                phone=phone,
                email=None,
                created_at=now,
                updated_at=now,
            )
            return hid

        def add_visit(patient_id: int, hygienist_id: int, visit_date: date, start: str, end: str) -> None:
            vid = tables.next_id("visit_records")
            tables.visit_records[vid] = VisitRecord(
                id=vid,
                patient_id=patient_id,
                hygienist_id=hygienist_id,
                visit_date=visit_date,
                start_time=start,
                end_time=end,
                status=VisitStatus.COMPLETED,
                created_at=now,
                updated_at=now,
            )

        def add_user(username: str, password: str, role: Role, hygienist_id: int | None = None) -> None:
            uid = tables.next_id("users")
            tables.users[uid] = User(
                id=uid,
                username=username,
                password_hash=generate_password_hash(password),
                role=role,
                hygienist_id=hygienist_id,
            )

        p1 = add_patient("P001", "Taro Tanaka", "090-1234-5678", "tanaka@example.com")
        p2 = add_patient("P002", "Hanako Sato", "090-2345-6789", "sato@example.com")
        add_patient("P003", "Ichiro Suzuki", "090-3456-7890", "suzuki@example.com")

        h1 = add_hygienist("H001", "Misaki Yamada", "DH12345", "090-4567-8901")
        h2 = add_hygienist("H002", "Kenta Takahashi", "DH23456", "090-5678-9012")

        add_visit(p1, h1, date(2024, 1, 15), "09:00", "10:00")
        add_visit(p2, h2, date(2024, 1, 15), "10:30", "11:30")

        add_user("admin", "admin123", Role.ADMIN)
        add_user("user", "user123", Role.USER, hygienist_id=h1)

    logger.info("demo seed ready")
