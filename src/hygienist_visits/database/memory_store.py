from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

from ..hygienists.model import Hygienist
from ..patients.model import Patient
from ..users.model import User
from ..visits.model import VisitRecord

logger = logging.getLogger(__name__)


@dataclass
class StoreTables:
    patients: dict[int, Patient] = field(default_factory=dict)
    hygienists: dict[int, Hygienist] = field(default_factory=dict)
    visit_records: dict[int, VisitRecord] = field(default_factory=dict)
    users: dict[int, User] = field(default_factory=dict)
    sequences: dict[str, int] = field(default_factory=dict)

    def snapshot(self) -> "StoreTables":
        # Rows are frozen dataclasses, so copying the dicts is enough.
        return StoreTables(
            patients=dict(self.patients),
            hygienists=dict(self.hygienists),
            visit_records=dict(self.visit_records),
            users=dict(self.users),
            sequences=dict(self.sequences),
        )

    def next_id(self, table: str) -> int:
        value = self.sequences.get(table, 0) + 1
        self.sequences[table] = value
        return value


class InMemoryStore:
    """Process- or test-scoped storage for all entity tables.

    Create one per application (or per test) and hand it to the repositories;
    there is no module-level instance.
    """

    def __init__(self):
        self._tables = StoreTables()
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    @property
    def tables(self) -> StoreTables:
        return self._tables

    def restore(self, snapshot: StoreTables) -> None:
        self._tables = snapshot

    def clear(self) -> None:
        with self._lock:
            self._tables = StoreTables()


@contextmanager
def store_cursor(store: InMemoryStore) -> Iterator[StoreTables]:
    """Serialize access to the tables; roll back to a snapshot on error."""

    with store.lock:
        snapshot = store.tables.snapshot()
        try:
            yield store.tables
        except Exception:
            logger.debug("rolling back in-memory store after error")
            store.restore(snapshot)
            raise
