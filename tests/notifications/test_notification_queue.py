from __future__ import annotations

from hygienist_visits.core.enums import Severity
from hygienist_visits.core.exceptions import ConflictError
from hygienist_visits.notifications.sink import UNEXPECTED_ERROR_MESSAGE, NotificationQueue, notify_error


def test_queue_is_bounded_and_drops_oldest():
    queue = NotificationQueue(limit=2)
    queue.notify("a")
    queue.notify("b")
    queue.notify("c")
    assert [n.message for n in queue.items] == ["b", "c"]


def test_dismiss_and_clear():
    queue = NotificationQueue()
    first = queue.notify("a", Severity.WARNING)
    queue.notify("b")

    assert queue.dismiss(first.id) is True
    assert queue.dismiss(first.id) is False
    assert [n.message for n in queue.items] == ["b"]

    queue.clear()
    assert queue.items == []


def test_notify_error_uses_domain_message_and_code():
    queue = NotificationQueue()
    n = notify_error(queue, ConflictError("Patient code already exists", details={"patient_code": "P001"}))

    assert n.severity == Severity.ERROR
    assert n.message == "Patient code already exists"
    assert n.details == {"code": "CONFLICT", "fields": {"patient_code": "P001"}}


def test_notify_error_hides_unexpected_errors():
    queue = NotificationQueue()
    n = notify_error(queue, RuntimeError("db exploded"))
    assert n.message == UNEXPECTED_ERROR_MESSAGE
