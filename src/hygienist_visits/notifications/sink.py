from __future__ import annotations

import itertools
import logging
from collections import deque
from dataclasses import dataclass
from typing import Optional, Protocol

from ..core.constants import NOTIFICATION_QUEUE_LIMIT
from ..core.enums import Severity
from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


@dataclass(frozen=True)
class Notification:
    id: int
    message: str
    severity: Severity
    details: Optional[dict] = None


class NotificationSink(Protocol):
    """Receives (message, severity) pairs meant for the user."""

    def notify(self, message: str, severity: Severity = Severity.INFO, *, details: Optional[dict] = None) -> Notification:
        raise NotImplementedError


class NotificationQueue(NotificationSink):
    """Bounded in-memory sink; the oldest entries drop off when full."""

    def __init__(self, *, limit: int = NOTIFICATION_QUEUE_LIMIT):
        self._items: deque[Notification] = deque(maxlen=limit)
        self._ids = itertools.count(1)

    @property
    def items(self) -> list[Notification]:
        return list(self._items)

    def notify(self, message: str, severity: Severity = Severity.INFO, *, details: Optional[dict] = None) -> Notification:
        notification = Notification(id=next(self._ids), message=message, severity=Severity(severity), details=details)
        self._items.append(notification)
        return notification

    def dismiss(self, notification_id: int) -> bool:
        for n in self._items:
            if n.id == notification_id:
                self._items.remove(n)
                return True
        return False

    def clear(self) -> None:
        self._items.clear()


def notify_error(sink: NotificationSink, exc: Exception) -> Notification:
    """Forward a failed call to the sink with a user-readable message."""

    if isinstance(exc, DomainError):
        details = {"code": exc.code}
        if exc.details:
            details["fields"] = exc.details
        return sink.notify(exc.message, Severity.ERROR, details=details)

    logger.error("unexpected error forwarded to notifications", exc_info=exc)
    return sink.notify(UNEXPECTED_ERROR_MESSAGE, Severity.ERROR)
