import logging
from dataclasses import dataclass
from enum import Enum

log = logging.getLogger(__name__)


class NotificationLevel(str, Enum):
    """Severity of a user-facing notification."""

    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """A toast-level message for the user."""

    level: NotificationLevel
    message: str


class Notifier:
    """Collects notifications until the client picks them up."""

    def __init__(self):
        self._pending: list[Notification] = []

    def success(self, message: str) -> None:
        self._push(Notification(level=NotificationLevel.SUCCESS, message=message))

    def error(self, message: str) -> None:
        self._push(Notification(level=NotificationLevel.ERROR, message=message))

    def _push(self, notification: Notification) -> None:
        _msg = f"Notification {notification.level.value}: {notification.message}"
        log.info(_msg)
        self._pending.append(notification)

    @property
    def pending(self) -> list[Notification]:
        return list(self._pending)

    def drain(self) -> list[Notification]:
        """Return and clear the pending notifications."""
        drained, self._pending = self._pending, []
        return drained
