"""Notification sink used to surface staging outcomes to the user."""

from enum import StrEnum
from typing import Protocol


class NotificationKind(StrEnum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class Notifier(Protocol):
    """Delivers short user-facing messages."""

    def notify(self, kind: NotificationKind, message: str) -> None:
        """Deliver a message of the given kind."""
