"""Notifier that writes user notifications to the application log."""

import logging
from dataclasses import dataclass

from photo_portfolio.services.notifications import NotificationKind, Notifier

logger = logging.getLogger(__name__)

_LEVELS = {
    NotificationKind.SUCCESS: logging.INFO,
    NotificationKind.INFO: logging.INFO,
    NotificationKind.WARNING: logging.WARNING,
    NotificationKind.ERROR: logging.ERROR,
}


@dataclass
class LoggingNotifier(Notifier):
    """Logs notifications until a real delivery channel is wired in."""

    def notify(self, kind: NotificationKind, message: str) -> None:
        """Log a notification at a level matching its kind."""
        logger.log(_LEVELS[kind], "%s: %s", kind, message)
