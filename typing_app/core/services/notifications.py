"""User-facing notification sinks for level completions and engine errors."""

from __future__ import annotations

import logging
from typing import Protocol

from typing_app.core.models import LevelCompleted

logger = logging.getLogger(__name__)


class NotificationSink(Protocol):
    def notify_level_completed(self, event: LevelCompleted) -> None:
        ...

    def notify_error(self, message: str) -> None:
        ...


class LoggingNotificationSink:
    """Default sink used when no UI is attached."""

    def notify_level_completed(self, event: LevelCompleted) -> None:
        logger.info(
            "Level %d completed (best %d WPM); level %d target: %s WPM",
            event.completed_level,
            event.best_wpm,
            event.next_level,
            event.next_level_wpm_target,
        )

    def notify_error(self, message: str) -> None:
        logger.warning("%s", message)


def deliver_level_completed(sink: NotificationSink, event: LevelCompleted) -> None:
    """Hand ``event`` to ``sink``; a failing sink is logged and otherwise ignored."""
    try:
        sink.notify_level_completed(event)
    except Exception:
        logger.exception("Notification sink failed to deliver level completion")


def deliver_error(sink: NotificationSink, message: str) -> None:
    try:
        sink.notify_error(message)
    except Exception:
        logger.exception("Notification sink failed to deliver error message")
