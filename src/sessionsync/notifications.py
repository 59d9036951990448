"""Notification sinks — where isolated fetch failures are reported."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

logger = logging.getLogger(__name__)


class NotificationKind(Enum):
    """Notification severity."""

    FAILURE = "failure"
    INFO = "info"


@dataclass(frozen=True)
class Notification:
    """Single human-readable report."""

    kind: NotificationKind
    message: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class NotificationSink(ABC):
    """Fire-and-forget receiver of human-readable reports."""

    @abstractmethod
    def report(self, kind: NotificationKind, message: str) -> None:
        ...


class LoggingNotificationSink(NotificationSink):
    """Writes every report to the log (failures at WARNING)."""

    def report(self, kind: NotificationKind, message: str) -> None:
        level = logging.WARNING if kind is NotificationKind.FAILURE else logging.INFO
        logger.log(level, message, extra={"notification_kind": kind.value})


class MemoryNotificationSink(NotificationSink):
    """Keeps reports in memory for a rendering layer to drain."""

    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    def report(self, kind: NotificationKind, message: str) -> None:
        self.notifications.append(Notification(kind=kind, message=message))

    @property
    def failures(self) -> list[Notification]:
        return [n for n in self.notifications if n.kind is NotificationKind.FAILURE]

    def drain(self) -> list[Notification]:
        """Return and forget all collected notifications."""
        drained, self.notifications = self.notifications, []
        return drained


class CompositeNotificationSink(NotificationSink):
    """Forwards each report to every wrapped sink."""

    def __init__(self, *sinks: NotificationSink) -> None:
        self.sinks = list(sinks)

    def report(self, kind: NotificationKind, message: str) -> None:
        for sink in self.sinks:
            sink.report(kind, message)
