"""Session notifier adapters (audit/alert sinks)."""

from src.infrastructure.notifications.logger_notifier import LoggerSessionNotifier
from src.infrastructure.notifications.noop_notifier import NoOpSessionNotifier

__all__ = ["LoggerSessionNotifier", "NoOpSessionNotifier"]
