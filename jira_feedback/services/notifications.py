"""User-visible notifications: short messages and the wait indicator."""

import logging
from collections import deque
from typing import Protocol

logger = logging.getLogger(__name__)


class WaitIndicator(Protocol):
    def cancel(self) -> None: ...


class Notifier(Protocol):
    def notify(self, message: str) -> None: ...

    def show_wait(self, title: str, message: str) -> WaitIndicator: ...


class LoggedWaitIndicator:
    """Wait indicator whose lifetime is written to the log.

    ``cancel`` is idempotent.
    """

    def __init__(self, title: str, message: str) -> None:
        self.title = title
        self.message = message
        self.cancelled = False
        logger.info("%s %s", title, message)

    def cancel(self) -> None:
        if self.cancelled:
            return
        self.cancelled = True
        logger.debug("Wait indicator closed: %s", self.title)


class LoggingNotifier:
    """Notifier for headless use: every notification is an INFO log line."""

    def notify(self, message: str) -> None:
        logger.info("Notification: %s", message)

    def show_wait(self, title: str, message: str) -> LoggedWaitIndicator:
        return LoggedWaitIndicator(title, message)


class RecordingNotifier(LoggingNotifier):
    """Keeps the most recent notifications in memory, in emission order."""

    def __init__(self, max_size: int = 100) -> None:
        self.messages: deque[str] = deque(maxlen=max_size)
        self.indicators: deque[LoggedWaitIndicator] = deque(maxlen=max_size)

    def notify(self, message: str) -> None:
        super().notify(message)
        self.messages.append(message)

    def show_wait(self, title: str, message: str) -> LoggedWaitIndicator:
        indicator = super().show_wait(title, message)
        self.indicators.append(indicator)
        return indicator
