"""
User-facing notifications (the toasts of the builder UI).
"""

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class Notifier(ABC):
    """Passed explicitly into sessions that need to report outcomes."""

    @abstractmethod
    def success(self, title: str, message: str):
        pass

    @abstractmethod
    def error(self, title: str, message: str):
        pass


class LoggingNotifier(Notifier):
    """Writes notifications to the log. Used when no UI is attached."""

    def success(self, title: str, message: str):
        logger.info(f"{title}: {message}")

    def error(self, title: str, message: str):
        logger.error(f"{title}: {message}")
