"""
Notification sink

Fire-and-forget user notices (toasts). The bag and listing flows report
every outcome here; nothing inspects a return value.
"""

import logging
from collections import deque
from typing import Optional, Protocol

from ..models.notification import Notification

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Anything that accepts a notice"""

    def notify(self, title: str, description: str, destructive: bool = False) -> None:
        ...


class NotificationCenter:
    """Logs notices and keeps a bounded history of recent ones"""

    def __init__(self, history_size: int = 50):
        self._history: deque[Notification] = deque(maxlen=history_size)

    def notify(self, title: str, description: str, destructive: bool = False) -> None:
        notification = Notification(
            title=title,
            description=description,
            destructive=destructive,
        )
        self._history.append(notification)
        level = logging.WARNING if destructive else logging.INFO
        logger.log(level, f"{title}: {description}")

    def recent(self, limit: Optional[int] = None) -> list[Notification]:
        """Recent notices, oldest first"""
        items = list(self._history)
        if limit is not None:
            items = items[-limit:] if limit > 0 else []
        return items

    def clear(self) -> None:
        self._history.clear()
