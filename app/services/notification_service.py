"""
Notification Service - transient user-facing messages (success/info/error).

The presentation layer polls the feed and shows each entry as a toast.
"""

from collections import deque
from datetime import datetime, timezone
from typing import Deque, List

from app.schemas.schemas import Notification, NotificationLevel

MAX_NOTIFICATIONS = 100


class NotificationFeed:
    """Bounded, per-session feed of notifications, newest last."""

    def __init__(self, maxlen: int = MAX_NOTIFICATIONS):
        self._items: Deque[Notification] = deque(maxlen=maxlen)

    def push(self, level: NotificationLevel, message: str) -> Notification:
        note = Notification(level=level, message=message, timestamp=datetime.now(timezone.utc))
        self._items.append(note)
        return note

    def success(self, message: str) -> Notification:
        return self.push(NotificationLevel.success, message)

    def info(self, message: str) -> Notification:
        return self.push(NotificationLevel.info, message)

    def error(self, message: str) -> Notification:
        return self.push(NotificationLevel.error, message)

    def all(self) -> List[Notification]:
        return list(self._items)

    def drain(self) -> List[Notification]:
        """Return and clear all pending notifications."""
        items = list(self._items)
        self._items.clear()
        return items

    def __len__(self) -> int:
        return len(self._items)
