"""
Notification Center
In-app notifications persisted under the 'notifications' storage key.

Handles:
- Adding notifications (newest first, unread)
- Read/unread tracking and unread count
- Removal and clearing
- Expiry of success notifications after SUCCESS_TTL_SECONDS
"""

from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional

from maquirent.buisness.core.collection_store import generate_id
from maquirent.buisness.core.dates import isoformat_z, parse_datetime, utcnow
from maquirent.data.collections import NOTIFICATIONS_KEY
from maquirent.data.local_storage import LocalStorage
from maquirent.utils.logger import get_logger

logger = get_logger("maquirent.buisness.core.notifications")

NOTIFICATION_TYPES = ('info', 'warning', 'error', 'success')
SUCCESS_TTL_SECONDS = 5


class NotificationCenter:
    """
    Args:
        storage: LocalStorage instance
        clock: Returns the current naive UTC datetime (injectable for tests)
    """

    def __init__(self, storage: LocalStorage, clock: Callable[[], datetime] = utcnow):
        self.storage = storage
        self._clock = clock

    def _load(self) -> List[Dict[str, Any]]:
        notifications = self.storage.get_item(NOTIFICATIONS_KEY, [])
        return notifications if isinstance(notifications, list) else []

    def _save(self, notifications: List[Dict[str, Any]]) -> None:
        self.storage.set_item(NOTIFICATIONS_KEY, notifications)

    def _is_expired(self, notification: Dict[str, Any], now: datetime) -> bool:
        expires_at = parse_datetime(notification.get('expiresAt'))
        return expires_at is not None and expires_at <= now

    def list(self) -> List[Dict[str, Any]]:
        """Current notifications, newest first. Expired ones are dropped."""
        notifications = self._load()
        now = self._clock()
        live = [n for n in notifications if not self._is_expired(n, now)]
        if len(live) != len(notifications):
            self._save(live)
        return live

    def unread_count(self) -> int:
        return sum(1 for notification in self.list() if not notification.get('read'))

    def add(self, notification: Dict[str, Any]) -> str:
        """
        Add a notification.

        Args:
            notification: userId, type, title, message and optional actionUrl

        Returns:
            str: The new notification's id

        Raises:
            ValueError: If the type is not one of NOTIFICATION_TYPES
        """
        notification_type = notification.get('type', 'info')
        if notification_type not in NOTIFICATION_TYPES:
            raise ValueError(f"Invalid notification type: {notification_type}")

        now = self._clock()
        new_notification = {
            **notification,
            'type': notification_type,
            'id': generate_id(),
            'createdAt': isoformat_z(now),
            'read': False,
        }
        if notification_type == 'success':
            new_notification['expiresAt'] = isoformat_z(now + timedelta(seconds=SUCCESS_TTL_SECONDS))

        self._save([new_notification] + self.list())
        logger.debug(f"Notification {new_notification['id']} added ({notification_type})")
        return new_notification['id']

    def mark_as_read(self, notification_id: str) -> bool:
        notifications = self.list()
        found = False
        for notification in notifications:
            if notification.get('id') == notification_id:
                notification['read'] = True
                notification['readAt'] = isoformat_z(self._clock())
                found = True
        if found:
            self._save(notifications)
        return found

    def mark_all_as_read(self) -> int:
        notifications = self.list()
        read_at = isoformat_z(self._clock())
        for notification in notifications:
            notification['read'] = True
            notification['readAt'] = read_at
        self._save(notifications)
        return len(notifications)

    def remove(self, notification_id: str) -> bool:
        notifications = self.list()
        remaining = [n for n in notifications if n.get('id') != notification_id]
        if len(remaining) == len(notifications):
            return False
        self._save(remaining)
        return True

    def clear_all(self) -> None:
        self._save([])
