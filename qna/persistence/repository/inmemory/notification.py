"""In-memory notification repository for testing."""

from typing import List, Optional

from qna.domain.model import Notification
from qna.domain.repository.notification import NotificationRepository
from qna.domain.value import NotificationId, UserId

from .store import InMemoryStore


class InMemoryNotificationRepository(NotificationRepository):
    """In-memory implementation of NotificationRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self._notifications = store.notifications

    async def find_by_id(self, notification_id: NotificationId) -> Optional[Notification]:
        """Find a notification by ID."""
        return self._notifications.get(notification_id)

    async def find_by_user(
        self,
        user_id: UserId,
        unread_only: bool = False,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Notification]:
        """Find a user's notifications, newest first."""
        notifications = [
            n
            for n in self._notifications.values()
            if n.user_id == user_id and not (unread_only and n.is_read)
        ]
        notifications.sort(key=lambda n: n.created_at, reverse=True)
        return notifications[offset : offset + limit]

    async def count_unread(self, user_id: UserId) -> int:
        """Count unread notifications."""
        return sum(
            1
            for n in self._notifications.values()
            if n.user_id == user_id and not n.is_read
        )

    async def save(self, notification: Notification) -> Notification:
        """Save notification."""
        self._notifications[notification.id] = notification
        return notification

    async def mark_read(self, notification_id: NotificationId) -> bool:
        """Mark one notification read."""
        notification = self._notifications.get(notification_id)
        if not notification:
            return False
        self._notifications[notification_id] = notification.model_copy(
            update={"is_read": True}
        )
        return True

    async def mark_all_read(self, user_id: UserId) -> int:
        """Mark all of a user's notifications read."""
        changed = 0
        for notification in list(self._notifications.values()):
            if notification.user_id == user_id and not notification.is_read:
                self._notifications[notification.id] = notification.model_copy(
                    update={"is_read": True}
                )
                changed += 1
        return changed
