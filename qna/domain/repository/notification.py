"""Notification repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from qna.domain.model.notification import Notification
from qna.domain.value import NotificationId, UserId


class NotificationRepository(ABC):
    """Repository for Notification entity."""

    @abstractmethod
    async def find_by_id(self, notification_id: NotificationId) -> Optional[Notification]:
        """Find a notification by ID."""
        pass

    @abstractmethod
    async def find_by_user(
        self,
        user_id: UserId,
        unread_only: bool = False,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Notification]:
        """Find a user's notifications, newest first.

        Args:
            user_id: Recipient
            unread_only: Skip notifications already read
            limit: Maximum number to return
            offset: Number to skip
        """
        pass

    @abstractmethod
    async def count_unread(self, user_id: UserId) -> int:
        """Count a user's unread notifications."""
        pass

    @abstractmethod
    async def save(self, notification: Notification) -> Notification:
        """Insert a notification.

        A failure here must not affect the surrounding transaction.
        """
        pass

    @abstractmethod
    async def mark_read(self, notification_id: NotificationId) -> bool:
        """Mark one notification read.

        Returns:
            True if the notification exists
        """
        pass

    @abstractmethod
    async def mark_all_read(self, user_id: UserId) -> int:
        """Mark every unread notification of a user read.

        Returns:
            Number of notifications changed
        """
        pass
